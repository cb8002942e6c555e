"""Decode raw OpenAPI document text into a Python tree.

Both JSON and YAML are accepted. JSON is tried first because it is the
stricter format and any valid JSON is also valid YAML; YAML is the
fallback. The single public function is :func:`parse_document`.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from specdock.exceptions import SpecParseError


def parse_document(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML.

    Args:
        content: The raw document text.
        hint: Optional format hint (``"json"`` or ``"yaml"``). A ``"json"``
            hint disables the YAML fallback; a ``"yaml"`` hint skips JSON.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the content cannot be parsed as either format, or
            parses to something other than a mapping.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        return _require_mapping(result)

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        raise SpecParseError(
            "Spec must be a JSON/YAML object (got "
            f"{type(result).__name__ if result is not None else 'empty document'})"
        )
    return result


def dump_document(document: dict[str, Any]) -> str:
    """Serialize a document tree as YAML, keeping key insertion order."""
    return yaml.safe_dump(
        document,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
