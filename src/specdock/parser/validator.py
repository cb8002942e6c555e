"""Best-effort structural check of a persisted OpenAPI document.

This is not a full OpenAPI schema validation. It answers "does this file
look like a usable Swagger 2.0 / OpenAPI 3.x document?" by checking:

* the file can be read and decoded as JSON or YAML;
* a supported version marker is present (``swagger: "2.0"`` or an
  ``openapi`` string starting with ``3.``);
* ``info`` is a mapping and ``paths``, when present, is a mapping
  (``paths`` is required before OpenAPI 3.1);
* every internal ``$ref`` resolves.

Any failure raises :class:`~specdock.exceptions.ValidationWarning`. The
registry records it on the published record instead of aborting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from specdock.exceptions import SpecParseError, ValidationWarning
from specdock.models import ValidationResult
from specdock.parser.loader import parse_document
from specdock.parser.resolver import check_refs


def detect_spec_version(spec: dict[str, Any]) -> str:
    """Return the document's version string (``"2.0"`` or ``"3.x.y"``).

    Raises:
        ValidationWarning: If the version is missing or unsupported.
    """
    if "swagger" in spec:
        swagger_ver = str(spec["swagger"])
        if swagger_ver != "2.0":
            raise ValidationWarning(f"Unsupported Swagger version: {swagger_ver}")
        return swagger_ver

    openapi_version = spec.get("openapi")
    if openapi_version is None:
        raise ValidationWarning(
            "Missing 'openapi' or 'swagger' field. Is this an OpenAPI document?"
        )

    version_str = str(openapi_version)
    if not version_str.startswith("3."):
        raise ValidationWarning(f"Unsupported OpenAPI version: {version_str}")
    return version_str


def validate_document(spec: dict[str, Any]) -> ValidationResult:
    """Structurally check an already-parsed document.

    Raises:
        ValidationWarning: On the first structural problem found.
    """
    version = detect_spec_version(spec)

    info = spec.get("info")
    if not isinstance(info, dict):
        raise ValidationWarning("'info' must be a mapping")

    paths = spec.get("paths")
    if paths is None:
        if not version.startswith("3.1"):
            raise ValidationWarning(f"'paths' is required for version {version}")
        paths = {}
    elif not isinstance(paths, dict):
        raise ValidationWarning("'paths' must be a mapping")

    try:
        check_refs(spec)
    except SpecParseError as exc:
        raise ValidationWarning(str(exc)) from exc

    if version == "2.0":
        schemas = spec.get("definitions")
    else:
        schemas = (spec.get("components") or {}).get("schemas")

    title = info.get("title")
    return ValidationResult(
        valid=True,
        spec_version=version,
        title=str(title) if title is not None else None,
        path_count=len(paths),
        schema_count=len(schemas) if isinstance(schemas, dict) else 0,
    )


def validate_spec_file(path: str | Path) -> ValidationResult:
    """Read, decode, and structurally check the document stored at *path*.

    Raises:
        ValidationWarning: If the file cannot be read or decoded, or fails
            any check of :func:`validate_document`.
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ValidationWarning(f"Cannot read spec file {file_path}: {exc}") from exc

    try:
        spec = parse_document(content)
    except SpecParseError as exc:
        raise ValidationWarning(str(exc)) from exc

    return validate_document(spec)
