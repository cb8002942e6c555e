"""Rewrite Swagger 2.0 documents into OpenAPI 3.x shape.

A document whose ``openapi`` field is a string starting with ``"3."`` is
already normalized and passes through with its keys untouched. Anything
else is treated as Swagger 2.0 and rebuilt:

* ``openapi`` becomes ``"3.1.0"``;
* ``info``, ``paths``, ``tags``, ``externalDocs`` and ``security`` are
  carried verbatim;
* ``host`` plus ``basePath`` become ``servers[0].url`` (always ``https``);
* ``definitions`` move to ``components.schemas``.

In both cases the result is guaranteed to expose a ``components.schemas``
mapping and a ``paths`` mapping, possibly empty.
"""

from __future__ import annotations

import logging
from typing import Any

from specdock.exceptions import DocumentShapeError
from specdock.models import SchemaRegistry

logger = logging.getLogger(__name__)

NORMALIZED_VERSION = "3.1.0"

_VERBATIM_KEYS = ("info", "paths", "tags", "externalDocs", "security")


def is_openapi3(document: dict[str, Any]) -> bool:
    """Return True if *document* declares an OpenAPI 3.x version string."""
    version = document.get("openapi")
    return isinstance(version, str) and version.startswith("3.")


def normalize_document(document: dict[str, Any]) -> dict[str, Any]:
    """Return an OpenAPI 3.x-shaped tree for *document*.

    The input is never mutated. For OpenAPI 3.x input the returned dict is
    a shallow copy, so ``paths`` and ``components.schemas`` are the very
    same objects the caller passed in unless they had to be created.

    Args:
        document: A parsed Swagger 2.0 or OpenAPI 3.x document.

    Returns:
        The normalized document.

    Raises:
        DocumentShapeError: If ``components`` exists but is not a mapping.
    """
    if is_openapi3(document):
        normalized = dict(document)
    else:
        normalized = _convert_swagger2(document)

    components = normalized.get("components")
    if components is None:
        components = {}
    elif not isinstance(components, dict):
        raise DocumentShapeError(
            f"'components' must be a mapping (got {type(components).__name__})"
        )
    else:
        components = dict(components)
    if not isinstance(components.get("schemas"), dict):
        components["schemas"] = {}
    normalized["components"] = components

    if not isinstance(normalized.get("paths"), dict):
        logger.warning("No paths found in the OpenAPI spec")
        normalized["paths"] = {}

    return normalized


def _convert_swagger2(swagger: dict[str, Any]) -> dict[str, Any]:
    """Build a fresh 3.x tree from a Swagger 2.0 document."""
    logger.debug("Converting Swagger %s document to OpenAPI %s",
                 swagger.get("swagger", "?"), NORMALIZED_VERSION)
    openapi: dict[str, Any] = {"openapi": NORMALIZED_VERSION}

    for key in _VERBATIM_KEYS:
        if key in swagger:
            openapi[key] = swagger[key]

    host = swagger.get("host")
    if isinstance(host, str):
        base_path = swagger.get("basePath")
        if not isinstance(base_path, str) or not base_path:
            base_path = "/"
        openapi["servers"] = [{"url": f"https://{host}{base_path}"}]

    definitions = swagger.get("definitions")
    if isinstance(definitions, dict):
        openapi["components"] = {"schemas": definitions}

    return openapi


def schema_registry(normalized: dict[str, Any]) -> SchemaRegistry:
    """Return the name -> schema mapping of a normalized document.

    Reads ``components.schemas`` and falls back to a leftover ``definitions``
    block when ``components.schemas`` is empty. Entries that are not
    mappings are dropped, since they cannot be synthesized from.
    """
    schemas = normalized.get("components", {}).get("schemas") or {}
    if not schemas and isinstance(normalized.get("definitions"), dict):
        schemas = normalized["definitions"]
    return {name: schema for name, schema in schemas.items() if isinstance(schema, dict)}


def ref_name(ref: str) -> str:
    """Return the final path segment of a ``$ref`` (``#/definitions/Pet`` -> ``Pet``)."""
    return ref.rsplit("/", 1)[-1]


def convert_ref_path(ref: str) -> str:
    """Rewrite a Swagger ``#/definitions/X`` reference to ``#/components/schemas/X``."""
    prefix = "#/definitions/"
    if ref.startswith(prefix):
        return "#/components/schemas/" + ref[len(prefix):]
    return ref
