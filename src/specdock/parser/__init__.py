"""OpenAPI document parsing -- decode, normalize, and structurally check.

Typical usage::

    from specdock.parser import parse_document, normalize_document

    raw = parse_document(text)
    doc = normalize_document(raw)   # Swagger 2.0 -> OpenAPI 3.x shape

Sub-modules:

* :mod:`~specdock.parser.loader` -- JSON-then-YAML decoding and YAML output.
* :mod:`~specdock.parser.normalizer` -- Swagger 2.0 to OpenAPI 3.x rewrite
  and schema registry extraction.
* :mod:`~specdock.parser.resolver` -- internal ``$ref`` pointer checks.
* :mod:`~specdock.parser.validator` -- best-effort structural validation of
  persisted documents.
"""

from specdock.parser.loader import dump_document, parse_document
from specdock.parser.normalizer import normalize_document, schema_registry
from specdock.parser.validator import validate_spec_file

__all__ = [
    "parse_document",
    "dump_document",
    "normalize_document",
    "schema_registry",
    "validate_spec_file",
]
