"""Tests for specdock.parser.loader."""

from __future__ import annotations

import json
import textwrap

import pytest
import yaml

from specdock.exceptions import SpecParseError
from specdock.parser.loader import dump_document, parse_document


class TestParseDocument:
    """JSON-first, YAML-fallback decoding."""

    def test_parses_json(self) -> None:
        result = parse_document(json.dumps({"openapi": "3.0.3", "paths": {}}))
        assert result == {"openapi": "3.0.3", "paths": {}}

    def test_parses_yaml(self) -> None:
        content = textwrap.dedent("""\
            swagger: "2.0"
            info:
              title: YAML Test
              version: "1.0.0"
            paths: {}
        """)
        result = parse_document(content)
        assert result["swagger"] == "2.0"
        assert result["info"]["title"] == "YAML Test"

    def test_yaml_hint_skips_json(self) -> None:
        result = parse_document('{"a": 1}', hint="yaml")
        assert result == {"a": 1}

    def test_json_hint_disables_yaml_fallback(self) -> None:
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            parse_document("openapi: 3.0.3", hint="json")

    def test_garbage_raises(self) -> None:
        with pytest.raises(SpecParseError, match="neither|JSON or YAML"):
            parse_document("{unclosed: [")

    def test_json_list_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="got list"):
            parse_document("[1, 2, 3]")

    def test_yaml_scalar_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="got str"):
            parse_document("just some words")

    def test_empty_document_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="empty document"):
            parse_document("")


class TestDumpDocument:
    def test_keeps_key_order(self) -> None:
        text = dump_document({"openapi": "3.1.0", "info": {"title": "T"}, "paths": {}})
        assert text.index("openapi") < text.index("info") < text.index("paths")

    def test_output_is_parseable(self) -> None:
        doc = {"openapi": "3.1.0", "paths": {"/a": {"get": {"responses": {}}}}}
        assert yaml.safe_load(dump_document(doc)) == doc
