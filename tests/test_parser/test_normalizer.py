"""Tests for specdock.parser.normalizer."""

from __future__ import annotations

from typing import Any

import pytest

from specdock.exceptions import DocumentShapeError
from specdock.parser.normalizer import (
    NORMALIZED_VERSION,
    convert_ref_path,
    is_openapi3,
    normalize_document,
    ref_name,
    schema_registry,
)


class TestOpenAPI3PassThrough:
    def test_version_paths_and_schemas_unchanged(self, openapi_petstore: dict[str, Any]) -> None:
        result = normalize_document(openapi_petstore)
        assert result["openapi"] == "3.0.3"
        assert result["paths"] == openapi_petstore["paths"]
        assert result["components"]["schemas"] == openapi_petstore["components"]["schemas"]
        assert result["servers"] == openapi_petstore["servers"]

    def test_input_not_mutated(self) -> None:
        doc = {"openapi": "3.1.0", "info": {"title": "T"}}
        normalize_document(doc)
        assert doc == {"openapi": "3.1.0", "info": {"title": "T"}}

    def test_missing_sections_are_created(self) -> None:
        result = normalize_document({"openapi": "3.1.0", "info": {}})
        assert result["components"] == {"schemas": {}}
        assert result["paths"] == {}

    def test_other_components_kept(self) -> None:
        doc = {"openapi": "3.0.0", "components": {"securitySchemes": {"k": {"type": "apiKey"}}}}
        result = normalize_document(doc)
        assert result["components"]["securitySchemes"] == {"k": {"type": "apiKey"}}
        assert result["components"]["schemas"] == {}

    def test_non_mapping_components_raises(self) -> None:
        with pytest.raises(DocumentShapeError, match="components"):
            normalize_document({"openapi": "3.0.0", "components": []})

    def test_numeric_version_is_not_openapi3(self) -> None:
        assert not is_openapi3({"openapi": 3.0})
        assert is_openapi3({"openapi": "3.0.1"})


class TestSwagger2Conversion:
    def test_version_and_info(self, swagger_petstore: dict[str, Any]) -> None:
        result = normalize_document(swagger_petstore)
        assert result["openapi"] == NORMALIZED_VERSION == "3.1.0"
        assert result["info"] == swagger_petstore["info"]
        assert "swagger" not in result

    @pytest.mark.parametrize(
        ("host", "base_path", "expected"),
        [
            ("api.x.com", "/v1", "https://api.x.com/v1"),
            ("api.x.com", None, "https://api.x.com/"),
            ("localhost:8080", "/api/v2", "https://localhost:8080/api/v2"),
            ("h.example", "", "https://h.example/"),
        ],
    )
    def test_servers_from_host(self, host: str, base_path: str | None, expected: str) -> None:
        doc: dict[str, Any] = {"swagger": "2.0", "host": host}
        if base_path is not None:
            doc["basePath"] = base_path
        result = normalize_document(doc)
        assert result["servers"] == [{"url": expected}]

    def test_no_host_no_servers(self) -> None:
        result = normalize_document({"swagger": "2.0", "info": {}})
        assert "servers" not in result

    def test_definitions_relocated(self, swagger_petstore: dict[str, Any]) -> None:
        result = normalize_document(swagger_petstore)
        assert result["components"]["schemas"] == swagger_petstore["definitions"]
        assert "definitions" not in result

    def test_paths_and_tags_carried(self) -> None:
        doc = {
            "swagger": "2.0",
            "paths": {"/a": {"get": {"responses": {}}}},
            "tags": [{"name": "a"}],
        }
        result = normalize_document(doc)
        assert result["paths"] == doc["paths"]
        assert result["tags"] == [{"name": "a"}]

    def test_empty_swagger_still_has_required_sections(self) -> None:
        result = normalize_document({"swagger": "2.0"})
        assert result["components"]["schemas"] == {}
        assert result["paths"] == {}


class TestHelpers:
    def test_schema_registry_from_components(self, openapi_petstore: dict[str, Any]) -> None:
        registry = schema_registry(normalize_document(openapi_petstore))
        assert set(registry) == {"Pet"}

    def test_schema_registry_falls_back_to_definitions(self) -> None:
        doc = {"openapi": "3.0.0", "definitions": {"Pet": {"properties": {}}}}
        assert set(schema_registry(normalize_document(doc))) == {"Pet"}

    def test_schema_registry_drops_non_mapping_entries(self) -> None:
        doc = {"openapi": "3.0.0", "components": {"schemas": {"Bad": "x", "Ok": {}}}}
        assert set(schema_registry(normalize_document(doc))) == {"Ok"}

    def test_ref_name(self) -> None:
        assert ref_name("#/definitions/Pet") == "Pet"
        assert ref_name("#/components/schemas/Order") == "Order"
        assert ref_name("Plain") == "Plain"

    def test_convert_ref_path(self) -> None:
        assert convert_ref_path("#/definitions/Pet") == "#/components/schemas/Pet"
        assert convert_ref_path("#/components/schemas/Pet") == "#/components/schemas/Pet"
