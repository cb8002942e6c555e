"""Shared test fixtures for specdock.

Provides reusable Swagger 2.0 / OpenAPI 3.x documents, an isolated
registry rooted in ``tmp_path``, and output-state cleanup.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from specdock.models import RegistryConfig
from specdock.output import reset_output
from specdock.registry import SpecRegistry


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Drop the global OutputManager after every test.

    The manager caches sys.stdout/sys.stderr at creation time, which go
    stale once CliRunner restores the real streams.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


SWAGGER_PETSTORE: dict[str, Any] = {
    "swagger": "2.0",
    "info": {"title": "Swagger Petstore", "version": "1.0.0"},
    "host": "api.x.com",
    "basePath": "/v1",
    "definitions": {
        "Pet": {
            "properties": {
                "id": {"type": "string"},
                "name": {"type": "string"},
            }
        }
    },
    "paths": {
        "/pets": {
            "get": {
                "responses": {
                    "200": {"schema": {"$ref": "#/definitions/Pet"}},
                }
            }
        }
    },
}

OPENAPI_PETSTORE: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Petstore API", "version": "1.0.0"},
    "servers": [{"url": "https://petstore.example.com/v1"}],
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "summary": "List all pets",
                "tags": ["pets"],
                "responses": {
                    "200": {
                        "description": "A pet",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Pet"}
                            }
                        },
                    },
                    "404": {"description": "Not found"},
                },
            }
        }
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string"},
                    "status": {"type": "string"},
                },
            }
        }
    },
}


@pytest.fixture
def swagger_petstore() -> dict[str, Any]:
    """A minimal Swagger 2.0 petstore document."""
    return copy.deepcopy(SWAGGER_PETSTORE)


@pytest.fixture
def openapi_petstore() -> dict[str, Any]:
    """A minimal OpenAPI 3.0 petstore document."""
    return copy.deepcopy(OPENAPI_PETSTORE)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@pytest.fixture
def spec_dir(tmp_path: Path) -> Path:
    return tmp_path / "specs"


@pytest.fixture
def registry_config(spec_dir: Path) -> RegistryConfig:
    return RegistryConfig(spec_directory=str(spec_dir))


@pytest.fixture
def registry(registry_config: RegistryConfig) -> SpecRegistry:
    """A SpecRegistry persisting into a temporary directory."""
    return SpecRegistry(registry_config)
