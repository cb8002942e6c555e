"""End-to-end tests for the specdock command line.

Each command is invoked through ``typer.testing.CliRunner`` against
documents written to ``tmp_path``; remote sources are patched at
``httpx.get``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import httpx
import pytest
import yaml
from typer.testing import CliRunner

from specdock import __version__
from specdock.app import app
from specdock.exit_codes import (
    EXIT_CYCLE_ERROR,
    EXIT_FETCH_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_IO_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def swagger_file(tmp_path: Path, swagger_petstore: dict[str, Any]) -> Path:
    path = tmp_path / "swagger.json"
    path.write_text(json.dumps(swagger_petstore), encoding="utf-8")
    return path


@pytest.fixture
def openapi_file(tmp_path: Path, openapi_petstore: dict[str, Any]) -> Path:
    path = tmp_path / "openapi.yaml"
    path.write_text(yaml.safe_dump(openapi_petstore), encoding="utf-8")
    return path


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


# ---------------------------------------------------------------------------
# mock
# ---------------------------------------------------------------------------


class TestMockCommand:
    def test_prints_normalized_yaml(self, runner: CliRunner, swagger_file: Path) -> None:
        result = runner.invoke(app, ["--plain", "mock", str(swagger_file)])
        assert result.exit_code == 0, result.output

        doc = yaml.safe_load(result.output)
        assert doc["openapi"] == "3.1.0"
        assert doc["servers"] == [{"url": "https://api.x.com/v1"}]
        media = doc["paths"]["/pets"]["get"]["responses"]["200"]["content"]["application/json"]
        assert media["schema"] == {"$ref": "#/components/schemas/Pet"}
        assert set(media["examples"]["auto_example"]["value"]) == {"id", "name"}

    def test_same_seed_same_output(self, runner: CliRunner, openapi_file: Path) -> None:
        first = runner.invoke(app, ["--plain", "mock", str(openapi_file), "--seed", "3"])
        second = runner.invoke(app, ["--plain", "mock", str(openapi_file), "--seed", "3"])
        assert first.exit_code == second.exit_code == 0
        assert first.output == second.output

    def test_writes_output_file(
        self, runner: CliRunner, openapi_file: Path, tmp_path: Path
    ) -> None:
        target = tmp_path / "mocked.yaml"
        result = runner.invoke(app, ["--plain", "mock", str(openapi_file), "-o", str(target)])
        assert result.exit_code == 0, result.output
        doc = yaml.safe_load(target.read_text(encoding="utf-8"))
        not_found = doc["paths"]["/pets"]["get"]["responses"]["404"]
        value = not_found["content"]["application/json"]["examples"]["auto_example"]["value"]
        assert set(value) == {"message", "errorCode"}

    def test_remote_source(self, runner: CliRunner, openapi_petstore: dict[str, Any]) -> None:
        url = "https://example.com/openapi.json"
        response = httpx.Response(200, json=openapi_petstore, request=httpx.Request("GET", url))
        with patch("specdock.sources.httpx.get", return_value=response):
            result = runner.invoke(app, ["--plain", "mock", url])
        assert result.exit_code == 0, result.output
        assert "auto_example" in result.output

    def test_remote_failure(self, runner: CliRunner) -> None:
        url = "https://example.com/missing.json"
        response = httpx.Response(404, request=httpx.Request("GET", url))
        with patch("specdock.sources.httpx.get", return_value=response):
            result = runner.invoke(app, ["--plain", "--no-color", "mock", url])
        assert result.exit_code == EXIT_FETCH_ERROR
        assert "status code 404" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--no-color", "mock", str(tmp_path / "nope.yaml")])
        assert result.exit_code == EXIT_IO_ERROR
        assert "Failed to open" in result.output

    def test_unparsable_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("{broken: [", encoding="utf-8")
        result = runner.invoke(app, ["--no-color", "mock", str(path)])
        assert result.exit_code == EXIT_SPEC_PARSE_ERROR

    def test_unwritable_output(
        self, runner: CliRunner, openapi_file: Path, tmp_path: Path
    ) -> None:
        target = tmp_path / "missing-dir" / "mocked.yaml"
        result = runner.invoke(app, ["--no-color", "mock", str(openapi_file), "-o", str(target)])
        assert result.exit_code == EXIT_IO_ERROR
        assert "Failed to write" in result.output

    def test_yaml_boolean_property_name(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "lights.yaml"
        path.write_text(
            "swagger: '2.0'\n"
            "info: {title: Lights, version: '1'}\n"
            "definitions:\n"
            "  Light:\n"
            "    properties:\n"
            "      on: {type: string}\n"
            "paths:\n"
            "  /lights:\n"
            "    get:\n"
            "      responses:\n"
            "        200: {schema: {$ref: '#/definitions/Light'}}\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["--plain", "mock", str(path)])
        assert result.exit_code == 0, result.output
        doc = yaml.safe_load(result.output)
        media = doc["paths"]["/lights"]["get"]["responses"][200]["content"]["application/json"]
        assert isinstance(media["examples"]["auto_example"]["value"][True], str)

    def test_interlinked_schemas_fail_fast(self, runner: CliRunner, tmp_path: Path) -> None:
        names = [f"S{i}" for i in range(10)]
        doc = {
            "openapi": "3.0.0",
            "info": {"title": "Web", "version": "1"},
            "paths": {
                "/s": {
                    "get": {
                        "responses": {
                            "200": {"schema": {"$ref": "#/components/schemas/S0"}}
                        }
                    }
                }
            },
            "components": {
                "schemas": {
                    name: {
                        "properties": {
                            other.lower(): {"$ref": f"#/components/schemas/{other}"}
                            for other in names
                            if other != name
                        }
                    }
                    for name in names
                }
            },
        }
        path = tmp_path / "web.json"
        path.write_text(json.dumps(doc), encoding="utf-8")
        result = runner.invoke(app, ["--no-color", "mock", str(path)])
        assert result.exit_code == EXIT_CYCLE_ERROR
        assert "objects" in result.output


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


class TestValidateCommand:
    def test_valid_document(self, runner: CliRunner, openapi_file: Path) -> None:
        result = runner.invoke(app, ["--plain", "validate", str(openapi_file)])
        assert result.exit_code == 0, result.output
        lines = result.output.strip().split("\n")
        assert lines[0] == "field\tvalue"
        assert "version\t3.0.3" in lines
        assert "title\tPetstore API" in lines
        assert "paths\t1" in lines
        assert "schemas\t1" in lines

    def test_json_output(self, runner: CliRunner, swagger_file: Path) -> None:
        result = runner.invoke(app, ["--json", "validate", str(swagger_file)])
        assert result.exit_code == 0, result.output
        rows = {row["field"]: row["value"] for row in json.loads(result.output)}
        assert rows["version"] == "2.0"
        assert rows["title"] == "Swagger Petstore"

    def test_invalid_document(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "odd.json"
        path.write_text('{"hello": "world"}', encoding="utf-8")
        result = runner.invoke(app, ["--no-color", "validate", str(path)])
        assert result.exit_code == EXIT_GENERIC_FAILURE
        assert "Missing 'openapi' or 'swagger' field" in result.output


# ---------------------------------------------------------------------------
# register
# ---------------------------------------------------------------------------


class TestRegisterCommand:
    def test_available(
        self, runner: CliRunner, swagger_file: Path, spec_dir: Path
    ) -> None:
        result = runner.invoke(
            app,
            [
                "--json",
                "register",
                "--namespace", "team-a",
                "--name", "pets",
                "--spec", str(swagger_file),
                "--mock",
                "--spec-directory", str(spec_dir),
            ],
        )
        assert result.exit_code == 0, result.output
        report = json.loads(result.output)
        assert report["status"] == "Available"
        assert report["url"] == "http://specdock.team-a.svc:8080/docs/team-a-pets"
        assert report["requeue_after"] == 3600.0
        assert "lastUpdated" in report

        persisted = yaml.safe_load((spec_dir / "team-a-pets.json").read_text(encoding="utf-8"))
        assert persisted["openapi"] == "3.1.0"

    def test_content_file_and_external_url(
        self, runner: CliRunner, openapi_file: Path, spec_dir: Path
    ) -> None:
        result = runner.invoke(
            app,
            [
                "--json",
                "register",
                "--namespace", "team-a",
                "--name", "pets",
                "--content-file", str(openapi_file),
                "--external-url", "https://docs.example.com",
                "--spec-directory", str(spec_dir),
            ],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["url"] == "https://docs.example.com/docs/team-a-pets"
        assert (spec_dir / "team-a-pets.json").read_text(encoding="utf-8") == openapi_file.read_text(
            encoding="utf-8"
        )

    def test_missing_source_fails(self, runner: CliRunner, spec_dir: Path) -> None:
        result = runner.invoke(
            app,
            [
                "--plain",
                "--no-color",
                "register",
                "--namespace", "team-a",
                "--name", "pets",
                "--spec-directory", str(spec_dir),
            ],
        )
        assert result.exit_code == EXIT_INVALID_USAGE
        assert "status\tFailed" in result.output
        assert "Neither specPath nor specContent provided in OpenAPISpec team-a-pets" in result.output
        assert "--content-file" in result.output
        assert not (spec_dir / "team-a-pets.json").exists()

    def test_unreadable_content_file(
        self, runner: CliRunner, tmp_path: Path, spec_dir: Path
    ) -> None:
        result = runner.invoke(
            app,
            [
                "--no-color",
                "register",
                "--namespace", "team-a",
                "--name", "pets",
                "--content-file", str(tmp_path / "nope.yaml"),
                "--spec-directory", str(spec_dir),
            ],
        )
        assert result.exit_code == 2
        assert "Cannot read" in result.output

    def test_missing_spec_file_exit_code(
        self, runner: CliRunner, tmp_path: Path, spec_dir: Path
    ) -> None:
        result = runner.invoke(
            app,
            [
                "--plain",
                "--no-color",
                "register",
                "--namespace", "docs",
                "--name", "pets",
                "--spec", str(tmp_path / "missing.yaml"),
                "--spec-directory", str(spec_dir),
            ],
        )
        assert result.exit_code == EXIT_IO_ERROR
        assert "status\tFailed" in result.output
        assert "Failed to open OpenAPI spec file" in result.output

    def test_fetch_error_exit_code(self, runner: CliRunner, spec_dir: Path) -> None:
        url = "https://example.com/openapi.json"
        response = httpx.Response(503, request=httpx.Request("GET", url))
        with patch("specdock.sources.httpx.get", return_value=response):
            result = runner.invoke(
                app,
                [
                    "--plain",
                    "--no-color",
                    "register",
                    "--namespace", "docs",
                    "--name", "pets",
                    "--spec", url,
                    "--spec-directory", str(spec_dir),
                ],
            )
        assert result.exit_code == EXIT_FETCH_ERROR
        assert "status code 503" in result.output

    def test_validation_warning_still_available(
        self, runner: CliRunner, tmp_path: Path, spec_dir: Path
    ) -> None:
        path = tmp_path / "odd.yaml"
        path.write_text("hello: world\n", encoding="utf-8")
        result = runner.invoke(
            app,
            [
                "--plain",
                "--no-color",
                "register",
                "--namespace", "docs",
                "--name", "odd",
                "--spec", str(path),
                "--spec-directory", str(spec_dir),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "status\tAvailable" in result.output
        assert "Warning: Published with a validation warning" in result.output
