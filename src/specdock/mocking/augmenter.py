"""Attach synthesized examples to the responses of a normalized document.

For every operation in ``paths`` the augmenter copies all operation fields
except ``responses`` verbatim and rebuilds each response:

* the ``description`` is copied;
* ``200`` / ``201`` responses whose schema is a ``$ref`` into the schema
  registry get ``content["application/json"]`` with the rewritten
  ``#/components/schemas/X`` reference and an ``auto_example`` holding a
  synthesized object;
* every other status gets a generic error example with ``message`` and
  ``errorCode`` (``ERR_`` plus three digits).

The schema ``$ref`` is read from a Swagger 2.0 ``schema`` key or from
OpenAPI 3 ``content["application/json"].schema``. When a success response
has no resolvable ``$ref``, its original ``content`` is kept.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specdock.exceptions import DocumentShapeError
from specdock.mocking.synthesizer import ExampleSynthesizer
from specdock.parser.normalizer import convert_ref_path, ref_name

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
EXAMPLE_NAME = "auto_example"
SUCCESS_CODES = ("200", "201")

HTTP_METHODS = frozenset(
    {"get", "put", "post", "delete", "options", "head", "patch", "trace"}
)


def augment_document(
    document: dict[str, Any], synthesizer: ExampleSynthesizer
) -> dict[str, Any]:
    """Return a copy of *document* whose ``paths`` carry generated examples.

    Args:
        document: A normalized document (see
            :func:`~specdock.parser.normalizer.normalize_document`).
        synthesizer: Synthesizer bound to the document's schema registry.

    Returns:
        A new top-level dict; keys other than ``paths`` are shared with
        *document*.

    Raises:
        DocumentShapeError: If a path item, operation, or response is not a
            mapping.
    """
    augmented = dict(document)
    raw_paths = document.get("paths")
    if not isinstance(raw_paths, dict):
        logger.warning("No paths found in the OpenAPI spec")
        raw_paths = {}

    augmented["paths"] = {
        path: _augment_path_item(path, item, synthesizer)
        for path, item in raw_paths.items()
    }
    return augmented


def _augment_path_item(
    path: str, item: Any, synthesizer: ExampleSynthesizer
) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise DocumentShapeError(
            f"Path item '{path}' must be a mapping (got {type(item).__name__})"
        )

    new_item: dict[str, Any] = {}
    for key, value in item.items():
        if str(key).lower() not in HTTP_METHODS:
            new_item[key] = value
            continue
        if not isinstance(value, dict):
            raise DocumentShapeError(
                f"Operation '{key} {path}' must be a mapping (got {type(value).__name__})"
            )
        new_item[key] = _augment_operation(f"{key} {path}", value, synthesizer)
    return new_item


def _augment_operation(
    label: str, operation: dict[str, Any], synthesizer: ExampleSynthesizer
) -> dict[str, Any]:
    new_operation = {key: value for key, value in operation.items() if key != "responses"}

    responses: dict[str, Any] = {}
    raw_responses = operation.get("responses")
    if isinstance(raw_responses, dict):
        for status_code, response in raw_responses.items():
            if not isinstance(response, dict):
                raise DocumentShapeError(
                    f"Response {status_code} of '{label}' must be a mapping "
                    f"(got {type(response).__name__})"
                )
            # YAML reads unquoted status codes as integers
            code = str(status_code)
            responses[status_code] = _augment_response(code, response, synthesizer)

    new_operation["responses"] = responses
    return new_operation


def _augment_response(
    status_code: str, response: dict[str, Any], synthesizer: ExampleSynthesizer
) -> dict[str, Any]:
    new_response: dict[str, Any] = {"description": response.get("description")}

    if status_code in SUCCESS_CODES:
        media = _success_media(response, synthesizer)
        if media is not None:
            new_response["content"] = {JSON_MEDIA_TYPE: media}
        elif "content" in response:
            new_response["content"] = response["content"]
        return new_response

    fake = synthesizer.fake
    media = {
        "examples": {
            EXAMPLE_NAME: {
                "value": {
                    "message": fake.sentence(5),
                    "errorCode": fake.error_code(),
                }
            }
        }
    }
    new_response["content"] = {JSON_MEDIA_TYPE: media}
    return new_response


def _success_media(
    response: dict[str, Any], synthesizer: ExampleSynthesizer
) -> Optional[dict[str, Any]]:
    """Build the JSON media object for a success response, or None."""
    schema = _declared_schema(response)
    if schema is None:
        return None
    ref = schema.get("$ref")
    if not isinstance(ref, str):
        return None

    name = ref_name(ref)
    definition = synthesizer.registry.get(name)
    if definition is None:
        logger.debug("Response schema '%s' not in schema registry", ref)
        return None

    example = synthesizer.synthesize(definition, name=name)
    return {
        "schema": {"$ref": convert_ref_path(ref)},
        "examples": {EXAMPLE_NAME: {"value": example}},
    }


def _declared_schema(response: dict[str, Any]) -> Optional[dict[str, Any]]:
    """Return the response schema from Swagger 2.0 or OpenAPI 3 placement."""
    schema = response.get("schema")
    if isinstance(schema, dict):
        return schema
    content = response.get("content")
    if isinstance(content, dict):
        media = content.get(JSON_MEDIA_TYPE)
        if isinstance(media, dict) and isinstance(media.get("schema"), dict):
            return media["schema"]
    return None
