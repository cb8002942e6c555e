"""Example generation for OpenAPI documents.

The mock pipeline decodes a document, normalizes it to OpenAPI 3.x shape,
and fills its response bodies with synthesized examples:

    text -> parse_document -> normalize_document -> augment_document -> YAML

Typical usage::

    from specdock.mocking import mock_document

    mocked_yaml = mock_document(swagger_text, seed=0)

Sub-modules:

* :mod:`~specdock.mocking.fakes` -- seeded fake values and the field-name
  heuristic.
* :mod:`~specdock.mocking.synthesizer` -- schema-driven example builder.
* :mod:`~specdock.mocking.augmenter` -- attaches examples to responses.
"""

from __future__ import annotations

import logging
from typing import Any

from specdock.mocking.augmenter import augment_document
from specdock.mocking.fakes import FakeData
from specdock.mocking.synthesizer import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_NODES,
    ExampleSynthesizer,
    synthesize,
)
from specdock.parser.loader import dump_document, parse_document
from specdock.parser.normalizer import normalize_document, schema_registry

logger = logging.getLogger(__name__)

__all__ = [
    "ExampleSynthesizer",
    "FakeData",
    "augment_document",
    "build_mocked_document",
    "mock_document",
    "synthesize",
]


def build_mocked_document(
    document: dict[str, Any],
    seed: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_nodes: int = DEFAULT_MAX_NODES,
) -> dict[str, Any]:
    """Normalize *document* and attach synthesized response examples.

    A fresh :class:`FakeData` seeded with *seed* is used, so the same input
    and seed give the same output within one interpreter version.
    """
    normalized = normalize_document(document)
    synthesizer = ExampleSynthesizer(
        schema_registry(normalized),
        FakeData(seed),
        max_depth=max_depth,
        max_nodes=max_nodes,
    )
    return augment_document(normalized, synthesizer)


def mock_document(
    content: str,
    seed: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_nodes: int = DEFAULT_MAX_NODES,
) -> str:
    """Run the full mock pipeline on raw document text and return YAML.

    Raises:
        SpecParseError: If *content* is neither JSON nor YAML, or a node has
            the wrong shape.
        CycleError: If ``$ref`` nesting exceeds *max_depth*, or one example
            needs more than *max_nodes* objects.
    """
    document = parse_document(content)
    mocked = build_mocked_document(
        document, seed=seed, max_depth=max_depth, max_nodes=max_nodes
    )
    logger.info("Generated OpenAPI examples for %d path(s)", len(mocked["paths"]))
    return dump_document(mocked)
