"""Fabricate example values from a schema tree.

Given a schema definition and the document's schema registry, the
:class:`ExampleSynthesizer` produces a concrete value shaped like the
schema. The rules per property ``type``:

* ``string`` -- field-name heuristic of :meth:`FakeData.value_for_field`.
* ``integer`` / ``number`` -- integer in ``[1, 1000]``.
* ``boolean`` -- random boolean.
* ``array`` -- two items: scalars when ``items.type`` is a scalar kind,
  objects when ``items.$ref`` resolves; otherwise the field is omitted.
* ``object`` -- inline ``properties`` are filled one level deep only
  (string properties by heuristic, everything else with a single word);
  without inline properties a ``$ref`` is followed.
* no ``type`` -- a ``$ref`` is followed.

An unresolvable ``$ref`` or unknown ``type`` omits the field. A ``$ref``
back to a schema already being expanded on the current branch is
truncated the same way. Nesting deeper than ``max_depth`` raises
:class:`~specdock.exceptions.CycleError`, as does a single
:meth:`ExampleSynthesizer.synthesize` call that builds more than
``max_nodes`` objects (densely interlinked schemas otherwise expand every
acyclic path).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specdock.exceptions import CycleError, DocumentShapeError
from specdock.mocking.fakes import FakeData
from specdock.models import SchemaRegistry
from specdock.parser.normalizer import ref_name

logger = logging.getLogger(__name__)

NO_PROPERTIES_EXAMPLE = {"example": "No properties found"}

DEFAULT_MAX_DEPTH = 32
DEFAULT_MAX_NODES = 10_000

_SCALAR_TYPES = ("string", "integer", "number", "boolean")

# Sentinel for "leave this key out of the result"
_OMIT = object()


class ExampleSynthesizer:
    """Recursive example builder bound to one schema registry.

    Args:
        registry: Schema name to schema definition.
        fake: Value provider; owns the random state for this run.
        max_depth: Maximum number of nested ``$ref`` expansions.
        max_nodes: Maximum number of objects built by one
            :meth:`synthesize` call.

    Not safe to share between threads: the node count and the
    :class:`FakeData` state belong to one run.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        fake: Optional[FakeData] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_nodes: int = DEFAULT_MAX_NODES,
    ) -> None:
        self._registry = registry
        self._fake = fake if fake is not None else FakeData()
        self._max_depth = max_depth
        self._max_nodes = max_nodes
        self._nodes = 0

    @property
    def fake(self) -> FakeData:
        return self._fake

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def synthesize(self, schema: dict[str, Any], name: Optional[str] = None) -> dict[str, Any]:
        """Build an example object for *schema*.

        Args:
            schema: The schema definition to follow.
            name: Registry name of *schema*, if it came from the registry.
                Used to detect a schema referring back to itself.

        Returns:
            The synthesized object.

        Raises:
            DocumentShapeError: If a schema or property is not a mapping.
            CycleError: If ``$ref`` nesting exceeds ``max_depth`` or the
                example grows past ``max_nodes`` objects.
        """
        self._nodes = 0
        stack = (name,) if name else ()
        return self._object(schema, stack)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _object(self, schema: Any, stack: tuple[str, ...]) -> dict[str, Any]:
        if not isinstance(schema, dict):
            raise DocumentShapeError(
                f"Schema must be a mapping (got {type(schema).__name__})"
            )

        properties = schema.get("properties")
        if properties is None:
            ref = schema.get("$ref")
            if "type" not in schema and isinstance(ref, str):
                target = self._enter(ref, stack)
                if target is not None:
                    return self._object(*target)
            return dict(NO_PROPERTIES_EXAMPLE)
        if not isinstance(properties, dict):
            raise DocumentShapeError(
                f"'properties' must be a mapping (got {type(properties).__name__})"
            )

        self._nodes += 1
        if self._nodes > self._max_nodes:
            where = stack[-1] if stack else "<inline>"
            raise CycleError(
                f"Example exceeds {self._max_nodes} objects while expanding '{where}'"
            )

        result: dict[str, Any] = {}
        for key, field in properties.items():
            if not isinstance(field, dict):
                raise DocumentShapeError(
                    f"Property '{key}' must be a mapping (got {type(field).__name__})"
                )
            value = self._field(key, field, stack)
            if value is _OMIT:
                logger.debug("Omitting field '%s' from example", key)
                continue
            result[key] = value
        return result

    def _field(self, key: str, field: dict[str, Any], stack: tuple[str, ...]) -> Any:
        field_type = field.get("type")

        if field_type in _SCALAR_TYPES:
            return self._scalar(field_type, key)
        if field_type == "array":
            return self._array(key, field.get("items"), stack)
        if field_type == "object":
            nested = field.get("properties")
            if isinstance(nested, dict):
                return self._shallow_object(nested)
            return self._follow(field.get("$ref"), stack)
        if field_type is None:
            return self._follow(field.get("$ref"), stack)
        return _OMIT

    def _scalar(self, kind: str, key: str) -> Any:
        if kind == "string":
            return self._fake.value_for_field(key)
        if kind == "boolean":
            return self._fake.boolean()
        return self._fake.number()

    def _array(self, key: str, items: Any, stack: tuple[str, ...]) -> Any:
        if not isinstance(items, dict):
            return _OMIT

        item_type = items.get("type")
        if item_type in _SCALAR_TYPES:
            return [self._scalar(item_type, key), self._scalar(item_type, key)]

        ref = items.get("$ref")
        if not isinstance(ref, str):
            return _OMIT
        target = self._enter(ref, stack)
        if target is None:
            return _OMIT
        return [self._object(*target), self._object(*target)]

    def _shallow_object(self, properties: dict[str, Any]) -> dict[str, Any]:
        # Nested inline objects are filled one level deep only.
        result: dict[str, Any] = {}
        for key, prop in properties.items():
            if not isinstance(prop, dict):
                raise DocumentShapeError(
                    f"Property '{key}' must be a mapping (got {type(prop).__name__})"
                )
            if prop.get("type") == "string":
                result[key] = self._fake.value_for_field(key)
            else:
                result[key] = self._fake.word()
        return result

    def _follow(self, ref: Any, stack: tuple[str, ...]) -> Any:
        if not isinstance(ref, str):
            return _OMIT
        target = self._enter(ref, stack)
        if target is None:
            return _OMIT
        return self._object(*target)

    def _enter(
        self, ref: str, stack: tuple[str, ...]
    ) -> Optional[tuple[dict[str, Any], tuple[str, ...]]]:
        """Look up *ref* and return ``(schema, new_stack)``, or None to omit."""
        name = ref_name(ref)
        schema = self._registry.get(name)
        if schema is None:
            logger.debug("Unresolved $ref '%s'", ref)
            return None
        if name in stack:
            logger.debug("Truncating $ref cycle at '%s' (%s)", name, " -> ".join(stack))
            return None
        if len(stack) >= self._max_depth:
            raise CycleError(
                f"$ref nesting exceeds {self._max_depth} levels at '{name}'"
            )
        return schema, stack + (name,)


def synthesize(
    schema: dict[str, Any],
    registry: SchemaRegistry,
    fake: Optional[FakeData] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_nodes: int = DEFAULT_MAX_NODES,
) -> dict[str, Any]:
    """Build an example object for *schema* using a one-off synthesizer."""
    return ExampleSynthesizer(registry, fake, max_depth, max_nodes).synthesize(schema)
