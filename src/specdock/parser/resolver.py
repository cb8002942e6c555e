"""Check internal ``$ref`` JSON Reference pointers in an OpenAPI document.

OpenAPI documents use ``$ref`` pointers (e.g. ``#/components/schemas/Pet``
or, in Swagger 2.0, ``#/definitions/Pet``) to avoid repetition. The
structural validator uses this module to make sure every internal pointer
lands on something.

Only **internal** references (those starting with ``#/``) are followed.
External file or URL references are reported separately and never fetched.
Targets are looked up but not expanded, so self-referencing schemas cannot
cause unbounded recursion here.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from specdock.exceptions import SpecParseError


def resolve_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Resolve a single internal ``$ref`` string against *root*.

    Handles RFC 6901 JSON Pointer escaping (``~0`` for ``~``, ``~1`` for
    ``/``) and list indices.

    Args:
        ref: The ``$ref`` string (e.g., ``"#/components/schemas/Pet"``).
        root: The document to resolve against.

    Returns:
        The value found at the referenced path.

    Raises:
        SpecParseError: If the reference is external or any segment does not
            exist in the document.
    """
    if not ref.startswith("#/"):
        raise SpecParseError(f"External $ref not supported: {ref}")

    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found at path"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise SpecParseError(
                f"Cannot resolve $ref '{ref}': cannot navigate into {type(current).__name__}"
            )

    return current


def iter_refs(obj: Any) -> Iterator[str]:
    """Yield every string ``$ref`` value found anywhere inside *obj*, depth-first."""
    if isinstance(obj, dict):
        ref = obj.get("$ref")
        if isinstance(ref, str):
            yield ref
        for value in obj.values():
            yield from iter_refs(value)
    elif isinstance(obj, list):
        for item in obj:
            yield from iter_refs(item)


def check_refs(document: dict[str, Any]) -> tuple[int, list[str]]:
    """Verify that every internal ``$ref`` in *document* resolves.

    Returns:
        A ``(checked, external)`` tuple: the number of distinct internal
        references that resolved, and the sorted external references that
        were skipped.

    Raises:
        SpecParseError: On the first internal reference that does not
            resolve.
    """
    internal: set[str] = set()
    external: set[str] = set()
    for ref in iter_refs(document):
        if ref.startswith("#/"):
            internal.add(ref)
        else:
            external.add(ref)

    for ref in sorted(internal):
        resolve_pointer(ref, document)

    return len(internal), sorted(external)
