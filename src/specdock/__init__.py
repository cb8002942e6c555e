"""specdock -- Normalize OpenAPI documents, synthesize examples, publish them.

A registration request names an OpenAPI or Swagger document (inline text,
a local file, or a URL). specdock acquires it, optionally upgrades it to
OpenAPI 3.x shape and fills its responses with plausible examples, writes
it to a spec directory, and publishes a record that a documentation
server can look up by name.

Typical usage::

    from specdock.models import SpecRequest
    from specdock.registry import SpecRegistry

    registry = SpecRegistry()
    record = registry.register(
        SpecRequest(namespace="shop", name="pets", spec_path="petstore.yaml", mock=True)
    )
    registry.lookup("shop-pets").spec_url

Modules:
    app: Typer CLI entry point.
    models: Pydantic models shared across the package.
    config: Configuration resolution (defaults, environment, CLI).
    exceptions: Exception hierarchy with exit-code mapping.
    registry: Concurrent registry of published documents.
    sources: Inline / local / remote document acquisition.
    status: Registration outcome to status report translation.
"""

__version__ = "0.1.0"
