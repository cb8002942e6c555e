"""Canonical Pydantic models shared across all specdock modules.

The models fall into three groups:

**Configuration** -- :class:`RegistryConfig`, a plain structure with named,
defaulted fields resolved by :func:`specdock.config.resolve_config`.

**Registration input** -- :class:`SpecRequest`, the record an orchestration
layer hands to :meth:`specdock.registry.SpecRegistry.register`. Field
aliases match the camelCase names used by the resource definition
(``specPath``, ``specContent``) so a resource's ``spec`` block can be
validated directly.

**Registration output** -- :class:`RegistrationRecord` (immutable, swapped
wholesale on re-registration), :class:`ValidationResult`, and the
:class:`StatusReport` reported upward after each reconciliation.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


DocumentTree = Union[None, bool, int, float, str, list[Any], dict[str, Any]]
"""A JSON-like value: the shape of both raw parsed input and normalized output."""

SchemaRegistry = dict[str, dict[str, Any]]
"""Schema name to schema definition, from ``components.schemas`` or ``definitions``."""


# --- Configuration ---


class RegistryConfig(BaseModel):
    """Settings for a :class:`~specdock.registry.SpecRegistry`.

    Example::

        RegistryConfig(
            spec_directory="/var/lib/specdock",
            external_url="https://docs.example.com",
        )
    """

    port: int = Field(default=8080, ge=1, le=65535)
    external_url: str = Field(
        default="", description="Public base URL; empty selects the cluster-local URL"
    )
    spec_directory: str = Field(default="/tmp/specdock-specs")
    service_name: str = Field(
        default="specdock", description="Service host used in the cluster-local URL"
    )
    fetch_timeout: Optional[float] = Field(
        default=None, description="Seconds to wait on a remote spec; None waits forever"
    )
    mock_seed: int = Field(default=0, description="Seed for each example synthesis run")
    max_ref_depth: int = Field(default=32, ge=1)
    max_example_nodes: int = Field(
        default=10_000, ge=1, description="Objects one synthesized example may contain"
    )

    def base_url(self, namespace: str) -> str:
        """Return the public base URL for documents in *namespace*."""
        if self.external_url:
            return self.external_url.rstrip("/")
        return f"http://{self.service_name}.{namespace}.svc:{self.port}"


# --- Registration input ---


class SpecRequest(BaseModel):
    """A request to publish one OpenAPI document.

    ``namespace`` and ``name`` identify the owning resource; the registration
    name is ``f"{namespace}-{name}"``. ``spec_content`` takes priority over
    ``spec_path`` when both are given. ``description``, ``version`` and
    ``theme`` are carried through for a renderer and not interpreted here.
    """

    model_config = ConfigDict(populate_by_name=True)

    namespace: str
    name: str
    title: str = ""
    spec_path: str = Field(default="", alias="specPath")
    spec_content: str = Field(default="", alias="specContent")
    description: str = ""
    version: str = ""
    mock: bool = False
    theme: dict[str, str] = Field(default_factory=dict)

    @property
    def registration_name(self) -> str:
        """The unique registry key for this request."""
        return f"{self.namespace}-{self.name}"


# --- Registration output ---


class ValidationResult(BaseModel):
    """Outcome of the best-effort structural check on a persisted document.

    When ``valid`` is ``False``, ``warning`` holds the reason and the other
    fields hold whatever could be read before the check failed.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    warning: Optional[str] = None
    spec_version: Optional[str] = None
    title: Optional[str] = None
    path_count: int = 0
    schema_count: int = 0


class RegistrationRecord(BaseModel):
    """A published document. Never edited in place; replaced wholesale."""

    model_config = ConfigDict(frozen=True)

    name: str
    title: str
    spec_path: str = Field(description="Source locator as given (empty for inline content)")
    file_path: str = Field(description="Where the persisted document lives")
    spec_url: str = Field(description="Public URL of the raw persisted document")
    doc_url: str = Field(description="Public URL of the rendered documentation page")
    mocked: bool = False
    theme: dict[str, str] = Field(default_factory=dict)
    validation: ValidationResult
    published_at: datetime


class SpecStatus(str, enum.Enum):
    """Lifecycle state reported for a registration request."""

    PENDING = "Pending"
    AVAILABLE = "Available"
    FAILED = "Failed"


class StatusReport(BaseModel):
    """Status fields reported upward after a reconciliation."""

    model_config = ConfigDict(populate_by_name=True)

    status: SpecStatus
    url: str = ""
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")
    error_message: str = Field(default="", alias="errorMessage")
    requeue_after: Optional[float] = Field(
        default=None, description="Seconds until the request should be retried"
    )
