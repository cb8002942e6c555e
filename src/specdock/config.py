"""Configuration resolution with environment and CLI precedence.

:func:`resolve_config` builds the effective :class:`~specdock.models.RegistryConfig`
from three layers, low to high:

1. Field defaults declared on the model.
2. Environment variables (``SPECDOCK_PORT``, ``SPECDOCK_EXTERNAL_URL``,
   ``SPECDOCK_SPEC_DIRECTORY``, ``SPECDOCK_SERVICE_NAME``,
   ``SPECDOCK_FETCH_TIMEOUT``, ``SPECDOCK_MOCK_SEED``).
3. Explicit keyword overrides, typically CLI flags.

Values are validated by Pydantic; any failure surfaces as
:class:`~specdock.exceptions.ConfigError`.
"""

from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import ValidationError

from specdock.exceptions import ConfigError
from specdock.models import RegistryConfig

_ENV_PREFIX = "SPECDOCK_"

# Model field -> environment variable suffix
_ENV_FIELDS = {
    "port": "PORT",
    "external_url": "EXTERNAL_URL",
    "spec_directory": "SPEC_DIRECTORY",
    "service_name": "SERVICE_NAME",
    "fetch_timeout": "FETCH_TIMEOUT",
    "mock_seed": "MOCK_SEED",
}


def _env_values() -> dict[str, str]:
    """Collect the configuration fields set in the environment."""
    values: dict[str, str] = {}
    for field, suffix in _ENV_FIELDS.items():
        raw = os.environ.get(_ENV_PREFIX + suffix, "")
        if raw:
            values[field] = raw
    return values


def resolve_config(
    port: Optional[int] = None,
    external_url: Optional[str] = None,
    spec_directory: Optional[str] = None,
    service_name: Optional[str] = None,
    fetch_timeout: Optional[float] = None,
    mock_seed: Optional[int] = None,
) -> RegistryConfig:
    """Resolve the registry configuration with full precedence chain.

    Any argument left as ``None`` falls through to the environment and then
    to the model default.

    Returns:
        The validated :class:`~specdock.models.RegistryConfig`.

    Raises:
        ConfigError: If a value from the environment or an override fails
            validation (for example a non-numeric ``SPECDOCK_PORT``).
    """
    data: dict[str, Any] = _env_values()

    overrides = {
        "port": port,
        "external_url": external_url,
        "spec_directory": spec_directory,
        "service_name": service_name,
        "fetch_timeout": fetch_timeout,
        "mock_seed": mock_seed,
    }
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return RegistryConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
