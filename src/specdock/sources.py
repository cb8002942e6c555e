"""Resolve the text of an OpenAPI document from a registration request.

Exactly one source is honoured, in priority order:

1. ``spec_content`` -- inline text, used as-is when non-empty (any
   ``spec_path`` is then ignored);
2. ``spec_path`` starting with ``http://`` or ``https://`` -- downloaded
   with :mod:`httpx`;
3. any other ``spec_path`` -- read from the local filesystem.

A request with neither raises :class:`~specdock.exceptions.MissingSourceError`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx

from specdock.exceptions import FetchError, IOError_, MissingSourceError
from specdock.models import SpecRequest

logger = logging.getLogger(__name__)


def is_remote(spec_path: str) -> bool:
    """Return True if *spec_path* is an HTTP(S) URL."""
    return spec_path.startswith(("http://", "https://"))


def acquire_source(request: SpecRequest, timeout: Optional[float] = None) -> str:
    """Return the document text for *request*.

    Args:
        request: The registration request.
        timeout: Seconds to wait on a remote source. ``None`` waits
            indefinitely.

    Raises:
        MissingSourceError: If neither ``spec_content`` nor ``spec_path``
            is set.
        FetchError: If a remote source fails or answers with a non-2xx status.
        IOError_: If a local file cannot be opened or read.
    """
    name = request.registration_name
    if request.spec_content:
        logger.info("Using direct OpenAPI spec content for %s", name)
        return request.spec_content
    if not request.spec_path:
        raise MissingSourceError(
            f"Neither specPath nor specContent provided in OpenAPISpec {name}"
        )
    if is_remote(request.spec_path):
        return fetch_remote(request.spec_path, timeout=timeout)
    return read_local(request.spec_path)


def fetch_remote(url: str, timeout: Optional[float] = None) -> str:
    """Download a spec from *url*.

    Raises:
        FetchError: On a transport failure or a non-2xx response.
    """
    logger.info("Downloading OpenAPI spec from URL: %s", url)
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FetchError(
            f"Failed to download OpenAPI spec from URL {url}: "
            f"status code {exc.response.status_code}"
        ) from exc
    except httpx.RequestError as exc:
        raise FetchError(f"Failed to download OpenAPI spec from URL {url}: {exc}") from exc
    return response.text


def read_local(path: str) -> str:
    """Read a spec from the local filesystem.

    Raises:
        IOError_: If the file cannot be opened, read, or decoded as UTF-8.
    """
    logger.info("Reading OpenAPI spec from file: %s", path)
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IOError_(f"Failed to open OpenAPI spec file {path}: {exc}") from exc
