"""Concurrent, in-memory registry of published OpenAPI documents.

:meth:`SpecRegistry.register` runs the whole publication sequence for one
request:

1. acquire the document text (:mod:`specdock.sources`);
2. optionally run the mock pipeline (:mod:`specdock.mocking`), falling back
   to the original text on any failure;
3. persist the text atomically to ``<spec_directory>/<name>.json``;
4. structurally check the persisted file, recording (not raising) any
   :class:`~specdock.exceptions.ValidationWarning`;
5. swap a new immutable :class:`~specdock.models.RegistrationRecord` into
   the published map.

Locking:

* Steps 1-4 run outside the map lock. Registrations for *different* names
  proceed in parallel; registrations for the *same* name are serialized by
  a per-name lock so the file and the record are written by one caller at
  a time.
* Only the dict assignment of step 5 and :meth:`SpecRegistry.lookup` take
  the map lock. A reader sees either the previous record or the new one,
  never a partial record.
* Nothing is published when steps 1 or 3 fail, so a prior record for the
  same name stays visible.

The ``.json`` suffix is kept even when the mock pipeline wrote YAML, so
published URLs do not change when mocking is toggled.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from specdock.exceptions import IOError_, ValidationWarning
from specdock.mocking import mock_document
from specdock.models import RegistrationRecord, RegistryConfig, SpecRequest, ValidationResult
from specdock.parser.validator import validate_spec_file
from specdock.sources import acquire_source

logger = logging.getLogger(__name__)


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up and the error re-raised.
    """
    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


class SpecRegistry:
    """Publishes documents under unique registration names.

    Args:
        config: Registry settings. Defaults to :class:`RegistryConfig` defaults.

    Raises:
        IOError_: If the spec directory cannot be created.
    """

    def __init__(self, config: Optional[RegistryConfig] = None) -> None:
        self._config = config or RegistryConfig()
        self._spec_dir = Path(self._config.spec_directory)
        try:
            self._spec_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOError_(f"Failed to create spec directory {self._spec_dir}: {exc}") from exc

        self._records: dict[str, RegistrationRecord] = {}
        self._records_lock = threading.Lock()
        # name -> [lock, callers holding or waiting on it]
        self._name_locks: dict[str, list] = {}
        self._name_locks_guard = threading.Lock()

    @property
    def config(self) -> RegistryConfig:
        return self._config

    def spec_file_path(self, name: str) -> Path:
        """Return where the document for registration *name* is persisted."""
        return self._spec_dir / f"{name}.json"

    # ------------------------------------------------------------------ #
    # Publication
    # ------------------------------------------------------------------ #

    def register(self, request: SpecRequest) -> RegistrationRecord:
        """Acquire, optionally mock, persist, check, and publish *request*.

        Returns:
            The newly published record.

        Raises:
            MissingSourceError: If the request has no content and no path.
            FetchError: If a remote source cannot be downloaded.
            IOError_: If a local source cannot be read or the document
                cannot be persisted.
        """
        name = request.registration_name
        with self._name_lock(name):
            content = acquire_source(request, timeout=self._config.fetch_timeout)

            mocked = False
            if request.mock:
                content, mocked = self._apply_mock(name, content)

            file_path = self.spec_file_path(name)
            try:
                _atomic_write(file_path, content)
            except OSError as exc:
                raise IOError_(f"Failed to write spec file {file_path}: {exc}") from exc

            validation = self._validate(name, file_path)

            base_url = self._config.base_url(request.namespace)
            record = RegistrationRecord(
                name=name,
                title=request.title,
                spec_path=request.spec_path if not request.spec_content else "",
                file_path=str(file_path),
                spec_url=f"{base_url}/specs/{file_path.name}",
                doc_url=f"{base_url}/docs/{name}",
                mocked=mocked,
                theme=dict(request.theme),
                validation=validation,
                published_at=datetime.now(timezone.utc),
            )

            with self._records_lock:
                self._records[name] = record

        logger.info("Published OpenAPI spec %s at %s", name, record.doc_url)
        return record

    def _apply_mock(self, name: str, content: str) -> tuple[str, bool]:
        """Return ``(text, mocked)``; the original text when the pipeline fails."""
        logger.info("Mock is enabled for %s, generating fake examples", name)
        try:
            mocked = mock_document(
                content,
                seed=self._config.mock_seed,
                max_depth=self._config.max_ref_depth,
                max_nodes=self._config.max_example_nodes,
            )
        except Exception as exc:
            logger.warning(
                "Failed to generate mock data for %s: %s. Using original content.", name, exc
            )
            return content, False
        return mocked, True

    def _validate(self, name: str, file_path: Path) -> ValidationResult:
        try:
            return validate_spec_file(file_path)
        except ValidationWarning as exc:
            logger.warning("OpenAPI spec %s might not be valid: %s", name, exc)
            return ValidationResult(valid=False, warning=str(exc))

    @contextmanager
    def _name_lock(self, name: str) -> Iterator[None]:
        """Serialize registrations of *name*.

        The entry is dropped once no caller uses it and nothing is published
        under *name*, so names that only ever fail do not accumulate locks.
        """
        with self._name_locks_guard:
            entry = self._name_locks.get(name)
            if entry is None:
                entry = self._name_locks[name] = [threading.Lock(), 0]
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._name_locks_guard:
                entry[1] -= 1
                if entry[1] == 0 and self.lookup(name) is None:
                    del self._name_locks[name]

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def lookup(self, name: str) -> Optional[RegistrationRecord]:
        """Return the record published under *name*, or None."""
        with self._records_lock:
            return self._records.get(name)

    def list_records(self) -> list[RegistrationRecord]:
        """Return a snapshot of all published records, sorted by name."""
        with self._records_lock:
            records = list(self._records.values())
        return sorted(records, key=lambda record: record.name)
