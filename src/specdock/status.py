"""Translate registration outcomes into reported status.

An orchestration layer calls :func:`reconcile` once per change event for a
resource. The returned :class:`~specdock.models.StatusReport` carries the
fields to write back (``status``, ``url``, ``lastUpdated``,
``errorMessage``) and how long to wait before reconciling again.

Callers that need the failure itself (the CLI maps it to an exit code)
call :meth:`~specdock.registry.SpecRegistry.register` directly and build
the report with :func:`available_status` or :func:`failed_status`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from specdock.exceptions import SpecdockError
from specdock.models import RegistrationRecord, SpecRequest, SpecStatus, StatusReport
from specdock.registry import SpecRegistry

logger = logging.getLogger(__name__)

REQUEUE_AFTER_SUCCESS = 3600.0
REQUEUE_AFTER_FAILURE = 300.0


def pending_status() -> StatusReport:
    """Status for a request that has been seen but not yet registered."""
    return StatusReport(status=SpecStatus.PENDING)


def available_status(record: RegistrationRecord) -> StatusReport:
    return StatusReport(
        status=SpecStatus.AVAILABLE,
        url=record.doc_url,
        last_updated=datetime.now(timezone.utc),
        requeue_after=REQUEUE_AFTER_SUCCESS,
    )


def failed_status(exc: SpecdockError) -> StatusReport:
    return StatusReport(
        status=SpecStatus.FAILED,
        error_message=str(exc),
        requeue_after=REQUEUE_AFTER_FAILURE,
    )


def reconcile(registry: SpecRegistry, request: SpecRequest) -> StatusReport:
    """Register *request* and report the outcome.

    Registration errors are reported as ``Failed`` with a retry delay
    rather than raised; anything that is not a
    :class:`~specdock.exceptions.SpecdockError` propagates.
    """
    name = request.registration_name
    logger.info("Reconciling OpenAPISpec %s", name)
    try:
        record = registry.register(request)
    except SpecdockError as exc:
        logger.error("Failed to register OpenAPISpec %s: %s", name, exc)
        return failed_status(exc)
    return available_status(record)
