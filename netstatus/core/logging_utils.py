"""Structured logging for /api/status requests: pipeline summary and failures."""

import logging
import uuid
from typing import Optional

logger = logging.getLogger(__name__)


def new_trace_id() -> str:
    return str(uuid.uuid4())[:8]


def _ensure_trace_id(extra: dict) -> str:
    trace_id = extra.get("trace_id")
    if not trace_id:
        trace_id = new_trace_id()
        extra["trace_id"] = trace_id
    return trace_id


def _format(event: str, extra: dict) -> str:
    return event + " " + " ".join(f"{k}={v}" for k, v in sorted(extra.items()))


def log_status_request(
    trace_id: Optional[str] = None,
    leases_total: Optional[int] = None,
    leases_active: Optional[int] = None,
    ndp_entries: Optional[int] = None,
    macs: Optional[int] = None,
    duration_ms: Optional[float] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log one successful status build as key=value."""
    extra = extra or {}
    if trace_id:
        extra["trace_id"] = trace_id
    _ensure_trace_id(extra)
    if leases_total is not None:
        extra["leases_total"] = leases_total
    if leases_active is not None:
        extra["leases_active"] = leases_active
    if ndp_entries is not None:
        extra["ndp_entries"] = ndp_entries
    if macs is not None:
        extra["macs"] = macs
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 1)
    logger.info(_format("status_request", extra))


def log_status_failure(
    kind: str,
    detail: str,
    trace_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log a status build aborted by a source or parse error."""
    extra = extra or {}
    if trace_id:
        extra["trace_id"] = trace_id
    _ensure_trace_id(extra)
    extra["kind"] = kind
    extra["detail"] = repr(detail)
    logger.warning(_format("status_failure", extra))
