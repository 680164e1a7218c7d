"""Build the /api/status payload: read, filter, merge, serialize."""

import time
from datetime import datetime
from typing import Any, Dict, Optional

from netstatus.core.availability import filter_available
from netstatus.core.logging_utils import log_status_request
from netstatus.core.merge import merge_entries, serialize_merged


def build_status(
    reader: Any,
    now: Optional[datetime] = None,
    trace_id: Optional[str] = None,
) -> Dict[str, Dict[str, Any]]:
    """Run one status pipeline against reader (get_leases / get_neighbors).

    Errors from either source propagate unchanged; no partial result is built.

    Returns:
        {mac: {"dhcp_lease": {...} | None, "ndp_entries": [{...}, ...]}}, sorted by mac.
    """
    t0 = time.monotonic()
    leases = reader.get_leases()
    neighbors = reader.get_neighbors()
    active = filter_available(leases, now)
    merged = merge_entries(active, neighbors)
    log_status_request(
        trace_id=trace_id,
        leases_total=len(leases),
        leases_active=len(active),
        ndp_entries=len(neighbors),
        macs=len(merged),
        duration_ms=(time.monotonic() - t0) * 1000.0,
    )
    return serialize_merged(merged)
