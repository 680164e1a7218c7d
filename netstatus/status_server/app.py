"""FastAPI app for GET /api/status (merged DHCP leases + IPv6 neighbors) and GET / (links).

Read-only: each request re-reads the lease file and re-runs the neighbor command."""

import logging
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse

from netstatus.core.errors import CommandFailure, MalformedRecord, SourceUnavailable, StatusSourceError
from netstatus.core.logging_utils import log_status_failure, new_trace_id
from netstatus.status_server.reader import StatusReader
from netstatus.status_server.status import build_status

logger = logging.getLogger(__name__)

# Error kind -> HTTP status
_STATUS_CODES = {
    SourceUnavailable: 503,
    CommandFailure: 502,
    MalformedRecord: 500,
}


def status_code_for(exc: StatusSourceError) -> int:
    for cls, code in _STATUS_CODES.items():
        if isinstance(exc, cls):
            return code
    return 500


def create_app(reader: Any) -> FastAPI:
    """Build FastAPI app around reader (StatusReader or any object with get_leases / get_neighbors)."""
    app = FastAPI(title="netstatus", description="DHCP leases and IPv6 neighbors by MAC address")

    @app.get("/", response_class=HTMLResponse)
    def get_root() -> str:
        return """<!DOCTYPE html>
<html lang="en"><head><meta charset="UTF-8"><title>netstatus</title></head>
<body style="font-family:system-ui;padding:1rem;">
  <p><strong>netstatus</strong>: DHCP leases and IPv6 neighbors by MAC address.</p>
  <p><a href="/api/status">/api/status</a> · <a href="/docs">/docs</a></p>
</body></html>"""

    @app.get("/api/status")
    def get_status() -> Any:
        """Return {mac: {dhcp_lease, ndp_entries}}. Any source or parse error aborts the request with 5xx."""
        trace_id = new_trace_id()
        try:
            return build_status(reader, trace_id=trace_id)
        except StatusSourceError as e:
            log_status_failure(e.kind, str(e), trace_id=trace_id)
            return JSONResponse(
                status_code=status_code_for(e),
                content={"error": e.kind, "detail": str(e), "trace_id": trace_id},
            )
        except Exception as e:
            logger.exception("get_status failed: %s", e)
            return JSONResponse(
                status_code=500,
                content={"error": "internal_error", "detail": str(e), "trace_id": trace_id},
            )

    return app


def run_server(config: dict, host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Start the status server on status_server.host:port from config (arguments override)."""
    import uvicorn

    from netstatus.config.settings import get_server_config

    server_cfg = get_server_config(config)
    host = host or server_cfg["host"] or "0.0.0.0"
    port = port or server_cfg["port"] or 8080

    reader = StatusReader(config)
    app = create_app(reader)
    logger.info(
        "Status server on %s:%s (leases=%s, ndp=%s, strict=%s)",
        host, port, reader.leases_path, " ".join(reader.ndp_command), reader.strict,
    )
    uvicorn.run(app, host=host, port=int(port), log_level="info")
