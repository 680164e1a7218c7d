"""Status server: GET /api/status merging DHCP leases and IPv6 neighbors by MAC."""

from netstatus.status_server.reader import StatusReader
from netstatus.status_server.status import build_status

__all__ = ["StatusReader", "build_status"]
