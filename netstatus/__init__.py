"""netstatus: DHCP lease + IPv6 neighbor status API (GET /api/status)."""
