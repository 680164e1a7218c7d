"""Parsers for the two status sources: dhcpd lease database and `ndp -a` output."""

from netstatus.parsers.leases import (
    LeaseBlockScanner,
    iter_lease_blocks,
    parse_lease_block,
    parse_leases,
    read_lease_file,
)
from netstatus.parsers.ndp import parse_ndp_line, parse_ndp_output

__all__ = [
    "LeaseBlockScanner",
    "iter_lease_blocks",
    "parse_lease_block",
    "parse_leases",
    "read_lease_file",
    "parse_ndp_line",
    "parse_ndp_output",
]
