"""`ndp -a` output parser -> NeighborEntry.

Format (first line is a header and is always dropped)::

    Neighbor                             Linklayer Address  Netif Expire    S Flags
    fe80::1%em0                          aa:bb:cc:00:00:01    em0 23h59m58s R R
"""

import logging
from typing import List

from netstatus.core.enums import NdpCacheState
from netstatus.core.errors import MalformedRecord
from netstatus.core.models import NeighborEntry, canonical_mac

logger = logging.getLogger(__name__)

# Column positions after whitespace split
COL_IP = 0
COL_MAC = 1
COL_NETIF = 2
COL_EXPIRE = 3
COL_STATE = 4


def parse_ndp_line(line: str, lineno: int = 0) -> NeighborEntry:
    """Parse one trimmed, non-empty row. Needs at least <ip> <mac>; later columns are optional."""
    cols = line.split()
    if len(cols) < 2:
        raise MalformedRecord(f"ndp line {lineno}: expected at least 2 columns, got {len(cols)}", index=lineno, record=line)
    return NeighborEntry(
        mac_address=canonical_mac(cols[COL_MAC]),
        ip_address=cols[COL_IP],
        interface=cols[COL_NETIF] if len(cols) > COL_NETIF else None,
        expire=cols[COL_EXPIRE] if len(cols) > COL_EXPIRE else None,
        cache_state=NdpCacheState.from_token(cols[COL_STATE]) if len(cols) > COL_STATE else None,
    )


def parse_ndp_output(text: str) -> List[NeighborEntry]:
    """Parse full command stdout into entries, in output order. Raises MalformedRecord on a short row."""
    entries: List[NeighborEntry] = []
    # lineno counts from the header (line 1)
    for lineno, raw in enumerate(text.split("\n")[1:], start=2):
        line = raw.strip()
        if not line:
            continue
        entries.append(parse_ndp_line(line, lineno))
    logger.debug("Parsed %d ndp entries", len(entries))
    return entries
