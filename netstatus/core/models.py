"""LeaseRecord / NeighborEntry / MergedEntry: per-request view of who is on the network."""

from dataclasses import dataclass, field
from datetime import datetime
from ipaddress import IPv4Address
from typing import Any, Dict, List, Optional

from netstatus.core.enums import NdpCacheState


def canonical_mac(value: str) -> str:
    """Lowercase, trimmed MAC address used as the merge key."""
    return value.strip().lower()


@dataclass(frozen=True)
class LeaseRecord:
    """One DHCP lease block from the lease database."""

    mac_address: str
    ip_address: IPv4Address
    expires_at: datetime  # timezone-aware, UTC
    hostname: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mac_address": self.mac_address,
            "ip_address": str(self.ip_address),
            "expires_at": self.expires_at.isoformat(),
            "hostname": self.hostname,
        }


@dataclass(frozen=True)
class NeighborEntry:
    """One row of the IPv6 neighbor table. Only mac_address and ip_address take part in the merge."""

    mac_address: str
    ip_address: str
    interface: Optional[str] = None
    expire: Optional[str] = None
    cache_state: Optional[NdpCacheState] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mac_address": self.mac_address,
            "ip_address": self.ip_address,
            "interface": self.interface,
            "expire": self.expire,
            "cache_state": self.cache_state.value if self.cache_state is not None else None,
        }


@dataclass
class MergedEntry:
    """Response unit keyed by MAC: active lease (if any) plus neighbor entries in parse order."""

    dhcp_lease: Optional[LeaseRecord] = None
    ndp_entries: List[NeighborEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dhcp_lease": self.dhcp_lease.to_dict() if self.dhcp_lease is not None else None,
            "ndp_entries": [e.to_dict() for e in self.ndp_entries],
        }
