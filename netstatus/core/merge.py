"""Merge active leases and neighbor entries into one view keyed by MAC address."""

from typing import Dict, Iterable

from netstatus.core.models import LeaseRecord, MergedEntry, NeighborEntry


def merge_entries(
    leases: Iterable[LeaseRecord],
    neighbors: Iterable[NeighborEntry],
) -> Dict[str, MergedEntry]:
    """
    Outer join on mac_address.

    leases must already be filtered to active ones. Leases are applied first
    (last lease for a MAC wins), then every neighbor entry is appended to its
    MAC's list, creating a lease-less entry when needed. Inputs are not
    mutated. Returned dict is sorted by MAC.
    """
    merged: Dict[str, MergedEntry] = {}
    for lease in leases:
        merged[lease.mac_address] = MergedEntry(dhcp_lease=lease, ndp_entries=[])
    for entry in neighbors:
        if entry.mac_address not in merged:
            merged[entry.mac_address] = MergedEntry(dhcp_lease=None, ndp_entries=[])
        merged[entry.mac_address].ndp_entries.append(entry)
    return {mac: merged[mac] for mac in sorted(merged)}


def serialize_merged(merged: Dict[str, MergedEntry]) -> Dict[str, Dict]:
    """JSON-ready form: {mac: {"dhcp_lease": ..., "ndp_entries": [...]}}."""
    return {mac: entry.to_dict() for mac, entry in merged.items()}
