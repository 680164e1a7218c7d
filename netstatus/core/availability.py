"""Lease availability: a lease is active iff it expires strictly after now."""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from netstatus.core.models import LeaseRecord


def _now_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValueError("now must be timezone-aware")
    return now


def is_available(lease: LeaseRecord, now: Optional[datetime] = None) -> bool:
    """True when lease.expires_at is strictly after now (aware instants; default now is UTC wall clock)."""
    return lease.expires_at > _now_utc(now)


def filter_available(leases: Iterable[LeaseRecord], now: Optional[datetime] = None) -> List[LeaseRecord]:
    """Active leases in input order. now is fixed once so every lease is compared to the same instant."""
    ref = _now_utc(now)
    return [lease for lease in leases if is_available(lease, ref)]
