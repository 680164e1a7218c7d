"""Data model, availability filter, merge reducer and errors for the status view."""

from netstatus.core.availability import filter_available, is_available
from netstatus.core.enums import NdpCacheState
from netstatus.core.errors import (
    CommandFailure,
    MalformedRecord,
    ParseError,
    SourceUnavailable,
    StatusSourceError,
)
from netstatus.core.merge import merge_entries, serialize_merged
from netstatus.core.models import LeaseRecord, MergedEntry, NeighborEntry

__all__ = [
    "LeaseRecord",
    "NeighborEntry",
    "MergedEntry",
    "NdpCacheState",
    "is_available",
    "filter_available",
    "merge_entries",
    "serialize_merged",
    "StatusSourceError",
    "SourceUnavailable",
    "MalformedRecord",
    "ParseError",
    "CommandFailure",
]
