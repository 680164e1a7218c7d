"""Error kinds raised while reading and parsing the lease file and neighbor table.

Any of these aborts the current /api/status request; the HTTP layer maps them to 5xx.
"""

from typing import Optional


class StatusSourceError(Exception):
    """Base class for failures building the status view."""

    kind = "status_error"


class SourceUnavailable(StatusSourceError):
    """Lease file cannot be opened, or the neighbor command cannot be executed."""

    kind = "source_unavailable"


class MalformedRecord(StatusSourceError):
    """A lease block or neighbor line does not have the expected shape."""

    kind = "malformed_record"

    def __init__(self, message: str, index: Optional[int] = None, record: Optional[str] = None) -> None:
        super().__init__(message)
        self.index = index
        self.record = record


# Parsers document their failures as ParseError; same class.
ParseError = MalformedRecord


class CommandFailure(StatusSourceError):
    """Neighbor command ran but exited non-zero, timed out, or produced undecodable output."""

    kind = "command_failure"

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: Optional[str] = None) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
