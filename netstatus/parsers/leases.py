"""ISC dhcpd lease database parser: `lease <ip> { ... }` blocks -> LeaseRecord.

Blocks are collected by a two-state scanner (OUTSIDE / INSIDE_BLOCK). Each
trimmed line of a block is appended to one buffer without separators, so field
extraction runs over text like::

    lease 10.0.0.5 {starts 4 2024/01/04 10:00:00;ends 4 2024/01/04 22:00:00;hardware ethernet aa:bb:cc:00:00:01;}

Directive order inside a block does not matter.
"""

import enum
import logging
import re
from datetime import datetime, timezone
from ipaddress import AddressValueError, IPv4Address
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from netstatus.core.errors import MalformedRecord, SourceUnavailable
from netstatus.core.models import LeaseRecord, canonical_mac

logger = logging.getLogger(__name__)

DEFAULT_LEASES_PATH = "/var/db/dhcpd/dhcpd.leases"

# dhcpd writes lease times in UTC
LEASE_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

_IP_RE = re.compile(r"lease (?P<ip>.*?) \{")
_ENDS_RE = re.compile(r"ends \d (?P<ends>.*?);")
_MAC_RE = re.compile(r"hardware ethernet (?P<mac>.*?);")
_HOSTNAME_RE = re.compile(r'client-hostname "(?P<hostname>.*?)";')


class ScannerState(str, enum.Enum):
    OUTSIDE = "outside"
    INSIDE_BLOCK = "inside_block"


class LeaseBlockScanner:
    """Feeds lines one at a time; yields the concatenated text of each closed lease block."""

    def __init__(self) -> None:
        self._state = ScannerState.OUTSIDE
        self._buffer: List[str] = []

    @property
    def state(self) -> ScannerState:
        return self._state

    def feed(self, line: str) -> Optional[str]:
        """Consume one raw line. Returns the block text when this line closes a block, else None."""
        line = line.strip()
        if self._state == ScannerState.OUTSIDE:
            if not line.startswith("lease"):
                return None
            self._state = ScannerState.INSIDE_BLOCK
        self._buffer.append(line)
        if line == "}":
            block = "".join(self._buffer)
            self._buffer = []
            self._state = ScannerState.OUTSIDE
            return block
        return None

    def pending(self) -> Optional[str]:
        """Text of an unterminated block, if input ended inside one."""
        if self._state == ScannerState.INSIDE_BLOCK:
            return "".join(self._buffer)
        return None


def iter_lease_blocks(lines: Iterable[str]) -> Iterator[str]:
    """Yield the concatenated text of every closed lease block in lines."""
    scanner = LeaseBlockScanner()
    for line in lines:
        block = scanner.feed(line)
        if block is not None:
            yield block
    tail = scanner.pending()
    if tail is not None:
        logger.warning("Ignoring unterminated lease block at end of input: %r", tail[:80])


def _required(pattern: "re.Pattern[str]", group: str, block: str, index: int, what: str) -> str:
    m = pattern.search(block)
    if m is None:
        raise MalformedRecord(f"lease block {index}: missing {what}", index=index, record=block)
    return m.group(group)


def parse_lease_block(block: str, index: int = 0) -> LeaseRecord:
    """Build a LeaseRecord from one concatenated block. Raises MalformedRecord on missing or bad fields."""
    ip_text = _required(_IP_RE, "ip", block, index, "lease address")
    ends_text = _required(_ENDS_RE, "ends", block, index, "ends")
    mac_text = _required(_MAC_RE, "mac", block, index, "hardware ethernet")

    try:
        ip_address = IPv4Address(ip_text.strip())
    except AddressValueError as e:
        raise MalformedRecord(f"lease block {index}: bad IPv4 address {ip_text!r}: {e}", index=index, record=block) from e

    try:
        expires_at = datetime.strptime(ends_text.strip(), LEASE_TIME_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError as e:
        raise MalformedRecord(f"lease block {index}: bad ends time {ends_text!r}: {e}", index=index, record=block) from e

    mac_address = canonical_mac(mac_text)
    if not mac_address:
        raise MalformedRecord(f"lease block {index}: empty hardware ethernet", index=index, record=block)

    host_match = _HOSTNAME_RE.search(block)
    hostname = host_match.group("hostname") if host_match else None

    return LeaseRecord(
        mac_address=mac_address,
        ip_address=ip_address,
        expires_at=expires_at,
        hostname=hostname,
    )


def parse_leases(text: str, strict: bool = True) -> List[LeaseRecord]:
    """
    Parse the full lease database text into one LeaseRecord per block, in file order.

    strict=True: first malformed block raises MalformedRecord, nothing is returned.
    strict=False: malformed blocks are logged and skipped.
    """
    records: List[LeaseRecord] = []
    for index, block in enumerate(iter_lease_blocks(text.splitlines())):
        try:
            records.append(parse_lease_block(block, index))
        except MalformedRecord as e:
            if strict:
                raise
            logger.warning("Skipping malformed lease block: %s", e)
    return records


def read_lease_file(path: Union[str, Path] = DEFAULT_LEASES_PATH) -> str:
    """Read the lease database once. Raises SourceUnavailable when it cannot be opened or decoded."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(f"cannot read lease file {path}: {e}") from e
