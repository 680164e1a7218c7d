"""Pytest fixtures for netstatus tests."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import pytest
import yaml

# Ensure project root is in path for netstatus imports
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


LEASE_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

NDP_HEADER = "Neighbor                             Linklayer Address  Netif Expire    S Flags"


def lease_block(
    ip: str,
    mac: Optional[str],
    ends: Optional[datetime],
    hostname: Optional[str] = None,
    starts: Optional[datetime] = None,
) -> str:
    """Render one dhcpd lease block the way dhcpd writes it (indented directives)."""
    starts = starts or datetime(2024, 1, 1, tzinfo=timezone.utc)
    lines = [f"lease {ip} {{"]
    lines.append(f"  starts 1 {starts.strftime(LEASE_TIME_FORMAT)};")
    if ends is not None:
        lines.append(f"  ends {ends.isoweekday() % 7} {ends.strftime(LEASE_TIME_FORMAT)};")
    lines.append("  binding state active;")
    if mac is not None:
        lines.append(f"  hardware ethernet {mac};")
    if hostname is not None:
        lines.append(f'  client-hostname "{hostname}";')
    lines.append("}")
    return "\n".join(lines) + "\n"


def leases_file_text(*blocks: str) -> str:
    header = (
        "# The format of this file is documented in the dhcpd.leases(5) manual page.\n"
        "# This lease file was written by isc-dhcp-4.4.3\n"
        "\n"
        'server-duid "\\000\\001\\000\\001";\n'
        "\n"
    )
    return header + "\n".join(blocks)


@pytest.fixture
def project_root() -> Path:
    return _project_root


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@pytest.fixture
def scenario_leases(now: datetime) -> str:
    """One lease active for a year (:01, laptop) and one expired a year ago (:02)."""
    return leases_file_text(
        lease_block("10.0.0.5", "aa:bb:cc:00:00:01", now + timedelta(days=365), hostname="laptop"),
        lease_block("10.0.0.6", "aa:bb:cc:00:00:02", now - timedelta(days=365)),
    )


@pytest.fixture
def scenario_ndp() -> str:
    return "\n".join(
        [
            NDP_HEADER,
            "fe80::1                              aa:bb:cc:00:00:01    em0 23h59m58s R R",
            "fe80::2                              aa:bb:cc:00:00:03    em0 permanent S",
            "",
        ]
    )


@pytest.fixture
def config(project_root: Path) -> dict:
    """Load example config dict from YAML."""
    with open(project_root / "config" / "config.yaml.example", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
