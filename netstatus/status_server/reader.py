"""Read-only access to the two status sources: dhcpd lease file and `ndp -a` output."""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from netstatus.collectors.ndp_command import run_ndp_command
from netstatus.config.settings import get_leases_config, get_ndp_config
from netstatus.core.models import LeaseRecord, NeighborEntry
from netstatus.parsers.leases import parse_leases, read_lease_file
from netstatus.parsers.ndp import parse_ndp_output

logger = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str], Optional[float]], str]


class StatusReader:
    """Reads and parses both sources on every call; nothing is cached between requests."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        command_runner: Optional[CommandRunner] = None,
    ) -> None:
        leases_cfg = get_leases_config(config)
        ndp_cfg = get_ndp_config(config)
        self.leases_path: str = leases_cfg["path"]
        self.strict: bool = leases_cfg["strict"]
        self.ndp_command: List[str] = ndp_cfg["command"]
        self.ndp_timeout_sec: Optional[float] = ndp_cfg["timeout_sec"]
        self._run = command_runner or run_ndp_command

    def get_leases(self) -> List[LeaseRecord]:
        """All lease blocks in file order (expired ones included)."""
        text = read_lease_file(self.leases_path)
        return parse_leases(text, strict=self.strict)

    def get_neighbors(self) -> List[NeighborEntry]:
        """All neighbor entries in command output order."""
        text = self._run(self.ndp_command, self.ndp_timeout_sec)
        return parse_ndp_output(text)
