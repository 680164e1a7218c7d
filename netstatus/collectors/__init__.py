"""External command collectors."""

from netstatus.collectors.ndp_command import DEFAULT_NDP_COMMAND, run_ndp_command

__all__ = ["DEFAULT_NDP_COMMAND", "run_ndp_command"]
