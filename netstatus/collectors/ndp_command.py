"""Run the IPv6 neighbor-table command and return its stdout as text."""

import logging
import subprocess
from typing import Optional, Sequence

from netstatus.core.errors import CommandFailure, SourceUnavailable

logger = logging.getLogger(__name__)

DEFAULT_NDP_COMMAND = ("ndp", "-a")
DEFAULT_TIMEOUT_SEC = 5.0


def run_ndp_command(
    command: Optional[Sequence[str]] = None,
    timeout_sec: Optional[float] = DEFAULT_TIMEOUT_SEC,
) -> str:
    """
    Execute command (default `ndp -a`) and return decoded stdout.

    Raises SourceUnavailable when the executable cannot be started, and
    CommandFailure on non-zero exit, timeout, or non-UTF-8 output.
    """
    cmd = list(command or DEFAULT_NDP_COMMAND)
    try:
        out = subprocess.run(
            cmd,
            capture_output=True,
            timeout=timeout_sec,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandFailure(f"{' '.join(cmd)} timed out after {timeout_sec}s") from e
    except OSError as e:
        raise SourceUnavailable(f"cannot execute {' '.join(cmd)}: {e}") from e

    stderr = (out.stderr or b"").decode("utf-8", errors="replace").strip()
    if out.returncode != 0:
        raise CommandFailure(
            f"{' '.join(cmd)} exited with status {out.returncode}: {stderr}",
            returncode=out.returncode,
            stderr=stderr,
        )
    if stderr:
        logger.debug("%s stderr: %s", cmd[0], stderr)
    try:
        return (out.stdout or b"").decode("utf-8")
    except UnicodeDecodeError as e:
        raise CommandFailure(f"{' '.join(cmd)} produced undecodable output: {e}", returncode=out.returncode) from e
