"""NDP neighbor-cache states as reported in the S column of `ndp -a`."""

import enum
from typing import Optional


class NdpCacheState(str, enum.Enum):
    """Neighbor cache state. Value is the display name used in JSON output."""

    NO_STATE = "No State"  # N
    WAIT_DELETE = "Wait Delete"  # W
    INCOMPLETE = "Incomplete"  # I
    REACHABLE = "Reachable"  # R
    STALE = "Stale"  # S
    DELAY = "Delay"  # D
    PROBE = "Probe"  # P
    UNKNOWN = "Unknown"  # ?

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["NdpCacheState"]:
        """Map a single-letter code or display name to a state. None for empty input; UNKNOWN for anything else."""
        if not token:
            return None
        state = _BY_CODE.get(token)
        if state is not None:
            return state
        for member in cls:
            if member.value.lower() == token.lower() or member.value.replace(" ", "").lower() == token.lower():
                return member
        return cls.UNKNOWN


_BY_CODE = {
    "N": NdpCacheState.NO_STATE,
    "W": NdpCacheState.WAIT_DELETE,
    "I": NdpCacheState.INCOMPLETE,
    "R": NdpCacheState.REACHABLE,
    "S": NdpCacheState.STALE,
    "D": NdpCacheState.DELAY,
    "P": NdpCacheState.PROBE,
    "?": NdpCacheState.UNKNOWN,
}
