"""Clock capability used for "now" defaults in the data model."""

import time
from typing import Callable

# A clock returns the current time as whole unix seconds
Clock = Callable[[], int]


def system_clock() -> int:
    """Return the current wall-clock time in unix seconds."""
    return int(time.time())


def fixed_clock(timestamp: int) -> Clock:
    """Create a clock that always returns ``timestamp``.

    Args:
        timestamp: Unix seconds to report

    Returns:
        Clock callable
    """

    def _clock() -> int:
        return timestamp

    return _clock
