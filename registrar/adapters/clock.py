"""
System clock adapter - Implements Clock protocol.

Supplies wall-clock unix time truncated to whole seconds.
"""

import time


class SystemClock:
    """
    Implements Clock protocol via time.time().

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def now(self) -> int:
        return int(time.time())
