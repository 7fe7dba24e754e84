import time
from typing import Protocol


class LedgerClock(Protocol):
    def timestamp(self) -> int:
        """Current ledger time in whole seconds."""
        ...


class SystemClock:
    def timestamp(self) -> int:
        return int(time.time())


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: int = 0):
        self.now = now

    def timestamp(self) -> int:
        return self.now

    def set(self, now: int) -> None:
        self.now = now

    def advance(self, seconds: int) -> None:
        self.now += seconds
