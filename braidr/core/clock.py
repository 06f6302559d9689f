from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in naive UTC, the same convention as stored timestamps."""

    def now(self) -> datetime:
        return datetime.utcnow()


class FixedClock:
    """Clock pinned to a given instant; ``advance`` moves it forward."""

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, delta) -> None:
        self.current = self.current + delta
