"""Core dataclasses shared across the durations package."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TripRecord:
    """Single decoded trip: raw timestamp text plus the zone pair."""

    pickup_time: str
    dropoff_time: str
    pickup_zone: int
    dropoff_zone: int


@dataclass
class RunningCounts:
    """Tallies maintained over one pass of the record source."""

    read: int = 0
    matched: int = 0
    skipped: int = 0

    @property
    def recorded(self) -> int:
        return self.matched - self.skipped

    def as_dict(self) -> dict[str, int]:
        return {"read": self.read, "matched": self.matched, "skipped": self.skipped}
