"""Zone and weekday predicates deciding which trips get measured."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Tuple

from .domain_types import TripRecord

# Taxi zone ids (TLC zone lookup) treated as midtown pickups; kept sorted.
MIDTOWN_ZONES: Tuple[int, ...] = (90, 100, 161, 162, 163, 164, 186, 230, 234)
JFK_ZONE = 132


def _sorted_contains(values: Tuple[int, ...], zone: int) -> bool:
    idx = bisect_left(values, zone)
    return idx < len(values) and values[idx] == zone


def is_midtown_pickup(zone: int, zones: Tuple[int, ...] = MIDTOWN_ZONES) -> bool:
    """Membership in a sorted pickup-zone tuple, midtown by default."""
    return _sorted_contains(zones, zone)


def is_jfk_dropoff(zone: int, jfk_zone: int = JFK_ZONE) -> bool:
    return zone == jfk_zone


def is_weekday(parsed_time: datetime) -> bool:
    """True for Monday (1) through Friday (5)."""
    return 1 <= parsed_time.isoweekday() <= 5


@dataclass(frozen=True, init=False)
class ZoneFilter:
    """Pickup/dropoff zone gate, fixed for the lifetime of a run."""

    pickup_zones: Tuple[int, ...]
    dropoff_zone: int

    def __init__(
        self,
        pickup_zones: Iterable[int] = MIDTOWN_ZONES,
        dropoff_zone: int = JFK_ZONE,
    ) -> None:
        zones = tuple(sorted({int(zone) for zone in pickup_zones}))
        object.__setattr__(self, "pickup_zones", zones)
        object.__setattr__(self, "dropoff_zone", int(dropoff_zone))

    def matches_pickup(self, zone: int) -> bool:
        return is_midtown_pickup(zone, self.pickup_zones)

    def matches_dropoff(self, zone: int) -> bool:
        return is_jfk_dropoff(zone, self.dropoff_zone)

    def matches_zones(self, record: TripRecord) -> bool:
        return self.matches_pickup(record.pickup_zone) and self.matches_dropoff(
            record.dropoff_zone
        )


__all__ = [
    "JFK_ZONE",
    "MIDTOWN_ZONES",
    "ZoneFilter",
    "is_jfk_dropoff",
    "is_midtown_pickup",
    "is_weekday",
]
