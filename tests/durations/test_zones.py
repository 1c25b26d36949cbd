from __future__ import annotations

from datetime import datetime

import pytest

from tripanalyzer.durations.domain_types import TripRecord
from tripanalyzer.durations.zones import (
    JFK_ZONE,
    MIDTOWN_ZONES,
    ZoneFilter,
    is_jfk_dropoff,
    is_midtown_pickup,
    is_weekday,
)


@pytest.mark.parametrize("zone", [90, 100, 161, 162, 163, 164, 186, 230, 234])
def test_midtown_zones_qualify(zone):
    assert is_midtown_pickup(zone)


def test_zones_outside_midtown_do_not_qualify():
    midtown = set(MIDTOWN_ZONES)
    for zone in range(0, 300):
        if zone in midtown:
            continue
        assert not is_midtown_pickup(zone), zone


def test_midtown_constant_is_sorted():
    assert list(MIDTOWN_ZONES) == sorted(MIDTOWN_ZONES)
    assert len(MIDTOWN_ZONES) == 9


def test_jfk_dropoff_only_matches_132():
    assert JFK_ZONE == 132
    assert is_jfk_dropoff(132)
    assert not any(is_jfk_dropoff(zone) for zone in range(0, 300) if zone != 132)


def test_weekday_predicate():
    # 2021-06-07 is a Monday.
    monday = datetime(2021, 6, 7, 9, 15)
    for offset in range(5):
        assert is_weekday(monday.replace(day=7 + offset))
    assert not is_weekday(datetime(2021, 6, 5, 12, 0))  # Saturday
    assert not is_weekday(datetime(2021, 6, 6, 12, 0))  # Sunday


def test_zone_filter_defaults_and_overrides():
    default = ZoneFilter()
    assert default.pickup_zones == MIDTOWN_ZONES
    record = TripRecord("2021-06-07 09:15:00", "2021-06-07 09:45:00", 161, 132)
    assert default.matches_zones(record)
    assert not default.matches_zones(TripRecord("a", "b", 1, 132))
    assert not default.matches_zones(TripRecord("a", "b", 161, 138))

    custom = ZoneFilter(pickup_zones=[48, 43, 48], dropoff_zone=138)
    assert custom.pickup_zones == (43, 48)
    assert custom.matches_zones(TripRecord("a", "b", 48, 138))
    assert not custom.matches_pickup(161)
