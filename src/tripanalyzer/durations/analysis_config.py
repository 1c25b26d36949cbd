from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Mapping, Tuple

import yaml

from .errors import ConfigError
from .hourly_histograms import (
    DEFAULT_HIGHEST_SECONDS,
    DEFAULT_LOWEST_SECONDS,
    DEFAULT_MIN_DURATION_SECONDS,
    DEFAULT_SIGNIFICANT_DIGITS,
    HourlyDurationHistograms,
)
from .zones import JFK_ZONE, MIDTOWN_ZONES, ZoneFilter

logger = logging.getLogger(__name__)


def _parse_int(value: object, label: str) -> int:
    """
    Coerce a configuration value into an int.

    Args:
        value: Raw value from the configuration.
        label: Human-readable label for error messages.
    Returns:
        The integer value. Booleans and fractional floats are rejected.
    """
    if isinstance(value, bool):
        raise ConfigError(f"{label} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ConfigError(f"{label} must be an integer, got {value!r}")


def _parse_zone(value: object, label: str) -> int:
    zone = _parse_int(value, label)
    if zone < 0:
        raise ConfigError(f"{label} must be a non-negative zone id, got {zone}")
    return zone


@dataclass(frozen=True)
class AnalysisConfig:
    lowest_seconds: int = DEFAULT_LOWEST_SECONDS
    highest_seconds: int = DEFAULT_HIGHEST_SECONDS
    significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS
    min_duration_seconds: int = DEFAULT_MIN_DURATION_SECONDS
    pickup_zones: Tuple[int, ...] = MIDTOWN_ZONES
    dropoff_zone: int = JFK_ZONE
    version: str | None = None

    def __post_init__(self) -> None:
        if not self.pickup_zones:
            raise ConfigError("pickup_zones must contain at least one zone id")
        zones = tuple(sorted({_parse_zone(zone, "pickup_zones entry") for zone in self.pickup_zones}))
        object.__setattr__(self, "pickup_zones", zones)
        object.__setattr__(self, "dropoff_zone", _parse_zone(self.dropoff_zone, "dropoff_zone"))

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AnalysisConfig":
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Analysis config YAML not found at {config_path}")
        with config_path.open("r", encoding="utf-8") as handle:
            try:
                data = yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Could not parse {config_path}: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ConfigError("Analysis config YAML must contain a mapping at the top level")
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "AnalysisConfig":
        known = {"version", "histogram", "min_duration_seconds", "pickup_zones", "dropoff_zone"}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            logger.warning("Ignoring unknown analysis config keys: %s", ", ".join(unknown))

        histogram = data.get("histogram") or {}
        if not isinstance(histogram, Mapping):
            raise ConfigError("'histogram' must be a mapping")
        kwargs: Dict[str, object] = {}
        for key in ("lowest_seconds", "highest_seconds", "significant_digits"):
            if histogram.get(key) is not None:
                kwargs[key] = _parse_int(histogram[key], f"histogram.{key}")
        if data.get("min_duration_seconds") is not None:
            kwargs["min_duration_seconds"] = _parse_int(
                data["min_duration_seconds"], "min_duration_seconds"
            )
        pickup_zones = data.get("pickup_zones")
        if pickup_zones is not None:
            if not isinstance(pickup_zones, list):
                raise ConfigError("'pickup_zones' must be a list of zone ids")
            kwargs["pickup_zones"] = tuple(pickup_zones)
        if data.get("dropoff_zone") is not None:
            kwargs["dropoff_zone"] = data["dropoff_zone"]
        version = data.get("version")
        if version is not None:
            kwargs["version"] = str(version)
        return cls(**kwargs)

    def to_yaml(self, path: str | Path) -> None:
        output: Dict[str, object] = {}
        if self.version is not None:
            output["version"] = self.version
        output["histogram"] = {
            "lowest_seconds": self.lowest_seconds,
            "highest_seconds": self.highest_seconds,
            "significant_digits": self.significant_digits,
        }
        output["min_duration_seconds"] = self.min_duration_seconds
        output["pickup_zones"] = list(self.pickup_zones)
        output["dropoff_zone"] = self.dropoff_zone
        dest = Path(path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        with dest.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(output, handle, sort_keys=True)

    def with_overrides(self, **overrides: object) -> "AnalysisConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self

    def zone_filter(self) -> ZoneFilter:
        return ZoneFilter(self.pickup_zones, self.dropoff_zone)

    def build_accumulator(self) -> HourlyDurationHistograms:
        return HourlyDurationHistograms(
            lowest=self.lowest_seconds,
            highest=self.highest_seconds,
            significant_digits=self.significant_digits,
            min_duration_seconds=self.min_duration_seconds,
        )


__all__ = ["AnalysisConfig"]
