from __future__ import annotations

import textwrap

import pytest

from tripanalyzer.durations.analysis_config import AnalysisConfig
from tripanalyzer.durations.errors import ConfigError
from tripanalyzer.durations.zones import JFK_ZONE, MIDTOWN_ZONES


def test_defaults_match_reference_run():
    config = AnalysisConfig()
    assert config.lowest_seconds == 1
    assert config.highest_seconds == 10800
    assert config.significant_digits == 3
    assert config.min_duration_seconds == 1200
    assert config.pickup_zones == MIDTOWN_ZONES
    assert config.dropoff_zone == JFK_ZONE


def test_config_roundtrip(tmp_path):
    yaml_text = textwrap.dedent(
        """
        version: test
        histogram:
          highest_seconds: 7200
          significant_digits: 2
        min_duration_seconds: 900
        pickup_zones: [234, 90, 161]
        dropoff_zone: 138
        """
    ).strip()
    config_path = tmp_path / "analysis.yaml"
    config_path.write_text(yaml_text, encoding="utf-8")

    config = AnalysisConfig.from_yaml(config_path)
    assert config.version == "test"
    assert config.lowest_seconds == 1
    assert config.highest_seconds == 7200
    assert config.significant_digits == 2
    assert config.min_duration_seconds == 900
    assert config.pickup_zones == (90, 161, 234)
    assert config.zone_filter().matches_dropoff(138)

    roundtrip_path = tmp_path / "out" / "roundtrip.yaml"
    config.to_yaml(roundtrip_path)
    assert AnalysisConfig.from_yaml(roundtrip_path) == config


def test_build_accumulator_uses_config():
    histograms = AnalysisConfig(highest_seconds=3600, min_duration_seconds=600).build_accumulator()
    assert histograms.highest == 3600
    assert histograms.min_duration_seconds == 600
    assert histograms.histogram_for_hour(0).highest == 3600


def test_with_overrides_ignores_none():
    config = AnalysisConfig()
    assert config.with_overrides(highest_seconds=None) is config
    assert config.with_overrides(highest_seconds=5400).highest_seconds == 5400


@pytest.mark.parametrize(
    "yaml_text",
    [
        "- just\n- a list\n",
        "histogram: 5\n",
        "histogram:\n  lowest_seconds: one\n",
        "min_duration_seconds: 12.5\n",
        "pickup_zones: 161\n",
        "pickup_zones: []\n",
        "dropoff_zone: -1\n",
        "histogram: [unclosed\n",
    ],
)
def test_invalid_config_files(tmp_path, yaml_text):
    config_path = tmp_path / "bad.yaml"
    config_path.write_text(yaml_text, encoding="utf-8")
    with pytest.raises(ConfigError):
        AnalysisConfig.from_yaml(config_path)


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AnalysisConfig.from_yaml(tmp_path / "missing.yaml")


def test_empty_config_file_uses_defaults(tmp_path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")
    assert AnalysisConfig.from_yaml(config_path) == AnalysisConfig()
