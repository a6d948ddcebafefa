# tests/test_simulation/test_config.py
import pytest
from pathlib import Path

from convsim_core.simulation import (
    ConfigurationError, RunConfig, load_run_config, parse_frame_rate, parse_run_config, parse_scale,
)
from convsim_core.solvers import ScaleParameter


class TestParseScale:

    @pytest.mark.parametrize("raw, expected", [
        ("small", ScaleParameter.SMALL),
        ("large", ScaleParameter.LARGE),
        (" Large ", ScaleParameter.LARGE),
        (ScaleParameter.SMALL, ScaleParameter.SMALL),
    ])
    def test_recognized_values(self, raw, expected):
        assert parse_scale(raw) is expected

    @pytest.mark.parametrize("raw", ["medium", "", None, 3])
    def test_unrecognized_values_fail_fast(self, raw):
        with pytest.raises(ConfigurationError, match="Unrecognized problem scale") as exc_info:
            parse_scale(raw)
        report = exc_info.value.get_diagnostic_report()
        assert "Invalid Run Configuration" in report
        assert "'small' or 'large'" in report


class TestParseFrameRate:

    @pytest.mark.parametrize("raw, expected", [("60 Hz", 60.0), ("0.12 kHz", 120.0), (30, 30.0), ("24", 24.0)])
    def test_valid_rates(self, raw, expected):
        assert parse_frame_rate(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["60 m", "fast", 0, "-5 Hz"])
    def test_invalid_rates(self, raw):
        with pytest.raises(ConfigurationError):
            parse_frame_rate(raw)

    @pytest.mark.parametrize("raw", ["nan", "inf Hz", float("nan"), float("inf")])
    def test_non_finite_rates_rejected(self, raw):
        with pytest.raises(ConfigurationError, match="positive finite"):
            parse_frame_rate(raw)


class TestParseRunConfig:

    def test_defaults(self):
        assert parse_run_config({}) == RunConfig()
        assert parse_run_config(None) == RunConfig()

    def test_full_document(self):
        config = parse_run_config({"scale": "large", "width": 800, "height": 600, "seed": 9, "frame_rate": "30 Hz"})
        assert config == RunConfig(scale=ScaleParameter.LARGE, width=800.0, height=600.0, seed=9, frame_rate_hz=30.0)

    @pytest.mark.parametrize("raw", [
        {"width": -1},
        {"seed": "abc"},
        {"seed": -3},
        {"unknown_key": 1},
        {"height": "tall"},
    ])
    def test_schema_violations(self, raw):
        with pytest.raises(ConfigurationError, match="schema validation"):
            parse_run_config(raw)

    def test_invalid_scale_in_document(self):
        with pytest.raises(ConfigurationError, match="Unrecognized problem scale"):
            parse_run_config({"scale": "huge"})

    def test_non_mapping_rejected(self):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            parse_run_config(["small"])


class TestLoadRunConfig:

    def test_load_yaml(self, tmp_path: Path):
        path = tmp_path / "run.yaml"
        path.write_text("""
scale: large
width: 640
height: 480
seed: 5
frame_rate: "50 Hz"
""")
        config = load_run_config(path)
        assert config.scale is ScaleParameter.LARGE
        assert (config.width, config.height, config.seed) == (640.0, 480.0, 5)
        assert config.frame_rate_hz == pytest.approx(50.0)

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_run_config(path) == RunConfig()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigurationError, match="Could not read") as exc_info:
            load_run_config(tmp_path / "nope.yaml")
        assert exc_info.value.source_file == tmp_path / "nope.yaml"

    def test_malformed_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("scale: [small\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_run_config(path)

    def test_list_document(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- small\n- large\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_run_config(path)
