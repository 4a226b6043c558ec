import pytest

from vibechart.services.beautifier import beautify
from vibechart.services.config_validator import FIXED_DEFAULTS, apply_fixed_defaults, validate_config, validate_with_repair
from vibechart.services.errors import ConfigurationError


def _valid_config(**overrides):
    cfg = beautify({"chartType": "bar", "xKey": "Month", "yKey": "Sales"})
    cfg.update(overrides)
    return cfg


def test_valid_config_round_trips_in_camel_case():
    config = validate_config(_valid_config()).to_json()
    assert config["chartType"] == "bar"
    assert config["xKey"] == "Month"
    assert config["barStyle"] == {"borderRadius": 6}
    assert config["axisTitles"]["xTitle"]["nameGap"] == 80


def test_unknown_keys_are_dropped():
    config = validate_config(_valid_config(sparkle=True)).to_json()
    assert "sparkle" not in config


def test_wrong_shapes_report_paths():
    with pytest.raises(ConfigurationError) as excinfo:
        validate_config(_valid_config(chartType="donut", title={"text": "x", "fontSize": "16"}))
    assert "chartType" in excinfo.value.paths
    assert "title.fontSize" in excinfo.value.paths


def test_booleans_are_not_numbers():
    with pytest.raises(ConfigurationError):
        validate_config(_valid_config(barStyle={"borderRadius": True}))


def test_formatter_must_be_a_named_strategy():
    labels = {"xLabels": {"formatter": "function (v) { return v.slice(0, 3) }"}}
    with pytest.raises(ConfigurationError) as excinfo:
        validate_config(_valid_config(axisLabels=labels))
    assert excinfo.value.paths == ["axisLabels.xLabels.formatter"]

    labels = {"xLabels": {"formatter": {"strategy": "truncate", "length": 3}}}
    config = validate_config(_valid_config(axisLabels=labels)).to_json()
    assert config["axisLabels"]["xLabels"]["formatter"] == {"strategy": "truncate", "length": 3, "index": 0}


def test_fixed_defaults_replace_empty_and_failing_fields():
    fixed = apply_fixed_defaults({"font": {}, "grid": "zigzag", "animation": "none"}, ["grid"])
    assert fixed["font"] == FIXED_DEFAULTS["font"]
    assert fixed["grid"] == "none"
    assert fixed["animation"] == "none"
    assert fixed["axisStyle"] == "classic"


def test_repair_recovers_preset_fields():
    broken = _valid_config(animation="fast", font={"family": "Inter"}, tooltipStyle=3)
    config = validate_with_repair(broken).to_json()
    assert config["animation"] == FIXED_DEFAULTS["animation"]
    assert config["font"] == FIXED_DEFAULTS["font"]
    assert config["tooltipStyle"] == "shadow"


def test_repair_is_single_attempt_and_fatal_outside_presets():
    with pytest.raises(ConfigurationError) as excinfo:
        validate_with_repair(_valid_config(chartType="donut"))
    assert excinfo.value.paths == ["chartType"]
    assert excinfo.value.to_json()["error"] == "Schema validation failed"


@pytest.mark.parametrize(
    "patch",
    [
        {},
        {"chartType": "line", "lineStyle": {"width": 3}},
        {"chartType": "pie", "pieStyle": {"donut": True, "center": ["50%", "50%"]}},
        {"chartType": "scatter", "scatterStyle": {"shape": "diamond"}, "grid": "dashed"},
        {"themePreset": "dark", "palette": ["white"], "chartSize": {"aspectRatio": 99}},
        {"axisStyle": {"color": "#fff", "width": 2}, "animation": {"easing": "linear", "duration": 0}},
    ],
)
def test_beautified_patches_always_validate(patch):
    validate_with_repair(beautify(patch))
