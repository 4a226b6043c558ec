import pytest

from vibechart.services.errors import ConfigurationError, RequestShapeError
from vibechart.services.pipeline import VibePipeline
from vibechart.services.translator import Translator

from conftest import FakeLLM


def _pipeline(*responses):
    llm = FakeLLM(*responses)
    return VibePipeline(Translator(llm)), llm


def test_rounded_bars_keeps_chart_type():
    pipeline, _ = _pipeline({"barStyle": {"borderRadius": 10}})
    config = pipeline.run("rounded bars", {"chartType": "bar"})

    assert config["chartType"] == "bar"
    assert config["barStyle"]["borderRadius"] == 10


def test_light_mode_keeps_background_color():
    pipeline, _ = _pipeline({"themePreset": "light"})
    config = pipeline.run("light mode", {"chartType": "line", "backgroundColor": "#0b0b0b"})

    assert config["themePreset"] == "light"
    assert config["backgroundColor"] == "#0b0b0b"

    pipeline, _ = _pipeline({"themePreset": "light"})
    assert "backgroundColor" not in pipeline.run("light mode", {"chartType": "line"})


def test_empty_config_gets_title_and_legend():
    pipeline, _ = _pipeline({"chartType": "line", "xKey": "Date", "yKey": "Sales"})
    config = pipeline.run("show sales over time", {})

    assert config["title"]["text"]
    assert config["legend"]["show"] is True
    assert config["lineStyle"]["smooth"] is True


def test_title_without_text_still_gets_text():
    pipeline, _ = _pipeline({"title": {"color": "#ff0000"}})
    config = pipeline.run("red title", {})
    assert config["title"]["text"]
    assert config["title"]["color"] == "#ff0000"


def test_empty_instruction_is_rejected_before_calling_model():
    pipeline, llm = _pipeline({"grid": "solid"})
    with pytest.raises(RequestShapeError) as excinfo:
        pipeline.run("   ", {})
    assert excinfo.value.to_json() == {"error": "No prompt provided"}
    assert llm.calls == []


def test_invalid_non_preset_field_is_fatal():
    pipeline, _ = _pipeline({"chartType": "radar"})
    with pytest.raises(ConfigurationError):
        pipeline.run("radar chart", {"chartType": "bar"})


def test_run_is_pure():
    current = {"chartType": "bar", "barStyle": {"opacity": 0.5}}
    pipeline, _ = _pipeline({"barStyle": {"borderRadius": 10}})
    first = pipeline.run("rounded bars", current)
    second = pipeline.run("rounded bars", current)

    assert first == second
    assert current == {"chartType": "bar", "barStyle": {"opacity": 0.5}}


def test_string_title_from_model_becomes_title_text():
    pipeline, _ = _pipeline({"chartType": "bar", "title": "Monthly sales"})
    config = pipeline.run("chart my sales", {})

    assert config["title"]["text"] == "Monthly sales"
    assert config["legend"]["show"] is True
