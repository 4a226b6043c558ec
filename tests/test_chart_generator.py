import pytest

from vibechart.services import CSVLoader, ChartGenerator, VibePipeline, Translator
from vibechart.services.chart_generator import apply_spacing_fixes, build_generation_prompt, fallback_config_for
from vibechart.services.data_profile import DataProfiler, table_records
from vibechart.services.errors import MissingCredentialsError, TranslationTransportError

from conftest import FakeLLM


def _analysis(unique_x, total, categorical=()):
    return {
        "recommendedChartType": "line",
        "dataStructure": {"categoricalColumns": list(categorical)},
        "spacingIssues": {
            "issues": [],
            "recommendations": [],
            "dataDensity": {"totalPoints": total, "uniqueXValues": unique_x, "uniqueCategories": 0},
        },
    }


@pytest.mark.parametrize(
    "unique_x,total,expected_labels,x_gap",
    [
        (60, 60, {"interval": 2, "rotate": 45}, 60),
        (25, 25, {"interval": 1, "rotate": 45}, 50),
        (3, 3, {"interval": 0}, 35),
        (10, 40, {"interval": 0, "rotate": 45}, 50),
        (10, 10, {"interval": 0}, 35),
    ],
)
def test_spacing_fixes_follow_density(unique_x, total, expected_labels, x_gap):
    fixed = apply_spacing_fixes({"chartType": "line"}, _analysis(unique_x, total))

    assert fixed["axisLabels"]["xLabels"] == expected_labels
    assert fixed["axisTitles"]["xTitle"]["nameGap"] == x_gap
    assert fixed["axisTitles"]["yTitle"]["nameGap"] == 60
    assert "legend" not in fixed


def test_spacing_fixes_force_legend_for_categories():
    config = {"legend": {"show": False, "position": "top"}, "axisLabels": {"xLabels": {"color": "#aaa"}}}
    fixed = apply_spacing_fixes(config, _analysis(8, 8, categorical=["Region"]))

    assert fixed["legend"] == {"show": True, "position": "bottom", "textColor": "#ffffff"}
    assert fixed["axisLabels"]["xLabels"] == {"color": "#aaa", "interval": 0}
    assert config["legend"]["show"] is False


def test_spacing_fixes_need_analysis():
    assert apply_spacing_fixes({"grid": "solid"}, {"recommendedChartType": "bar"}) == {"grid": "solid"}


def test_fallback_config_for_columns():
    assert fallback_config_for(["a", "b", "c"])["chartType"] == "scatter"
    single = fallback_config_for(["only"])
    assert (single["chartType"], single["xKey"], single["yKey"], single["grid"]) == ("bar", "only", "only", "solid")


def test_generation_prompt_mentions_recommendation(sales_csv):
    table = CSVLoader().load_csv(sales_csv)
    analysis = DataProfiler().analyze_structure(table)
    prompt = build_generation_prompt(table_records(table), analysis)

    assert 'the chart type MUST be: "line"' in prompt
    assert "COLUMNS: Date, Region, Sales" in prompt
    assert "No spacing issues detected" in prompt
    assert "- Unique X-axis values: 10" in prompt


def _generator(*responses):
    return ChartGenerator(VibePipeline(Translator(FakeLLM(*responses))))


def test_generate_enforces_recommended_type(sales_csv):
    table = CSVLoader().load_csv(sales_csv)
    result = _generator({"chartType": "bar", "xKey": "Date", "yKey": "Sales", "title": {"text": "Daily sales"}}).generate(table)
    config = result["config"]

    assert result["fallback"] is False
    assert config["chartType"] == "line"
    assert config["lineStyle"]["smooth"] is True
    assert config["title"]["text"] == "Daily sales"
    assert config["axisLabels"]["xLabels"]["interval"] == 0
    assert config["axisTitles"]["xTitle"]["nameGap"] == 35
    assert config["legend"]["position"] == "bottom"


def test_generate_replaces_unknown_keys(sales_csv):
    table = CSVLoader().load_csv(sales_csv)
    config = _generator({"chartType": "line", "xKey": "Month", "yKey": "Revenue"}).generate(table)["config"]
    assert (config["xKey"], config["yKey"]) == ("Date", "Region")


@pytest.mark.parametrize("response", [TranslationTransportError("LLM API error", "Status: 500"), "I would draw a line."])
def test_generate_falls_back_on_model_failure(sales_csv, response):
    result = _generator(response).generate(CSVLoader().load_csv(sales_csv))

    assert result["fallback"] is True
    assert result["config"]["chartType"] == "scatter"
    assert result["config"]["grid"] == "solid"
    assert result["analysis"]["recommendedChartType"] == "line"


def test_generate_propagates_missing_credentials(sales_csv):
    with pytest.raises(MissingCredentialsError):
        _generator(MissingCredentialsError("LLM API key not configured")).generate(CSVLoader().load_csv(sales_csv))
