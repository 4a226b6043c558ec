import pytest

from vibechart.services.beautifier import ACCENT_PALETTE, DEFAULT_TITLE_TEXT, beautify


@pytest.mark.parametrize(
    "merged",
    [
        {},
        {"chartType": "line"},
        {"chartType": "bar", "palette": ["#ffffff"], "chartSize": {"aspectRatio": 7}},
        {"chartType": "line", "animation": "none", "themePreset": "dark"},
        {"title": {"color": "#ff0000"}, "legend": {"textColor": "#000"}, "axisTitles": {"xTitle": {"text": "Day"}}},
    ],
)
def test_beautify_is_idempotent(merged):
    once = beautify(merged)
    assert beautify(once) == once


def test_white_palette_replaced_with_accents():
    assert beautify({"palette": ["#ffffff"]})["palette"] == ACCENT_PALETTE
    assert beautify({"palette": ["WHITE", "#000"]})["palette"] == ACCENT_PALETTE
    assert beautify({"palette": []})["palette"] == ACCENT_PALETTE


def test_explicit_values_are_kept():
    merged = {
        "chartType": "bar",
        "palette": ["#123456"],
        "grid": "dashed",
        "barStyle": {"borderRadius": 0},
        "title": {"text": "Quarterly revenue", "position": "top"},
        "legend": {"show": False},
        "backgroundColor": "#101010",
    }

    cfg = beautify(merged)

    assert cfg["palette"] == ["#123456"]
    assert cfg["grid"] == "dashed"
    assert cfg["barStyle"]["borderRadius"] == 0
    assert cfg["title"]["text"] == "Quarterly revenue"
    assert cfg["title"]["position"] == "top"
    assert cfg["legend"] == {"show": False, "position": "bottom"}
    assert cfg["backgroundColor"] == "#101010"


def test_input_not_mutated():
    merged = {"chartType": "bar", "barStyle": {}}
    beautify(merged)
    assert merged == {"chartType": "bar", "barStyle": {}}


def test_chart_type_specific_defaults():
    assert beautify({"chartType": "bar"})["barStyle"] == {"borderRadius": 6}
    assert beautify({"chartType": "line"})["lineStyle"] == {"smooth": True}
    assert "lineStyle" not in beautify({"chartType": "line", "animation": "none"})
    assert "barStyle" not in beautify({"chartType": "pie"})


def test_theme_alias_and_aspect_ratio_clamp():
    cfg = beautify({"themePreset": "dark", "chartSize": {"aspectRatio": 0.1, "maxWidth": 800}})
    assert cfg["themePreset"] == "shadcn-dark"
    assert cfg["chartSize"] == {"aspectRatio": 0.3, "maxWidth": 800}
    assert beautify({})["chartSize"] == {"aspectRatio": 1.8}


def test_titles_legend_and_axis_titles_filled():
    cfg = beautify({"title": {"text": ""}, "axisTitles": {"yTitle": {"nameGap": 20}}})

    assert cfg["title"] == {"text": DEFAULT_TITLE_TEXT, "position": "bottom"}
    assert cfg["legend"] == {"show": True, "position": "bottom", "textColor": "#ffffff"}
    assert cfg["axisTitles"]["xTitle"] == {"nameGap": 80, "fontSize": 16, "color": "#ffffff"}
    assert cfg["axisTitles"]["yTitle"] == {"nameGap": 20, "fontSize": 16, "color": "#ffffff"}


def test_presets_filled_when_absent():
    cfg = beautify({})
    assert cfg["chartType"] == "bar"
    assert cfg["axisStyle"] == "classic"
    assert cfg["tooltipStyle"] == "shadow"
    assert cfg["grid"] == "none"
    assert cfg["font"]["size"] == 12


def _dig(cfg, path):
    node = cfg
    for key in path.split("."):
        node = node[key]
    return node


@pytest.mark.parametrize(
    "merged,path,expected",
    [
        ({"grid": "dashed"}, "grid", "dashed"),
        ({"axisStyle": "minimal"}, "axisStyle", "minimal"),
        ({"animation": "none"}, "animation", "none"),
        ({"font": {"family": "Georgia", "size": 14, "weight": 400}}, "font.family", "Georgia"),
        ({"tooltipStyle": {"bg": "#000", "border": "#333"}}, "tooltipStyle.bg", "#000"),
        ({"chartType": "scatter"}, "chartType", "scatter"),
        ({"xKey": "Month"}, "xKey", "Month"),
        ({"yKey": "Sales"}, "yKey", "Sales"),
        ({"palette": ["#123456", "#ffffff"]}, "palette", ["#123456", "#ffffff"]),
        ({"chartType": "bar", "barStyle": {"borderRadius": 0}}, "barStyle.borderRadius", 0),
        ({"chartType": "line", "lineStyle": {"smooth": False}}, "lineStyle.smooth", False),
        ({"themePreset": "vintage"}, "themePreset", "vintage"),
        ({"chartSize": {"aspectRatio": 1.2}}, "chartSize.aspectRatio", 1.2),
        ({"title": {"text": "Mine", "position": "top"}}, "title.position", "top"),
        ({"title": {"text": "Mine"}}, "title.text", "Mine"),
        ({"legend": {"show": False, "position": "left"}}, "legend.position", "left"),
        ({"legend": {"show": False}}, "legend.show", False),
        ({"axisTitles": {"xTitle": {"nameGap": 20}}}, "axisTitles.xTitle.nameGap", 20),
        ({"axisTitles": {"yTitle": {"color": "#000000"}}}, "axisTitles.yTitle.color", "#000000"),
    ],
)
def test_explicit_field_survives_beautify(merged, path, expected):
    assert _dig(beautify(merged), path) == expected


def test_scalar_title_and_legend_are_expanded():
    cfg = beautify({"title": "Monthly sales", "legend": False})
    assert cfg["title"] == {"text": "Monthly sales", "position": "bottom"}
    assert cfg["legend"] == {"show": False, "position": "bottom"}

    cfg = beautify({"title": "", "legend": "top"})
    assert cfg["title"]["text"] == DEFAULT_TITLE_TEXT
    assert cfg["legend"] == {"position": "top", "show": True}
    assert beautify(cfg) == cfg
