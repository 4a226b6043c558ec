from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, Mapping

logger = logging.getLogger("vibechart.beautifier")

ACCENT_PALETTE = ["#7dd3fc", "#60a5fa", "#818cf8", "#c084fc", "#f472b6"]
WHITE_VALUES = {"#ffffff", "#fff", "white"}

DEFAULT_CHART_TYPE = "bar"
DEFAULT_X_KEY = "Date"
DEFAULT_Y_KEY = "Revenue"
DEFAULT_BAR_RADIUS = 6
DEFAULT_ASPECT_RATIO = 1.8
ASPECT_RATIO_BOUNDS = (0.3, 3.0)
DEFAULT_THEME = "shadcn-dark"
DEFAULT_TITLE_TEXT = "Data Visualization"

PRESET_DEFAULTS: Dict[str, Any] = {
    "axisStyle": "classic",
    "animation": {"easing": "cubicOut", "duration": 1000},
    "font": {
        "family": "system-ui, -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif",
        "size": 12,
        "weight": 500,
    },
    "tooltipStyle": "shadow",
    "grid": "none",
    "themePreset": DEFAULT_THEME,
}

TITLE_DEFAULTS: Dict[str, Any] = {
    "text": DEFAULT_TITLE_TEXT,
    "color": "#ffffff",
    "fontSize": 16,
    "position": "bottom",
    "backgroundColor": "#2a2a2a",
    "padding": "8px 12px",
    "borderRadius": "6px",
}

LEGEND_DEFAULTS: Dict[str, Any] = {"show": True, "position": "bottom", "textColor": "#ffffff"}
LEGEND_POSITIONS = ("top", "bottom", "left", "right")

AXIS_TITLE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "xTitle": {"nameGap": 80, "fontSize": 16, "color": "#ffffff"},
    "yTitle": {"nameGap": 60, "fontSize": 16, "color": "#ffffff"},
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _fill_missing(target: Dict[str, Any], defaults: Mapping[str, Any]) -> None:
    for key, value in defaults.items():
        if target.get(key) is None:
            target[key] = deepcopy(value)


def _needs_accent_palette(palette: Any) -> bool:
    if palette is None:
        return True
    if isinstance(palette, list):
        if not palette:
            return True
        first = palette[0]
        return isinstance(first, str) and first.strip().lower() in WHITE_VALUES
    return False


def _beautify_title(cfg: Dict[str, Any]) -> None:
    title = cfg.get("title")
    if title is None:
        cfg["title"] = deepcopy(TITLE_DEFAULTS)
        return
    if isinstance(title, str):
        # A bare string from the model is the title text.
        title = cfg["title"] = {"text": title}
    if not isinstance(title, dict):
        return
    if title.get("position") is None:
        title["position"] = "bottom"
    if not title.get("text"):
        title["text"] = DEFAULT_TITLE_TEXT


def _beautify_legend(cfg: Dict[str, Any]) -> None:
    legend = cfg.get("legend")
    if legend is None:
        cfg["legend"] = deepcopy(LEGEND_DEFAULTS)
        return
    if isinstance(legend, bool):
        legend = cfg["legend"] = {"show": legend}
    elif isinstance(legend, str) and legend in LEGEND_POSITIONS:
        legend = cfg["legend"] = {"position": legend}
    if not isinstance(legend, dict):
        return
    if legend.get("position") is None:
        legend["position"] = "bottom"
    if legend.get("show") is None:
        legend["show"] = True


def _beautify_axis_titles(cfg: Dict[str, Any]) -> None:
    titles = cfg.get("axisTitles")
    if titles is None:
        cfg["axisTitles"] = deepcopy(AXIS_TITLE_DEFAULTS)
        return
    if not isinstance(titles, dict):
        return
    for axis, defaults in AXIS_TITLE_DEFAULTS.items():
        current = titles.get(axis)
        if current is None:
            titles[axis] = deepcopy(defaults)
        elif isinstance(current, dict):
            _fill_missing(current, defaults)


def beautify(merged: Mapping[str, Any]) -> Dict[str, Any]:
    """Fill stylistic gaps in a merged configuration.

    Only absent (missing or ``None``) fields are filled. The exceptions are
    a white/empty palette, the legacy ``"dark"`` theme alias and an
    out-of-range aspect ratio, which are normalized, and a bare string title
    or boolean/position legend, which is expanded into its object form. The
    input is never mutated and running the result through again changes
    nothing.
    """

    cfg: Dict[str, Any] = deepcopy(dict(merged or {}))

    _fill_missing(cfg, PRESET_DEFAULTS)
    _fill_missing(cfg, {"chartType": DEFAULT_CHART_TYPE, "xKey": DEFAULT_X_KEY, "yKey": DEFAULT_Y_KEY})

    if _needs_accent_palette(cfg.get("palette")):
        cfg["palette"] = list(ACCENT_PALETTE)

    if cfg["chartType"] == "bar":
        bar_style = cfg.get("barStyle")
        if bar_style is None:
            cfg["barStyle"] = {"borderRadius": DEFAULT_BAR_RADIUS}
        elif isinstance(bar_style, dict) and bar_style.get("borderRadius") is None:
            bar_style["borderRadius"] = DEFAULT_BAR_RADIUS

    if cfg["chartType"] == "line" and cfg.get("animation") != "none":
        line_style = cfg.get("lineStyle")
        if line_style is None:
            cfg["lineStyle"] = {"smooth": True}
        elif isinstance(line_style, dict) and line_style.get("smooth") is None:
            line_style["smooth"] = True

    if cfg.get("themePreset") == "dark":
        cfg["themePreset"] = DEFAULT_THEME

    chart_size = cfg.get("chartSize")
    if chart_size is None:
        cfg["chartSize"] = {"aspectRatio": DEFAULT_ASPECT_RATIO}
    elif isinstance(chart_size, dict) and _is_number(chart_size.get("aspectRatio")):
        low, high = ASPECT_RATIO_BOUNDS
        chart_size["aspectRatio"] = max(low, min(high, chart_size["aspectRatio"]))

    _beautify_title(cfg)
    _beautify_legend(cfg)
    _beautify_axis_titles(cfg)

    logger.debug("beautified config keys: %s", sorted(cfg))
    return cfg
