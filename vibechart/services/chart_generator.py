from __future__ import annotations

import json
import logging
from copy import deepcopy
from typing import Any, Dict, List, Mapping, Sequence

from .beautifier import ACCENT_PALETTE, beautify
from .config_validator import validate_config, validate_with_repair
from .csv_loader import LoadedTable
from .data_profile import DataProfiler, table_records
from .errors import ConfigurationError, TranslationExtractionError, TranslationTransportError
from .pipeline import VibePipeline
from .prompts import GENERATION_TEMPLATE
from .translator import render_template

logger = logging.getLogger("vibechart.generator")

PROMPT_SAMPLE_ROWS = 50


def build_generation_prompt(records: Sequence[Mapping[str, Any]], analysis: Mapping[str, Any]) -> str:
    sample = [dict(row) for row in records[:PROMPT_SAMPLE_ROWS]]
    columns = list(sample[0].keys()) if sample else []
    spacing = analysis.get("spacingIssues") or {}
    return render_template(
        GENERATION_TEMPLATE,
        dataset_json=json.dumps(sample, indent=2, ensure_ascii=False, default=str),
        columns=columns,
        analysis_json=json.dumps(analysis, indent=2, ensure_ascii=False),
        recommended=analysis.get("recommendedChartType", "bar"),
        issues=spacing.get("issues") or [],
        recommendations=spacing.get("recommendations") or [],
        density=spacing.get("dataDensity") or {"totalPoints": 0, "uniqueXValues": 0, "uniqueCategories": 0},
    )


def _section(cfg: Dict[str, Any], *path: str) -> Dict[str, Any]:
    node = cfg
    for key in path:
        if not isinstance(node.get(key), dict):
            node[key] = {}
        node = node[key]
    return node


def apply_spacing_fixes(config: Mapping[str, Any], analysis: Mapping[str, Any]) -> Dict[str, Any]:
    """Set x label interval/rotation and axis title gaps from the data density."""

    cfg = deepcopy(dict(config))
    spacing = analysis.get("spacingIssues")
    if not spacing:
        return cfg

    x_labels = _section(cfg, "axisLabels", "xLabels")
    x_title = _section(cfg, "axisTitles", "xTitle")
    y_title = _section(cfg, "axisTitles", "yTitle")

    density = spacing.get("dataDensity") or {}
    unique_x = density.get("uniqueXValues", 0)
    total = density.get("totalPoints", 0)

    if unique_x > 50:
        x_labels.update(interval=2, rotate=45)
        x_title["nameGap"] = 60
    elif unique_x > 20:
        x_labels.update(interval=1, rotate=45)
        x_title["nameGap"] = 50
    elif unique_x < 5:
        x_labels["interval"] = 0
        x_title["nameGap"] = 35
    else:
        x_labels["interval"] = 0
        if total > 30:
            x_labels["rotate"] = 45
            x_title["nameGap"] = 50
        else:
            x_title["nameGap"] = 35

    y_title["nameGap"] = 60

    if (analysis.get("dataStructure") or {}).get("categoricalColumns"):
        _section(cfg, "legend").update(show=True, position="bottom", textColor="#ffffff")

    logger.debug(
        "spacing fixes: interval=%s rotate=%s xGap=%s yGap=%s",
        x_labels.get("interval"),
        x_labels.get("rotate"),
        x_title.get("nameGap"),
        y_title.get("nameGap"),
    )
    return cfg


def fallback_config_for(columns: Sequence[str]) -> Dict[str, Any]:
    columns = list(columns)
    x_key = columns[0] if columns else "x"
    y_key = columns[1] if len(columns) >= 2 else x_key
    return {
        "chartType": "scatter" if len(columns) >= 2 else "bar",
        "xKey": x_key,
        "yKey": y_key,
        "palette": list(ACCENT_PALETTE),
        "axisStyle": "classic",
        "animation": {"easing": "cubicOut", "duration": 1000},
        "font": {"family": "Inter", "size": 12, "weight": 500},
        "tooltipStyle": "shadow",
        "grid": "solid",
        "themePreset": "shadcn-dark",
    }


class ChartGenerator:
    """Builds the first configuration for a freshly uploaded dataset."""

    def __init__(self, pipeline: VibePipeline, profiler: DataProfiler | None = None) -> None:
        self.pipeline = pipeline
        self.profiler = profiler or DataProfiler()

    def generate(self, table: LoadedTable) -> Dict[str, Any]:
        analysis = self.profiler.analyze_structure(table)
        columns: List[str] = [str(col) for col in table.dataframe.columns]
        records = table_records(table, PROMPT_SAMPLE_ROWS)
        recommended = analysis["recommendedChartType"]

        try:
            config = self.pipeline.run(build_generation_prompt(records, analysis), {})
        except (TranslationTransportError, TranslationExtractionError, ConfigurationError) as exc:
            logger.warning("generation for %s failed, using fallback: %s", table.name, exc)
            fallback = validate_with_repair(beautify(fallback_config_for(columns)))
            return {"config": fallback.to_json(), "analysis": analysis, "fallback": True}

        if config.get("chartType") != recommended:
            logger.warning("model chose %s, correcting to %s", config.get("chartType"), recommended)
            config["chartType"] = recommended
        if config.get("xKey") not in columns or config.get("yKey") not in columns:
            defaults = fallback_config_for(columns)
            logger.warning("model keys %s/%s not in dataset columns", config.get("xKey"), config.get("yKey"))
            config["xKey"], config["yKey"] = defaults["xKey"], defaults["yKey"]

        fixed = apply_spacing_fixes(beautify(config), analysis)
        return {"config": validate_config(fixed).to_json(), "analysis": analysis, "fallback": False}
