from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from ..schemas.chart import BinningSpec, ChartConfiguration, LabelFormatter
from .config_validator import validate_config

MAX_SPLIT_CATEGORIES = 12

_AGGREGATES = {"sum": "sum", "average": "mean", "min": "min", "max": "max"}


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return isinstance(value, float) and value != value


def bin_rows(
    rows: Sequence[Mapping[str, Any]],
    x_key: str,
    y_key: str,
    binning: BinningSpec | Mapping[str, Any] | None,
) -> List[Dict[str, Any]]:
    """Collapse consecutive rows into groups of ``groupSize``.

    Each group is labelled with its first row's x value and carries the
    aggregate of the numeric y values; groups with no numeric y get ``None``.
    """

    if binning is None:
        return [dict(row) for row in rows]
    if isinstance(binning, Mapping):
        binning = BinningSpec.model_validate(binning)
    size = binning.group_size
    if not binning.enabled or not size or size <= 1 or not rows:
        return [dict(row) for row in rows]

    size = int(size)
    frame = pd.DataFrame(
        {
            "x": [row.get(x_key) for row in rows],
            "y": pd.to_numeric(pd.Series([row.get(y_key) for row in rows], dtype=object), errors="coerce"),
        }
    )
    groups = frame.groupby(frame.index // size, sort=True)
    labels = groups["x"].first()
    values = groups["y"].agg(_AGGREGATES[binning.method or "sum"])
    counts = groups["y"].count()

    binned: List[Dict[str, Any]] = []
    for group_id, label in labels.items():
        value: Optional[float] = None
        if counts[group_id]:
            value = float(values[group_id])
        binned.append({x_key: str(label), y_key: value})
    return binned


def format_label(value: Any, index: int, formatter: LabelFormatter | Mapping[str, Any] | None) -> str:
    text = "" if value is None else str(value)
    if formatter is None:
        return text
    if isinstance(formatter, Mapping):
        formatter = LabelFormatter.model_validate(formatter)
    if formatter.strategy == "truncate":
        return text[: formatter.length]
    if formatter.strategy == "tail":
        return text[-formatter.length :] if formatter.length > 0 else ""
    # hide-index
    return "" if index == formatter.index else text


def _split_column(rows: Sequence[Mapping[str, Any]], x_key: str, y_key: str) -> Optional[str]:
    for column in rows[0].keys():
        if column in (x_key, y_key):
            continue
        distinct = {str(row.get(column)) for row in rows}
        if 1 < len(distinct) <= MAX_SPLIT_CATEGORIES:
            return column
    return None


def prepare_series(
    rows: Sequence[Mapping[str, Any]],
    config: ChartConfiguration | Mapping[str, Any],
) -> Dict[str, Any]:
    """Shape dataset rows into x categories plus one or more named series."""

    cfg = config if isinstance(config, ChartConfiguration) else validate_config(config)
    x_key, y_key = cfg.x_key, cfg.y_key

    processed = bin_rows(rows, x_key, y_key, cfg.binning)
    filtered = [row for row in processed if not _is_empty(row.get(x_key)) and not _is_empty(row.get(y_key))]
    if not filtered:
        return {"chartType": cfg.chart_type, "categories": [], "series": [], "splitBy": None}

    x_labels = cfg.axis_labels.x_labels if cfg.axis_labels else None
    formatter = x_labels.formatter if x_labels else None

    x_values: List[Any] = []
    for row in filtered:
        if row[x_key] not in x_values:
            x_values.append(row[x_key])
    categories = [format_label(value, idx, formatter) for idx, value in enumerate(x_values)]

    if cfg.chart_type == "pie":
        data = [{"name": str(row[x_key]), "value": row[y_key]} for row in filtered]
        return {"chartType": "pie", "categories": categories, "series": [{"name": y_key, "data": data}], "splitBy": None}

    split = _split_column(filtered, x_key, y_key)
    if split is None:
        series = [{"name": y_key, "data": [[row[x_key], row[y_key]] for row in filtered]}]
    else:
        names: List[str] = []
        for row in filtered:
            name = str(row.get(split))
            if name not in names:
                names.append(name)
        series = [
            {
                "name": name,
                "data": [[row[x_key], row[y_key]] for row in filtered if str(row.get(split)) == name],
            }
            for name in names
        ]

    return {"chartType": cfg.chart_type, "categories": categories, "series": series, "splitBy": split}
