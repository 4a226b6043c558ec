from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping

import numpy as np
import pandas as pd

from .csv_loader import LoadedTable


def _normalize_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            return None
        if value == value.normalize():
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, pd.Timedelta):
        return value.isoformat()
    if isinstance(value, (np.integer, np.floating)):
        value = value.item()
    if isinstance(value, float) and np.isnan(value):
        return None
    if pd.isna(value):  # type: ignore[arg-type]
        return None
    return value


def _semantic_type(series: pd.Series) -> str:
    if pd.api.types.is_datetime64_any_dtype(series) or pd.api.types.is_timedelta64_dtype(series):
        return "temporal"
    if pd.api.types.is_numeric_dtype(series) and not pd.api.types.is_bool_dtype(series):
        return "quantitative"
    return "categorical"


def table_records(table: LoadedTable, limit: int | None = None) -> List[Dict[str, Any]]:
    """JSON-friendly row dicts, dates rendered as ISO strings."""

    df = table.dataframe if limit is None else table.dataframe.head(limit)
    return [{key: _normalize_value(value) for key, value in rec.items()} for rec in df.to_dict(orient="records")]


@dataclass
class ColumnProfile:
    name: str
    dtype: str
    semantic_type: str
    non_nulls: int
    distinct: int
    sample_values: List[Any]
    top_values: List[Dict[str, Any]]
    stats: Dict[str, Any]


class DataProfiler:
    """Produce lightweight JSON-friendly profiles and chart recommendations for loaded tables."""

    def __init__(self, topk: int = 5, sample_rows: int = 3) -> None:
        self.topk = topk
        self.sample_rows = sample_rows

    def build_profile(self, tables: Mapping[str, LoadedTable]) -> Dict[str, Any]:
        profiles = [self._profile_table(name, table) for name, table in tables.items()]
        return {
            "tables": profiles,
            "table_names": [profile["table_name"] for profile in profiles],
            "column_whitelist": {profile["table_name"]: [col["name"] for col in profile["columns"]] for profile in profiles},
        }

    def _profile_table(self, name: str, table: LoadedTable) -> Dict[str, Any]:
        df = table.dataframe
        return {
            "table_name": name,
            "row_count": int(len(df)),
            "column_count": int(len(df.columns)),
            "columns": [asdict(self._summarize_column(df[col], str(col))) for col in df.columns],
            "sample_rows": table_records(table, self.sample_rows),
        }

    def analyze_structure(self, table: LoadedTable) -> Dict[str, Any]:
        """Split columns by kind and pick the chart type the first generation must use."""

        df = table.dataframe
        date_columns: List[str] = []
        numeric_columns: List[str] = []
        categorical_columns: List[str] = []
        for column in df.columns:
            kind = _semantic_type(df[column])
            if kind == "temporal":
                date_columns.append(column)
            elif kind == "quantitative":
                numeric_columns.append(column)
            else:
                categorical_columns.append(column)

        if df.empty:
            chart_type, reason = "bar", "No data available"
        elif date_columns:
            chart_type = "line"
            if numeric_columns and categorical_columns:
                reason = "Temporal data with categories - line chart with separate lines for each category"
            elif numeric_columns:
                reason = "Temporal data with numeric values - line chart"
            else:
                reason = "Temporal data only - line chart"
        elif len(numeric_columns) >= 2:
            chart_type, reason = "scatter", "Multiple numeric columns - scatter plot for correlation analysis"
        elif categorical_columns and numeric_columns:
            if len(categorical_columns) <= 5:
                chart_type, reason = "pie", "Categorical breakdown with numeric values - pie chart"
            else:
                chart_type, reason = "bar", "Categorical comparison with numeric values - bar chart"
        else:
            chart_type, reason = "bar", "Default fallback - bar chart"

        return {
            "recommendedChartType": chart_type,
            "reason": reason,
            "dataStructure": {
                "dateColumns": date_columns,
                "numericColumns": numeric_columns,
                "categoricalColumns": categorical_columns,
                "totalRows": int(len(df)),
            },
            "spacingIssues": self._spacing_issues(df, date_columns, categorical_columns),
        }

    def _spacing_issues(self, df: pd.DataFrame, date_columns: List[str], categorical_columns: List[str]) -> Dict[str, Any]:
        issues: List[str] = []
        recommendations: List[str] = []
        unique_x = 0

        if date_columns:
            x_values = [_normalize_value(v) for v in df[date_columns[0]].drop_duplicates().tolist()]
            unique_x = len(x_values)
            if unique_x > 50:
                issues.append("Too many X-axis data points (over 50)")
                recommendations.append("Use interval: 2 or 3 to show every 2nd or 3rd label")
            elif unique_x > 20:
                issues.append("Many X-axis data points (over 20)")
                recommendations.append("Use interval: 1 to show every other label")
            elif unique_x < 5:
                issues.append("Very few X-axis data points (less than 5)")
                recommendations.append("Show all labels with interval: 0")
            if unique_x and sum(len(str(v)) for v in x_values) / unique_x > 10:
                issues.append("Long X-axis labels (average over 10 characters)")
                recommendations.append("Rotate labels 45 degrees and increase nameGap")

        for column in categorical_columns:
            if df[column].nunique(dropna=False) > 10:
                issues.append(f"Too many categories in {column} (over 10)")
                recommendations.append("Consider grouping or filtering categories")

        if len(df) > 30:
            issues.append("Large dataset may cause label overlap")
            recommendations.append("Use label rotation and interval spacing")

        return {
            "issues": issues,
            "recommendations": recommendations,
            "dataDensity": {
                "totalPoints": int(len(df)),
                "uniqueXValues": unique_x,
                "uniqueCategories": int(df[categorical_columns[0]].nunique(dropna=False)) if categorical_columns else 0,
            },
        }

    def _summarize_column(self, series: pd.Series, name: str) -> ColumnProfile:
        semantic = _semantic_type(series)
        present = series.dropna()
        counts = series.value_counts(dropna=False).head(self.topk)
        stats: Dict[str, Any] = {}
        if semantic == "quantitative" and not present.empty:
            described = present.astype(float).describe()
            stats = {key: _normalize_value(float(described[key])) for key in ("min", "max", "mean")}
            stats["std"] = _normalize_value(float(present.astype(float).std(ddof=0)))
        elif semantic == "temporal" and not present.empty:
            stats = {"min": _normalize_value(present.min()), "max": _normalize_value(present.max())}
        return ColumnProfile(
            name=name,
            dtype=str(series.dtype),
            semantic_type=semantic,
            non_nulls=int(len(present)),
            distinct=int(present.nunique()),
            sample_values=[_normalize_value(val) for val in present.head(self.topk)],
            top_values=[{"value": _normalize_value(value), "count": int(count)} for value, count in counts.items()],
            stats=stats,
        )
