from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Dict, List

import pandas as pd

from .errors import DatasetError

logger = logging.getLogger("vibechart.csv")


@dataclass
class LoadedTable:
    name: str
    dataframe: pd.DataFrame


class CSVLoader:
    """Load uploaded CSV files and infer numeric/date columns."""

    def __init__(self, type_threshold: float = 0.7) -> None:
        self.type_threshold = type_threshold

    def load_csv(self, data: bytes, name: str = "data.csv") -> LoadedTable:
        if not data or not data.strip():
            raise DatasetError("Uploaded file is empty.")
        try:
            frame = pd.read_csv(BytesIO(data), dtype=object, skipinitialspace=True)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
            raise DatasetError("Could not parse CSV file", details=str(exc)) from exc

        frame.columns = self._dedupe_columns([str(col).strip() for col in frame.columns])
        frame = frame.dropna(axis=1, how="all")
        frame = frame.dropna(how="all").reset_index(drop=True)
        if frame.empty or not len(frame.columns):
            raise DatasetError("CSV file contained no data rows.")

        table = LoadedTable(name=name, dataframe=self._coerce_types(frame))
        logger.info("loaded %s: %d rows x %d columns", name, len(frame), len(frame.columns))
        return table

    def _coerce_types(self, df: pd.DataFrame) -> pd.DataFrame:
        for column in df.columns:
            series = df[column]
            present = series.dropna()
            if present.empty:
                continue
            numeric = pd.to_numeric(present, errors="coerce")
            if numeric.notna().mean() > self.type_threshold:
                df[column] = pd.to_numeric(series, errors="coerce")
                continue
            datetime = pd.to_datetime(present, errors="coerce", format="mixed")
            if datetime.notna().mean() > self.type_threshold:
                df[column] = pd.to_datetime(series, errors="coerce", format="mixed")
        return df

    def _dedupe_columns(self, columns: List[str]) -> List[str]:
        counts: Dict[str, int] = {}
        taken = set()
        result: List[str] = []
        for col in columns:
            base = col if col and not col.startswith("Unnamed:") else "column"
            count = counts.get(base, 0)
            new_name = f"{base}_{count+1}" if count else base
            while new_name in taken or (new_name != col and new_name in columns):
                count += 1
                new_name = f"{base}_{count+1}"
            counts[base] = count + 1
            taken.add(new_name)
            result.append(new_name)
        return result
