from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class VibeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_prompt: Optional[str] = Field(default=None, alias="userPrompt")
    current_config: Optional[Dict[str, Any]] = Field(default=None, alias="currentConfig")
    conversation: List[str] = Field(default_factory=list)


class PreviewRequest(BaseModel):
    rows: List[Dict[str, Any]]
    config: Dict[str, Any]


class SaveChartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId", min_length=1)
    chart_data: List[Dict[str, Any]] = Field(alias="chartData")
    config: Dict[str, Any]
    chart_name: Optional[str] = Field(default=None, alias="chartName")
    description: Optional[str] = None


class ColumnProfileModel(BaseModel):
    name: str
    dtype: str
    semantic_type: str
    non_nulls: int
    distinct: int
    sample_values: List[Any]
    top_values: List[Dict[str, Any]]
    stats: Dict[str, Any]


class TableProfileModel(BaseModel):
    table_name: str
    row_count: int
    column_count: int
    columns: List[ColumnProfileModel]
    sample_rows: List[Dict[str, Any]]


class ProfileResponse(BaseModel):
    tables: List[TableProfileModel]
    table_names: List[str]
    column_whitelist: Dict[str, List[str]]


class GenerateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    config: Dict[str, Any]
    analysis: Dict[str, Any]
    profile: ProfileResponse
    rows: List[Dict[str, Any]]
    session_id: str = Field(alias="sessionId")
    fallback: bool = False


class SeriesModel(BaseModel):
    name: str
    data: List[Any]


class PreviewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    chart_type: str = Field(alias="chartType")
    categories: List[str]
    series: List[SeriesModel]
    split_by: Optional[str] = Field(default=None, alias="splitBy")


class SessionStateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    chart_name: Optional[str] = Field(default=None, alias="chartName")
    description: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    chart_data: Optional[List[Dict[str, Any]]] = Field(default=None, alias="chartData")
    saved_at: Optional[str] = Field(default=None, alias="savedAt")
