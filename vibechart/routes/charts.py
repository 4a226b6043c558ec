from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from ..core.settings import Settings, get_settings
from ..schemas.api import (
    GenerateResponse,
    PreviewRequest,
    PreviewResponse,
    ProfileResponse,
    SaveChartRequest,
    SessionStateResponse,
)
from ..services import ChartGenerator, CSVLoader, DataProfiler, VibePipeline, prepare_series, table_records
from ..services.csv_loader import LoadedTable
from ..services.errors import DatasetError, RequestShapeError, SessionNotFoundError
from ..utils.session_store import SessionStore, new_session_id
from .deps import get_pipeline, get_session_store

router = APIRouter(prefix="/api/charts", tags=["charts"])

_loader = CSVLoader()


def _read_table(upload: UploadFile) -> LoadedTable:
    data = upload.file.read()
    if not data:
        raise DatasetError("Uploaded file is empty.")
    return _loader.load_csv(data, name=upload.filename or "data.csv")


@router.post("/profile", response_model=ProfileResponse)
def profile_csv(file: UploadFile = File(...), settings: Settings = Depends(get_settings)) -> ProfileResponse:
    table = _read_table(file)
    profile = DataProfiler(sample_rows=settings.sample_rows).build_profile({table.name: table})
    return ProfileResponse.model_validate(profile)


@router.post("/generate", response_model=GenerateResponse)
def generate_chart(
    file: UploadFile = File(...),
    session_id: Optional[str] = Form(None, alias="sessionId"),
    settings: Settings = Depends(get_settings),
    pipeline: VibePipeline = Depends(get_pipeline),
) -> GenerateResponse:
    table = _read_table(file)
    profiler = DataProfiler(sample_rows=settings.sample_rows)
    result = ChartGenerator(pipeline, profiler).generate(table)

    payload = {
        "config": result["config"],
        "analysis": result["analysis"],
        "profile": profiler.build_profile({table.name: table}),
        "rows": table_records(table),
        "sessionId": session_id or new_session_id(),
        "fallback": result["fallback"],
    }
    return GenerateResponse.model_validate(payload)


@router.post("/preview", response_model=PreviewResponse)
def preview_chart(request: PreviewRequest) -> PreviewResponse:
    return PreviewResponse.model_validate(prepare_series(request.rows, request.config))


@router.get("", response_model=SessionStateResponse)
def load_chart(
    session_id: Optional[str] = Query(None, alias="sessionId"),
    store: SessionStore = Depends(get_session_store),
) -> SessionStateResponse:
    if not session_id:
        raise RequestShapeError("Session ID is required")
    try:
        record = store.load_latest(session_id)
    except SessionNotFoundError:
        return SessionStateResponse.model_validate({"sessionId": session_id})
    return SessionStateResponse.model_validate(record)


@router.post("", response_model=SessionStateResponse)
def save_chart(request: SaveChartRequest, store: SessionStore = Depends(get_session_store)) -> SessionStateResponse:
    record = store.save(
        request.session_id,
        request.config,
        request.chart_data,
        name=request.chart_name,
        description=request.description,
    )
    return SessionStateResponse.model_validate(record)
