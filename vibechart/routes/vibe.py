from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..schemas.api import VibeRequest
from ..services import VibePipeline
from .deps import get_pipeline

router = APIRouter(prefix="/api", tags=["vibe"])


@router.post("/vibe")
def vibe(request: VibeRequest, pipeline: VibePipeline = Depends(get_pipeline)) -> Dict[str, Any]:
    return pipeline.run(request.user_prompt, request.current_config, request.conversation)
