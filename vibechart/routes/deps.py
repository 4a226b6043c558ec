from __future__ import annotations

from fastapi import Depends

from ..core.settings import Settings, get_settings
from ..services import VibePipeline
from ..utils.session_store import SessionStore


def get_pipeline(settings: Settings = Depends(get_settings)) -> VibePipeline:
    return VibePipeline.from_settings(settings)


def get_session_store(settings: Settings = Depends(get_settings)) -> SessionStore:
    return SessionStore(settings.storage_root)
