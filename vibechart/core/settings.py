from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


@dataclass
class Settings:
    llm_api_base: str
    llm_api_key: str | None
    llm_model: str
    llm_temperature: float
    llm_max_tokens: int
    llm_timeout: float
    storage_root: Path
    log_level: str
    sample_rows: int


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    root = Path(os.getenv("VIBECHART_STORAGE_ROOT", "sessions")).resolve()
    root.mkdir(parents=True, exist_ok=True)
    return Settings(
        llm_api_base=os.getenv("LLM_API_BASE", "https://api.deepseek.com/v1"),
        llm_api_key=os.getenv("LLM_API_KEY") or os.getenv("DEEPSEEK_API_KEY") or os.getenv("OPENAI_API_KEY"),
        llm_model=os.getenv("LLM_MODEL", "deepseek-chat"),
        llm_temperature=float(os.getenv("LLM_TEMPERATURE", "0.1")),
        llm_max_tokens=int(os.getenv("LLM_MAX_TOKENS", "600")),
        llm_timeout=float(os.getenv("LLM_TIMEOUT", "60")),
        storage_root=root,
        log_level=os.getenv("VIBECHART_LOG_LEVEL", "INFO").upper(),
        sample_rows=int(os.getenv("VIBECHART_SAMPLE_ROWS", "50")),
    )
