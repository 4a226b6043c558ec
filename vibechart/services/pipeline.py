from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Sequence

from .beautifier import beautify
from .config_validator import validate_with_repair
from .errors import RequestShapeError
from .llm_client import LLMClient
from .merge import deep_merge
from .translator import Translator

logger = logging.getLogger("vibechart.pipeline")


class VibePipeline:
    """Translate -> merge -> beautify -> validate, once per instruction.

    Holds no state between runs: the caller passes the full current
    configuration every time and receives a brand-new one back.
    """

    def __init__(self, translator: Translator) -> None:
        self.translator = translator

    @classmethod
    def from_settings(cls, settings) -> "VibePipeline":
        return cls(Translator(LLMClient.from_settings(settings)))

    def run(
        self,
        instruction: str | None,
        current_config: Mapping[str, Any] | None = None,
        conversation: Sequence[str] = (),
    ) -> Dict[str, Any]:
        if not instruction or not instruction.strip():
            raise RequestShapeError("No prompt provided")
        base = dict(current_config or {})

        patch = self.translator.translate(instruction, base, conversation)
        merged = deep_merge(base, patch)
        beautified = beautify(merged)
        validated = validate_with_repair(beautified)

        result = validated.to_json()
        logger.info("pipeline produced %s chart (%s vs %s)", result["chartType"], result["xKey"], result["yKey"])
        return result
