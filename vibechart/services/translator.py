from __future__ import annotations

import json
import logging
from copy import deepcopy
from typing import Any, Dict, List, Mapping, Protocol, Sequence

from jinja2 import Template

from .errors import TranslationContentError
from .json_repair import extract_json_span, parse_with_repair
from .prompts import CONFIG_SCHEMA, FORMATTER_NOTES, SYSTEM_TEMPLATE, TWEAK_EXAMPLES, USER_TEMPLATE

logger = logging.getLogger("vibechart.translator")

FALLBACK_CONFIG: Dict[str, Any] = {
    "chartType": "bar",
    "xKey": "Date",
    "yKey": "Revenue",
    "palette": ["#7dd3fc", "#60a5fa", "#818cf8", "#c084fc", "#f472b6"],
    "axisStyle": "classic",
    "animation": {"easing": "cubicOut", "duration": 1000},
    "font": {"family": "Inter", "size": 12, "weight": 500},
    "tooltipStyle": "shadow",
    "grid": "none",
    "themePreset": "shadcn-dark",
    "axisTitles": {
        "xTitle": {"nameGap": 80, "fontSize": 16, "color": "#ffffff"},
        "yTitle": {"nameGap": 60, "fontSize": 16, "color": "#ffffff"},
    },
}


class CompletionClient(Protocol):
    def complete(self, messages: List[Dict[str, Any]]) -> str: ...


def render_template(template: str, **kwargs: Any) -> str:
    return Template(template).render(**kwargs)


def build_system_prompt(user_prompt: str, current_config: Mapping[str, Any] | None) -> str:
    examples = [(instruction, json.dumps(patch)) for instruction, patch in TWEAK_EXAMPLES]
    return render_template(
        SYSTEM_TEMPLATE,
        schema=CONFIG_SCHEMA,
        formatter_notes=FORMATTER_NOTES,
        examples=examples,
        current_config=json.dumps(dict(current_config or {}), indent=2, ensure_ascii=False),
        user_prompt=user_prompt,
    )


def build_user_message(user_prompt: str, conversation: Sequence[str] = ()) -> str:
    turns = [turn.strip() for turn in conversation if turn and turn.strip()]
    return render_template(USER_TEMPLATE, user_prompt=user_prompt, conversation=turns)


class Translator:
    """Turns a natural-language instruction into an untyped configuration patch."""

    def __init__(self, llm: CompletionClient) -> None:
        self.llm = llm

    def translate(
        self,
        instruction: str,
        current_config: Mapping[str, Any] | None,
        conversation: Sequence[str] = (),
    ) -> Dict[str, Any]:
        messages = [
            {"role": "system", "content": build_system_prompt(instruction, current_config)},
            {"role": "user", "content": build_user_message(instruction, conversation)},
        ]
        # Transport and extraction failures propagate to the caller.
        raw = self.llm.complete(messages)
        json_text = extract_json_span(raw)

        try:
            patch = parse_with_repair(json_text)
            if not isinstance(patch, dict):
                raise TranslationContentError("Model JSON is not an object", details=type(patch).__name__)
        except TranslationContentError as exc:
            logger.warning("using fallback configuration: %s", exc)
            return deepcopy(FALLBACK_CONFIG)

        logger.info("translated instruction into patch keys: %s", sorted(patch))
        return patch
