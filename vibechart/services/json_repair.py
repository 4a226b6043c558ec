from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, List, Tuple

from .errors import TranslationContentError, TranslationExtractionError

logger = logging.getLogger("vibechart.json_repair")

_OBJECT_SPAN = re.compile(r"\{[\s\S]*\}")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)\s*:")
_SINGLE_QUOTED = re.compile(r"(?<=[\s:\[{,])'((?:[^'\\]|\\.)*)'")


def extract_json_span(text: str) -> str:
    """Return the text from the first ``{`` to the last ``}``."""

    match = _OBJECT_SPAN.search(text or "")
    if not match:
        raise TranslationExtractionError("No valid JSON found in response", details=_truncate(text or "", 200))
    return match.group(0)


def strip_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA.sub(r"\1", text)


def quote_bare_keys(text: str) -> str:
    return _BARE_KEY.sub(r'\1"\2":', text)


def _requote(match: re.Match[str]) -> str:
    body = match.group(1).replace("\\'", "'").replace('"', '\\"')
    return f'"{body}"'


def normalize_single_quotes(text: str) -> str:
    return _SINGLE_QUOTED.sub(_requote, text)


REPAIR_STEPS: List[Tuple[str, Callable[[str], str]]] = [
    ("strip_trailing_commas", strip_trailing_commas),
    ("quote_bare_keys", quote_bare_keys),
    ("normalize_single_quotes", normalize_single_quotes),
]


def parse_with_repair(json_text: str) -> Any:
    """Parse ``json_text``; on failure apply the repair steps cumulatively.

    The text is re-parsed after every step. Raises ``TranslationContentError``
    when nothing parses.
    """

    try:
        return json.loads(json_text)
    except json.JSONDecodeError as exc:
        last_error: json.JSONDecodeError = exc
        logger.info("initial JSON parse failed (%s); attempting repair", exc)

    candidate = json_text
    for name, step in REPAIR_STEPS:
        candidate = step(candidate)
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as exc:
            last_error = exc
            continue
        logger.info("JSON repaired after step %s", name)
        return parsed

    raise TranslationContentError("Failed to parse model JSON", details=f"{last_error}; text={_truncate(candidate, 400)}")


def _truncate(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    half = limit // 2
    return value[:half] + "\n...\n" + value[-half:]
