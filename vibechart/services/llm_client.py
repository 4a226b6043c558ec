from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .errors import MissingCredentialsError, TranslationTransportError

logger = logging.getLogger("vibechart.llm")


def _truncate(value: str, limit: int = 600) -> str:
    return value if len(value) <= limit else value[:limit] + "..."


class LLMClient:
    """Single-attempt client for an OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        api_base: str,
        api_key: Optional[str],
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 600,
        timeout: float = 60,
    ) -> None:
        if not api_key:
            raise MissingCredentialsError(
                "LLM API key not configured",
                details="Set LLM_API_KEY (or DEEPSEEK_API_KEY) in the environment",
            )
        self.base = api_base.rstrip("/")
        self.key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "LLMClient":
        return cls(
            settings.llm_api_base,
            settings.llm_api_key,
            settings.llm_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout,
        )

    def complete(self, messages: List[Dict[str, Any]]) -> str:
        """Return the text of the first completion choice.

        Any connection, status or envelope problem raises
        ``TranslationTransportError``; there is no retry.
        """

        headers = {"Authorization": f"Bearer {self.key}", "Content-Type": "application/json"}
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        logger.info("calling %s model=%s", self.base, self.model)
        try:
            response = requests.post(
                f"{self.base}/chat/completions",
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("LLM request failed: %s", exc)
            raise TranslationTransportError("Failed to connect to LLM API", details=str(exc)) from exc

        if not response.ok:
            logger.error("LLM API error status=%s body=%s", response.status_code, _truncate(response.text))
            raise TranslationTransportError(
                "LLM API error",
                details=f"Status: {response.status_code} - {_truncate(response.text)}",
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise TranslationTransportError("Invalid response from LLM API", details="Failed to parse API response") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise TranslationTransportError("Invalid response from LLM API", details="Response has no completion") from exc
        if not isinstance(content, str) or not content.strip():
            raise TranslationTransportError("Invalid response from LLM API", details="Completion is empty")

        logger.debug("LLM raw completion: %s", _truncate(content))
        return content
