from __future__ import annotations

from typing import Any, Dict, Iterable, List


class VibeChartError(RuntimeError):
    """Base error carrying a short message and optional details for the caller."""

    status_code = 500

    def __init__(self, error: str, details: str | None = None) -> None:
        super().__init__(error if not details else f"{error}: {details}")
        self.error = error
        self.details = details

    def to_json(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error}
        if self.details:
            payload["details"] = self.details
        return payload


class ConfigurationError(VibeChartError):
    """Raised when a configuration fails schema validation (after repair)."""

    def __init__(self, error: str, paths: Iterable[str] = (), details: str | None = None) -> None:
        self.paths: List[str] = list(paths)
        if details is None and self.paths:
            details = "invalid fields: " + ", ".join(self.paths)
        super().__init__(error, details)


class RequestShapeError(VibeChartError):
    status_code = 400


class MissingCredentialsError(VibeChartError):
    """The LLM endpoint cannot be called at all."""


class TranslationError(VibeChartError):
    status_code = 502


class TranslationTransportError(TranslationError):
    """Network, HTTP status or envelope failure talking to the LLM."""


class TranslationExtractionError(TranslationError):
    """The completion contained no JSON object at all."""


class TranslationContentError(TranslationError):
    """The extracted JSON could not be parsed even after repair.

    Recovered locally by the translator, never surfaced to the caller.
    """


class DatasetError(VibeChartError):
    status_code = 400


class SessionNotFoundError(VibeChartError):
    status_code = 404
