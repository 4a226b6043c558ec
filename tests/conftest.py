from __future__ import annotations

import json
from typing import Any, Dict, List

import pytest


class FakeLLM:
    """Stands in for the chat completions client; replays canned completions."""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: List[List[Dict[str, Any]]] = []

    def complete(self, messages: List[Dict[str, Any]]) -> str:
        self.calls.append(messages)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return json.dumps(response)
        return response


@pytest.fixture
def sales_csv() -> bytes:
    lines = ["Date,Region,Sales"]
    for day in range(1, 11):
        region = "East" if day % 2 else "West"
        lines.append(f"2024-01-{day:02d},{region},{100 + day * 10}")
    return ("\n".join(lines) + "\n").encode("utf-8")
