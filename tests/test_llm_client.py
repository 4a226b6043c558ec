import pytest
import requests

from vibechart.services import llm_client
from vibechart.services.errors import MissingCredentialsError, TranslationTransportError
from vibechart.services.llm_client import LLMClient


class _Response:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self.ok = status_code < 400
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _client():
    return LLMClient("https://llm.example/v1/", "secret", "deepseek-chat", temperature=0.1, max_tokens=600, timeout=5)


def test_missing_key_is_rejected():
    with pytest.raises(MissingCredentialsError):
        LLMClient("https://llm.example/v1", "", "deepseek-chat")


def test_complete_posts_chat_request(monkeypatch):
    captured = {}

    def fake_post(url, headers, json, timeout):
        captured.update(url=url, headers=headers, json=json, timeout=timeout)
        return _Response(payload={"choices": [{"message": {"content": '{"grid": "solid"}'}}]})

    monkeypatch.setattr(llm_client.requests, "post", fake_post)

    assert _client().complete([{"role": "user", "content": "solid grid"}]) == '{"grid": "solid"}'
    assert captured["url"] == "https://llm.example/v1/chat/completions"
    assert captured["headers"]["Authorization"] == "Bearer secret"
    assert captured["json"]["temperature"] == 0.1
    assert captured["json"]["max_tokens"] == 600
    assert captured["timeout"] == 5


@pytest.mark.parametrize(
    "response",
    [
        _Response(status_code=429, text="rate limited"),
        _Response(payload=None),
        _Response(payload={"choices": []}),
        _Response(payload={"choices": [{"message": {"content": "   "}}]}),
    ],
)
def test_bad_responses_are_transport_errors(monkeypatch, response):
    monkeypatch.setattr(llm_client.requests, "post", lambda *args, **kwargs: response)
    with pytest.raises(TranslationTransportError):
        _client().complete([])


def test_connection_errors_are_transport_errors(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(llm_client.requests, "post", boom)
    with pytest.raises(TranslationTransportError) as excinfo:
        _client().complete([])
    assert "refused" in excinfo.value.details
