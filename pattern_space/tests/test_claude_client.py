import httpx
import pytest

from pattern_space.domain.exceptions import ApiError
from pattern_space.domain.models import Failure, Success
from pattern_space.providers import create_gateway
from pattern_space.providers.claude_client import ClaudeClient
from pattern_space.providers.registry import CLAUDE_CONFIG, get_provider_config


class SettingsStub:
    claude_api_key = "sk-test-key-123"
    http_timeout = 1.0
    claude_base_url = "https://api.anthropic.com/v1"


class NoKeySettings(SettingsStub):
    claude_api_key = None


def _fake_client(resp=None, captured=None, error=None):
    class Client:
        def __init__(self, *a, **kw):
            if captured is not None:
                captured["client_kwargs"] = kw

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, json=None, headers=None, **_):
            if captured is not None:
                captured["url"] = url
                captured["payload"] = json
                captured["headers"] = headers
            if error is not None:
                raise error
            return resp

    return Client


class Resp:
    def __init__(self, status_code=200, data=None, text=""):
        self.status_code = status_code
        self._data = data
        self.text = text

    @property
    def is_success(self):
        return 200 <= self.status_code < 300

    def json(self):
        if isinstance(self._data, Exception):
            raise self._data
        return self._data


def test_generate_success_and_payload(monkeypatch):
    captured = {}
    resp = Resp(data={"content": [{"type": "text", "text": "Headline\n\nI am Forest."}, {"text": "ignored"}]})
    monkeypatch.setattr("httpx.Client", _fake_client(resp, captured))

    outcome = ClaudeClient(SettingsStub()).generate("the prompt")

    assert outcome == Success(text="Headline\n\nI am Forest.")
    assert captured["url"] == "https://api.anthropic.com/v1/messages"
    assert captured["payload"] == {
        "model": CLAUDE_CONFIG.model.provider_model,
        "max_tokens": CLAUDE_CONFIG.model.max_tokens,
        "messages": [{"role": "user", "content": "the prompt"}],
    }
    assert captured["headers"]["x-api-key"] == "sk-test-key-123"
    assert captured["headers"]["anthropic-version"] == "2023-06-01"
    assert captured["headers"]["Content-Type"] == "application/json"
    assert captured["client_kwargs"]["timeout"] == 1.0


def test_missing_key_fails_without_network(monkeypatch):
    def boom(*a, **kw):
        raise AssertionError("no HTTP call expected")

    monkeypatch.setattr("httpx.Client", boom)
    outcome = ClaudeClient(NoKeySettings()).generate("p")
    assert isinstance(outcome, Failure)
    assert outcome.code == "MISSING_API_KEY"


def test_network_error_is_failure(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(error=httpx.ConnectError("refused")))
    outcome = ClaudeClient(SettingsStub()).generate("p")
    assert outcome == Failure(code="NETWORK_ERROR", reason="refused")


def test_timeout_is_failure(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(error=httpx.ReadTimeout("slow")))
    outcome = ClaudeClient(SettingsStub()).generate("p")
    assert isinstance(outcome, Failure)
    assert outcome.code == "NETWORK_ERROR"


def test_non_success_status_is_failure(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(status_code=529, text="overloaded")))
    outcome = ClaudeClient(SettingsStub()).generate("p")
    assert outcome == Failure(code="API_ERROR", reason="overloaded")


def test_redirect_status_is_failure(monkeypatch):
    resp = Resp(status_code=302, data={"content": [{"text": "moved"}]})
    monkeypatch.setattr("httpx.Client", _fake_client(resp))
    outcome = ClaudeClient(SettingsStub()).generate("p")
    assert isinstance(outcome, Failure)
    assert outcome.code == "API_ERROR"


def test_non_ascii_key_is_failure():
    class CurlyQuoteKey(SettingsStub):
        claude_api_key = "sk-ant-key\u2019abcdef"

    outcome = ClaudeClient(CurlyQuoteKey()).generate("p")
    assert isinstance(outcome, Failure)
    assert outcome.code == "BAD_REQUEST_CONFIG"


def test_invalid_base_url_is_failure():
    class BadUrl(SettingsStub):
        claude_base_url = "http://[not-a-host"

    outcome = ClaudeClient(BadUrl()).generate("p")
    assert isinstance(outcome, Failure)
    assert outcome.code in {"BAD_REQUEST_CONFIG", "NETWORK_ERROR"}


def test_protocol_error_is_failure(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(error=httpx.RemoteProtocolError("eof")))
    outcome = ClaudeClient(SettingsStub()).generate("p")
    assert outcome == Failure(code="NETWORK_ERROR", reason="eof")


def test_undecodable_body_is_failure(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(data=ValueError("not json"))))
    outcome = ClaudeClient(SettingsStub()).generate("p")
    assert isinstance(outcome, Failure)
    assert outcome.code == "BAD_RESPONSE"


def test_unexpected_shape_is_failure(monkeypatch):
    for data in ({}, {"content": []}, {"content": [{"type": "text"}]}, [], {"content": [{"text": 3}]}):
        monkeypatch.setattr("httpx.Client", _fake_client(Resp(data=data)))
        outcome = ClaudeClient(SettingsStub()).generate("p")
        assert isinstance(outcome, Failure), data
        assert outcome.code == "BAD_RESPONSE"


def test_complete_raises_business_errors(monkeypatch):
    monkeypatch.setattr("httpx.Client", _fake_client(Resp(status_code=401, text="bad key")))
    client = ClaudeClient(SettingsStub())
    with pytest.raises(ApiError) as exc_info:
        client.complete(client.build_request("p"))
    assert exc_info.value.http_status == 401


def test_registry_and_factory():
    assert get_provider_config("CLAUDE") is CLAUDE_CONFIG
    assert isinstance(create_gateway(SettingsStub()), ClaudeClient)
