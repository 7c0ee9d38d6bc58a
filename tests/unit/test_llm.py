"""Unit tests for the LLM provider base class and response parsing."""

import pytest

import vitae.utils.llm as llm
from vitae.utils.llm import (
    LLMError,
    get_provider,
    parse_array_response,
    parse_dict_response,
    parse_object_response,
)

# =============================================================================
# RESPONSE PARSING
# =============================================================================


@pytest.mark.unit
def test_parse_object_plain_json():
    assert parse_object_response('{"a": 1, "b": [1, 2]}') == {"a": 1, "b": [1, 2]}


@pytest.mark.unit
def test_parse_object_inside_fences_and_prose():
    text = 'Here you go:\n```json\n{"matchScore": 80}\n```\nHope this helps!'
    assert parse_object_response(text) == {"matchScore": 80}


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "no json here", "[1, 2, 3]", "{broken"])
def test_parse_object_raises_without_object(text):
    with pytest.raises(ValueError):
        parse_object_response(text)


@pytest.mark.unit
def test_parse_dict_coerces_values_to_string_lists():
    text = '{"summaryTips": ["a", 2], "skillsTips": "not a list"}'
    assert parse_dict_response(text) == {"summaryTips": ["a", "2"], "skillsTips": []}


@pytest.mark.unit
def test_parse_dict_fallback():
    assert parse_dict_response("garbage") == {}
    assert parse_dict_response("garbage", {"x": ["y"]}) == {"x": ["y"]}


@pytest.mark.unit
def test_parse_array_json_and_line_fallback():
    assert parse_array_response('["one", "two"]') == ["one", "two"]
    assert parse_array_response("- one\n- two\n* three", fallback_count=2) == ["one", "two"]


# =============================================================================
# PROVIDER BASE CLASS
# =============================================================================


@pytest.mark.unit
def test_generate_returns_response(scripted_provider):
    provider = scripted_provider("hello")
    response = provider.generate("system", "user")

    assert response.content == "hello"
    assert provider.calls == [("system", "user")]
    assert provider.name == "scripted/test-model"


@pytest.mark.unit
def test_generate_retries_transient_errors(scripted_provider, monkeypatch):
    monkeypatch.setattr(llm.time, "sleep", lambda _: None)
    provider = scripted_provider(None, None, "ok")
    provider.responses[:2] = [provider.TransientError("busy"), provider.TransientError("busy")]

    assert provider.generate("s", "u").content == "ok"
    assert len(provider.calls) == 3


@pytest.mark.unit
def test_generate_wraps_api_errors(scripted_provider):
    provider = scripted_provider(None)
    provider.responses[0] = provider.APIError("invalid key")

    with pytest.raises(LLMError, match="invalid key"):
        provider.generate("s", "u")


@pytest.mark.unit
def test_get_provider_rejects_unknown_name():
    with pytest.raises(ValueError, match="Unknown provider"):
        get_provider("mystery")
