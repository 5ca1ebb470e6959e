"""
Unit tests for the LLM client wrapper.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.llm_client import LLMClient, LLMResponse, get_llm_client


def response(content):
    return LLMResponse(content=content, input_tokens=3, output_tokens=4, model="m")


class TestLLMResponse:

    @pytest.mark.unit
    def test_parse_plain_json(self):
        assert response('{"a": 1}').parse_json() == {"a": 1}

    @pytest.mark.unit
    def test_parse_fenced_json(self):
        content = '```json\n{"recommendations": []}\n```'
        assert response(content).parse_json() == {"recommendations": []}

    @pytest.mark.unit
    def test_parse_invalid_json(self):
        assert response("Sure! Here you go").parse_json() is None

    @pytest.mark.unit
    def test_total_tokens(self):
        assert response("x").total_tokens == 7


class TestLLMClient:

    @pytest.mark.unit
    def test_unavailable_without_key(self):
        assert LLMClient(provider="openai").is_available is False
        assert LLMClient(provider="other", api_key="k").is_available is False

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_chat_raises_when_unavailable(self):
        with pytest.raises(ValueError, match="not available"):
            await LLMClient(provider="openai").chat([{"role": "user", "content": "hi"}])

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_openai_chat_sends_system_prompt(self):
        client = LLMClient(provider="openai", api_key="sk-test")
        sdk = MagicMock()
        sdk.chat.completions.create = AsyncMock(return_value=MagicMock(
            choices=[MagicMock(message=MagicMock(content="hello"))],
            usage=MagicMock(prompt_tokens=5, completion_tokens=2),
        ))
        client._client = sdk

        result = await client.complete("hi", system_prompt="be brief", json_mode=True)

        assert result.content == "hello"
        assert client.total_tokens_used == 7
        kwargs = sdk.chat.completions.create.await_args.kwargs
        assert kwargs["messages"][0] == {"role": "system", "content": "be brief"}
        assert kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_anthropic_chat_passes_system_separately(self):
        client = LLMClient(provider="anthropic", api_key="sk-ant")
        sdk = MagicMock()
        sdk.messages.create = AsyncMock(return_value=MagicMock(
            content=[MagicMock(text="hey")],
            usage=MagicMock(input_tokens=1, output_tokens=1),
        ))
        client._client = sdk

        result = await client.chat([{"role": "user", "content": "hi"}], system_prompt="sys")

        assert result.content == "hey"
        assert sdk.messages.create.await_args.kwargs["system"] == "sys"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_retries_then_raises(self):
        client = LLMClient(provider="openai", api_key="sk-test", max_retries=2, retry_delay=0)
        sdk = MagicMock()
        sdk.chat.completions.create = AsyncMock(side_effect=RuntimeError("overloaded"))
        client._client = sdk

        with pytest.raises(RuntimeError, match="overloaded"):
            await client.complete("hi")
        assert sdk.chat.completions.create.await_count == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_default_client_makes_one_attempt(self, app_env, monkeypatch):
        from app.core.config import reset_settings

        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
        reset_settings()
        client = get_llm_client()
        sdk = MagicMock()
        sdk.chat.completions.create = AsyncMock(side_effect=RuntimeError("overloaded"))
        client._client = sdk

        with pytest.raises(RuntimeError, match="overloaded"):
            await client.complete("hi")
        assert client.max_retries == 1
        assert LLMClient(provider="openai", api_key="sk-test").max_retries == 1
        assert sdk.chat.completions.create.await_count == 1


class TestGetLLMClient:

    @pytest.mark.unit
    def test_none_without_keys(self, app_env):
        assert get_llm_client() is None

    @pytest.mark.unit
    def test_prefers_openai(self, app_env, monkeypatch):
        from app.core.config import reset_settings

        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-anthropic")
        reset_settings()

        client = get_llm_client()
        assert client.provider == "openai"
        assert client.model == "gpt-4o-mini"

    @pytest.mark.unit
    def test_anthropic_only(self, app_env, monkeypatch):
        from app.core.config import reset_settings

        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-anthropic")
        reset_settings()

        assert get_llm_client().provider == "anthropic"
