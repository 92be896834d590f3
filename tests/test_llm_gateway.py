"""Tests for the model invocation gateway and LLM error wrapping."""

import asyncio
import pytest
import httpx
from unittest.mock import patch

from agency_ai.infra.config import config
from agency_ai.infra.error_handler import (
    EmptyResponseError,
    ErrorCategory,
    GatewayError,
    LLMTimeoutError,
    UpstreamError,
    wrap_llm_error,
)
from agency_ai.models.message import PromptMessage
from agency_ai.services.llm_gateway import LLMGateway, PROVIDER_CALLS


TRANSCRIPT = [
    PromptMessage(role="system", content="system prompt"),
    PromptMessage(role="user", content="first question"),
    PromptMessage(role="assistant", content="first answer"),
    PromptMessage(role="user", content="second question"),
]


class TestInvoke:
    """Test successful and failing invocations."""

    @pytest.mark.asyncio
    async def test_returns_text_and_preserves_order(self, make_gateway):
        gateway = make_gateway(reply="Here you go")

        result = await gateway.invoke(TRANSCRIPT)

        assert result == "Here you go"
        gateway._call.assert_awaited_once_with(
            "test-model",
            [
                {"role": "system", "content": "system prompt"},
                {"role": "user", "content": "first question"},
                {"role": "assistant", "content": "first answer"},
                {"role": "user", "content": "second question"},
            ],
            5.0,
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [None, "", "   \n", 42])
    async def test_empty_response(self, make_gateway, reply):
        gateway = make_gateway(reply=reply)

        with pytest.raises(EmptyResponseError) as exc_info:
            await gateway.invoke(TRANSCRIPT)

        assert exc_info.value.category == ErrorCategory.EMPTY_RESPONSE

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def slow_call(model, messages, timeout):
            await asyncio.sleep(1)
            return "too late"

        gateway = LLMGateway(provider="openai", model="test-model", timeout=0.01, call=slow_call)

        with pytest.raises(LLMTimeoutError) as exc_info:
            await gateway.invoke(TRANSCRIPT)

        assert exc_info.value.category == ErrorCategory.TIMEOUT

    @pytest.mark.asyncio
    async def test_transport_timeout_is_timeout_kind(self, make_gateway):
        gateway = make_gateway(side_effect=httpx.ConnectTimeout("connect timed out"))

        with pytest.raises(LLMTimeoutError):
            await gateway.invoke(TRANSCRIPT)

    @pytest.mark.asyncio
    async def test_upstream_error_without_retry(self, make_gateway):
        gateway = make_gateway(side_effect=RuntimeError("connection reset by peer"))

        with pytest.raises(UpstreamError) as exc_info:
            await gateway.invoke(TRANSCRIPT)

        assert exc_info.value.provider == "openai"
        assert gateway._call.await_count == 1

    @pytest.mark.asyncio
    async def test_adapter_gateway_errors_pass_through(self, make_gateway):
        original = UpstreamError("openai API error (503)", provider="openai", status_code=503)
        gateway = make_gateway(side_effect=original)

        with pytest.raises(UpstreamError) as exc_info:
            await gateway.invoke(TRANSCRIPT)

        assert exc_info.value is original


class TestConstruction:
    """Test provider selection."""

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported LLM provider"):
            LLMGateway(provider="unknown", model="x")

    def test_provider_calls(self):
        assert set(PROVIDER_CALLS) == {"openai", "gemini"}
        gateway = LLMGateway(provider="gemini", model="gemini-2.5-flash")
        assert gateway._call is PROVIDER_CALLS["gemini"]

    def test_from_config(self):
        with patch.object(config, "LLM_PROVIDER", "gemini"), \
             patch.object(config, "LLM_MODEL", "gemini-2.5-flash"), \
             patch.object(config, "LLM_CALL_TIMEOUT", 30.0):
            gateway = LLMGateway.from_config()

        assert gateway.provider == "gemini"
        assert gateway.model == "gemini-2.5-flash"
        assert gateway.timeout == 30.0


class FakeStatusError(Exception):
    def __init__(self, status_code):
        self.status_code = status_code
        super().__init__(f"status {status_code}")


class TestWrapLLMError:
    """Test classification of provider errors."""

    def test_timeout_errors(self):
        assert isinstance(wrap_llm_error(asyncio.TimeoutError(), "openai"), LLMTimeoutError)
        assert isinstance(wrap_llm_error(RuntimeError("Request timed out"), "gemini"), LLMTimeoutError)

    def test_status_code_kept(self):
        error = wrap_llm_error(FakeStatusError(503), "openai")

        assert isinstance(error, UpstreamError)
        assert error.status_code == 503
        assert error.category == ErrorCategory.UPSTREAM_ERROR

    def test_http_status_error(self):
        request = httpx.Request("POST", "https://example.test")
        response = httpx.Response(429, request=request)
        error = wrap_llm_error(httpx.HTTPStatusError("rate limited", request=request, response=response), "gemini")

        assert isinstance(error, UpstreamError)
        assert error.status_code == 429

    def test_gateway_error_unchanged(self):
        original = EmptyResponseError(provider="openai")

        assert wrap_llm_error(original, "openai") is original

    def test_unknown_error(self):
        error = wrap_llm_error(ValueError("OPENAI_API_KEY not configured"), "openai")

        assert isinstance(error, UpstreamError)
        assert isinstance(error, GatewayError)
        assert error.status_code is None
