"""Single point of contact with the language model."""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from agency_ai.adapters.vendor_adapter_gemini import call_gemini
from agency_ai.adapters.vendor_adapter_openai import call_openai_chat
from agency_ai.infra.config import config
from agency_ai.infra.error_handler import (
    EmptyResponseError,
    GatewayError,
    LLMTimeoutError,
    wrap_llm_error,
)
from agency_ai.infra.metrics import llm_calls_total, llm_call_duration
from agency_ai.models.message import PromptMessage

logger = logging.getLogger(__name__)

ModelCall = Callable[[str, List[Dict[str, str]], float], Awaitable[Optional[str]]]

PROVIDER_CALLS: Dict[str, ModelCall] = {
    "openai": call_openai_chat,
    "gemini": call_gemini,
}


class LLMGateway:
    """
    Sends one ordered transcript to the model and returns its raw text.

    Exactly one model call is made per ``invoke``; there is no retry. Failures
    surface as ``LLMTimeoutError``, ``UpstreamError`` or ``EmptyResponseError``.
    """

    def __init__(
        self,
        provider: str,
        model: str,
        timeout: float = 120.0,
        call: Optional[ModelCall] = None,
    ):
        if call is None:
            if provider not in PROVIDER_CALLS:
                raise ValueError(f"Unsupported LLM provider: {provider}")
            call = PROVIDER_CALLS[provider]
        self.provider = provider
        self.model = model
        self.timeout = timeout
        self._call = call

    @classmethod
    def from_config(cls) -> "LLMGateway":
        return cls(
            provider=config.LLM_PROVIDER,
            model=config.LLM_MODEL,
            timeout=config.LLM_CALL_TIMEOUT,
        )

    async def invoke(self, messages: Sequence[PromptMessage]) -> str:
        """
        Invoke the model with a transcript.

        Args:
            messages: Ordered transcript; sent exactly in this order

        Returns:
            Non-empty model text

        Raises:
            GatewayError: one of the three failure kinds
        """
        payload = [{"role": m.role, "content": m.content} for m in messages]
        start_time = time.monotonic()
        status = "success"

        try:
            try:
                content = await asyncio.wait_for(
                    self._call(self.model, payload, self.timeout),
                    timeout=self.timeout,
                )
            except asyncio.TimeoutError:
                raise LLMTimeoutError(
                    f"{self.provider} call exceeded {self.timeout} seconds",
                    provider=self.provider,
                )
            except GatewayError:
                raise
            except Exception as e:
                raise wrap_llm_error(e, self.provider) from e

            if not isinstance(content, str) or not content.strip():
                raise EmptyResponseError(provider=self.provider)

            return content
        except GatewayError as e:
            status = e.category.value
            logger.error(
                f"LLM call failed: {e.message}",
                extra={
                    "provider": self.provider,
                    "model": self.model,
                    "category": e.category.value,
                    "message_count": len(payload),
                },
            )
            raise
        finally:
            elapsed = time.monotonic() - start_time
            llm_calls_total.labels(provider=self.provider, model=self.model, status=status).inc()
            llm_call_duration.labels(provider=self.provider, model=self.model).observe(elapsed)
            logger.debug(
                "LLM call finished",
                extra={
                    "provider": self.provider,
                    "model": self.model,
                    "status": status,
                    "latency_ms": int(elapsed * 1000),
                },
            )
