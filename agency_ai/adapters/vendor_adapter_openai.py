"""OpenAI vendor adapter for chat completions."""

import logging
from typing import List, Dict, Optional
from openai import AsyncOpenAI
from agency_ai.infra.config import config
from agency_ai.infra.error_handler import wrap_llm_error

logger = logging.getLogger(__name__)


class OpenAIChatClient:
    """Holder for a lazily created AsyncOpenAI client."""

    def __init__(self):
        self._client = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            if not config.OPENAI_API_KEY:
                raise ValueError("OPENAI_API_KEY not configured")
            # Retries belong to the caller, never to the SDK
            self._client = AsyncOpenAI(api_key=config.OPENAI_API_KEY, max_retries=0)
        return self._client


_chat_client = OpenAIChatClient()


async def call_openai_chat(
    model: str,
    messages: List[Dict[str, str]],
    timeout: float,
) -> Optional[str]:
    """
    Call OpenAI Chat Completions with an ordered message list.

    Args:
        model: Model name (e.g. "gpt-4o-mini")
        messages: List of {"role": ..., "content": ...} dicts, order preserved
        timeout: Request timeout in seconds

    Returns:
        Content of the first choice, or None when the response carried none
    """
    try:
        response_obj = await _chat_client.client.chat.completions.create(
            model=model,
            messages=messages,
            timeout=timeout,
        )
    except Exception as e:
        raise wrap_llm_error(e, "openai")

    if not response_obj.choices:
        return None

    if response_obj.usage:
        logger.debug(
            "OpenAI usage",
            extra={
                "model": model,
                "prompt_tokens": response_obj.usage.prompt_tokens,
                "completion_tokens": response_obj.usage.completion_tokens,
            },
        )

    return response_obj.choices[0].message.content
