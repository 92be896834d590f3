"""Gemini vendor adapter using the generateContent REST API."""

from typing import List, Dict, Any, Optional
import httpx
from agency_ai.infra.config import config
from agency_ai.infra.error_handler import wrap_llm_error

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


def to_gemini_contents(messages: List[Dict[str, str]]) -> List[Dict[str, Any]]:
    """
    Convert chat messages to Gemini contents.

    Gemini has no system role here: system messages are prepended to the next
    user message, and assistant messages use the "model" role.
    """
    gemini_contents = []
    system_parts = []

    for msg in messages:
        role = msg.get("role")
        content = msg.get("content", "")

        if role == "system":
            system_parts.append(content)
        elif role == "user":
            if system_parts:
                combined_content = "\n\n".join(system_parts) + "\n\n" + content
                system_parts = []
            else:
                combined_content = content
            gemini_contents.append({"role": "user", "parts": [{"text": combined_content}]})
        elif role == "assistant":
            gemini_contents.append({"role": "model", "parts": [{"text": content}]})

    return gemini_contents


async def call_gemini(
    model: str,
    messages: List[Dict[str, str]],
    timeout: float,
) -> Optional[str]:
    """
    Call Gemini generateContent.

    Args:
        model: Model name (e.g. "gemini-2.5-flash")
        messages: List of {"role": ..., "content": ...} dicts, order preserved
        timeout: Request timeout in seconds

    Returns:
        Joined text parts of the first candidate, or None when there are none
    """
    if not config.GEMINI_API_KEY:
        raise ValueError("GEMINI_API_KEY not configured")

    payload = {"contents": to_gemini_contents(messages)}
    url = f"{GEMINI_API_BASE}/{model}:generateContent"
    headers = {
        "Content-Type": "application/json",
        "x-goog-api-key": config.GEMINI_API_KEY,
    }

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()
            result = response.json()
    except Exception as e:
        raise wrap_llm_error(e, "gemini")

    if not result.get("candidates"):
        return None

    parts = result["candidates"][0].get("content", {}).get("parts", [])
    text_parts = [part["text"] for part in parts if isinstance(part, dict) and "text" in part]
    if not text_parts:
        return None
    return "".join(text_parts)
