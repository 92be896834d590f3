"""Prompt transcript message models."""

from typing import Literal
from pydantic import BaseModel, Field


class PromptMessage(BaseModel):
    """One role-tagged entry of the transcript sent to the model."""
    role: Literal["system", "user", "assistant"] = Field(..., description="'system' | 'user' | 'assistant'")
    content: str = Field(..., description="Message text content")

    model_config = {"frozen": True}


class ConversationTurn(BaseModel):
    """A prior copilot exchange supplied by the caller."""
    role: Literal["user", "assistant"] = Field(..., description="'user' | 'assistant'")
    content: str = Field(..., description="Message text content")
