"""Generation request and result models."""

from datetime import date
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field

from agency_ai.models.message import ConversationTurn


class ClientProfile(BaseModel):
    """Client details used in prompts."""
    name: str = Field(..., min_length=1)
    industry: Optional[str] = None
    website: Optional[str] = None


class EngagementTerms(BaseModel):
    """Engagement details used in report prompts."""
    service_tier: str
    fee_cents: int = Field(..., ge=0, description="Monthly fee in cents")
    start_date: date


# ============================================================================
# Requests
# ============================================================================

class ProposalDraftRequest(BaseModel):
    kind: Literal["proposal_draft"] = "proposal_draft"
    client: ClientProfile
    title: str = Field(..., min_length=1)
    brief: Optional[str] = None
    service_tier: Optional[str] = None
    fee_cents: Optional[int] = Field(None, ge=0, description="Monthly fee in cents")


class ReportDraftRequest(BaseModel):
    kind: Literal["report_draft"] = "report_draft"
    client: ClientProfile
    engagement: EngagementTerms
    recent_activity: List[str] = Field(default_factory=list)
    completed_tasks: List[str] = Field(default_factory=list)


class OnboardingTasksRequest(BaseModel):
    kind: Literal["onboarding_tasks"] = "onboarding_tasks"
    service_tier: str
    client_industry: Optional[str] = None


class ChatTurnRequest(BaseModel):
    kind: Literal["chat_turn"] = "chat_turn"
    tenant_id: int
    message: str = Field(..., min_length=1)
    conversation_history: List[ConversationTurn] = Field(default_factory=list)


class InsightsRequest(BaseModel):
    kind: Literal["insights"] = "insights"
    tenant_id: int


GenerationRequest = Annotated[
    Union[
        ProposalDraftRequest,
        ReportDraftRequest,
        OnboardingTasksRequest,
        ChatTurnRequest,
        InsightsRequest,
    ],
    Field(discriminator="kind"),
]


# ============================================================================
# Results
# ============================================================================

class ReportSections(BaseModel):
    """Structured client report recovered from model text."""
    summary: str
    risks: str
    next_steps: str


class InsightsResult(BaseModel):
    """Rule-based agency insights."""
    summary: str
    recommendations: List[str] = Field(default_factory=list)
