"""API request/response models."""

from datetime import date
from typing import List, Optional, Any
from pydantic import BaseModel, Field

from agency_ai.models.generation import ClientProfile, EngagementTerms
from agency_ai.models.message import ConversationTurn


# ============================================================================
# Proposal Models
# ============================================================================

class GenerateProposalRequest(BaseModel):
    """Request model for proposal drafting."""
    client: ClientProfile
    title: str = Field(..., min_length=1, examples=["Q3 Growth Marketing Retainer"])
    brief: Optional[str] = None
    service_tier: Optional[str] = Field(None, examples=["Growth"])
    fee_cents: Optional[int] = Field(None, ge=0, description="Monthly fee in cents", examples=[500000])


class GeneratedTextResponse(BaseModel):
    """Response model for freeform generated text."""
    content: str


# ============================================================================
# Report Models
# ============================================================================

class GenerateReportRequest(BaseModel):
    """Request model for client report drafting."""
    client: ClientProfile
    engagement: EngagementTerms
    recent_activity: List[str] = Field(default_factory=list)
    completed_tasks: List[str] = Field(default_factory=list)


class ReportSectionsResponse(BaseModel):
    """Response model for a drafted client report."""
    summary: str
    risks: str
    next_steps: str


# ============================================================================
# Onboarding Models
# ============================================================================

class GenerateOnboardingTasksRequest(BaseModel):
    """Request model for onboarding task suggestions."""
    service_tier: str = Field(..., min_length=1, examples=["Growth"])
    client_industry: Optional[str] = Field(None, examples=["E-commerce"])


class OnboardingTasksResponse(BaseModel):
    """Response model for onboarding task suggestions."""
    tasks: List[Any]


# ============================================================================
# Copilot Models
# ============================================================================

class CopilotQueryRequest(BaseModel):
    """Request model for a copilot message."""
    message: str = Field(..., min_length=1, examples=["Which clients should I follow up with?"])
    conversation_history: List[ConversationTurn] = Field(default_factory=list)


class InsightsResponse(BaseModel):
    """Response model for agency insights."""
    summary: str
    recommendations: List[str]
