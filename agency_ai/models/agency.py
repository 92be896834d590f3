"""Agency business records as read by the AI pipeline, and the per-call tenant snapshot."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


@dataclass
class Client:
    """A client of the agency."""
    id: int
    name: str
    status: str = "prospect"  # "prospect" | "active" | "paused" | "churned"
    industry: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class Engagement:
    """A paid, recurring service relationship with a client."""
    id: int
    client_id: int
    service_tier: str
    fee: int  # monthly fee in cents
    start_date: date
    status: str = "onboarding"  # "onboarding" | "active" | "paused" | "complete"
    end_date: Optional[date] = None
    created_at: Optional[datetime] = None


@dataclass
class Proposal:
    """A proposal sent (or to be sent) to a client."""
    id: int
    client_id: int
    title: str
    status: str = "draft"  # "draft" | "sent" | "approved" | "rejected"
    brief: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class Report:
    """A client report for one engagement."""
    id: int
    engagement_id: int
    title: str
    summary: str
    next_steps: str
    risks: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class EngagementWithClient:
    engagement: Engagement
    client: Client


@dataclass
class ProposalWithClient:
    proposal: Proposal
    client: Client


@dataclass
class ReportWithContext:
    report: Report
    engagement: Engagement
    client: Client


@dataclass
class TenantSnapshot:
    """
    Read-only view of one agency's business state at call time.

    Rebuilt on every generation call and never persisted. An agency with no
    records yields a snapshot whose counts are zero and whose lists are empty.
    """
    tenant_id: int
    total_client_count: int = 0
    active_client_count: int = 0
    prospect_client_count: int = 0
    total_engagement_count: int = 0
    active_engagement_count: int = 0
    onboarding_engagement_count: int = 0
    mrr_cents: int = 0  # sum of active engagement fees, in cents
    total_proposal_count: int = 0
    pending_proposal_count: int = 0
    total_report_count: int = 0
    client_lines: List[str] = field(default_factory=list)  # already truncated, with "... and N more"
    engagement_lines: List[str] = field(default_factory=list)  # already truncated, with "... and N more"
