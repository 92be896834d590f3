from .agency import (
    Client,
    Engagement,
    Proposal,
    Report,
    EngagementWithClient,
    ProposalWithClient,
    ReportWithContext,
    TenantSnapshot,
)
from .message import PromptMessage, ConversationTurn
from .generation import (
    ClientProfile,
    EngagementTerms,
    GenerationRequest,
    ReportSections,
    InsightsResult,
)

__all__ = [
    "Client",
    "Engagement",
    "Proposal",
    "Report",
    "EngagementWithClient",
    "ProposalWithClient",
    "ReportWithContext",
    "TenantSnapshot",
    "PromptMessage",
    "ConversationTurn",
    "ClientProfile",
    "EngagementTerms",
    "GenerationRequest",
    "ReportSections",
    "InsightsResult",
]
