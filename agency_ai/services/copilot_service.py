"""AI co-pilot with access to the agency's business data."""

import logging
from typing import List, Optional, Sequence

from agency_ai.infra.error_handler import GatewayError, GenerationError
from agency_ai.infra.metrics import generations_total
from agency_ai.models.agency import TenantSnapshot
from agency_ai.models.generation import InsightsResult
from agency_ai.models.message import ConversationTurn
from agency_ai.services.agency_repository import AgencyRepository
from agency_ai.services.context_aggregator import build_tenant_snapshot
from agency_ai.services.llm_gateway import LLMGateway
from agency_ai.services.prompt_builder import build_copilot_messages

logger = logging.getLogger(__name__)

CHAT_ERROR_MESSAGE = "I'm having trouble processing your request. Please try again."


def compute_insights(snapshot: TenantSnapshot) -> InsightsResult:
    """Rule-based recommendations; one per condition that holds, in fixed order."""
    recommendations: List[str] = []

    if snapshot.prospect_client_count > 0:
        recommendations.append(
            f"You have {snapshot.prospect_client_count} prospect(s). "
            "Consider reaching out to move them forward."
        )

    if snapshot.onboarding_engagement_count > 0:
        recommendations.append(
            f"{snapshot.onboarding_engagement_count} engagement(s) in onboarding. "
            "Focus on completing their setup tasks."
        )

    if snapshot.pending_proposal_count > 0:
        recommendations.append(
            f"{snapshot.pending_proposal_count} proposal(s) awaiting response. "
            "Follow up with clients."
        )

    if snapshot.active_engagement_count == 0 and snapshot.active_client_count > 0:
        recommendations.append(
            "You have active clients but no active engagements. "
            "Create engagements to track work."
        )

    summary = (
        f"You have {snapshot.active_client_count} active client(s) "
        f"with {snapshot.active_engagement_count} active engagement(s)."
    )
    return InsightsResult(summary=summary, recommendations=recommendations)


class CopilotService:
    """Conversational assistant and insights over one agency's data."""

    def __init__(self, repository: AgencyRepository, gateway: LLMGateway):
        self.repository = repository
        self.gateway = gateway

    async def process_query(
        self,
        tenant_id: int,
        message: str,
        conversation_history: Optional[Sequence[ConversationTurn]] = None,
    ) -> str:
        """
        Answer a user message with the agency's current data as context.

        Raises:
            GenerationError: if the model call fails
            Exception: any tenant data read failure, unchanged
        """
        snapshot = await build_tenant_snapshot(self.repository, tenant_id)
        messages = build_copilot_messages(snapshot, message, conversation_history)

        try:
            content = await self.gateway.invoke(messages)
        except GatewayError as e:
            generations_total.labels(task="chat", status="failure").inc()
            logger.error(
                f"Copilot query failed: {e.message}",
                exc_info=True,
                extra={"tenant_id": tenant_id},
            )
            raise GenerationError("chat", CHAT_ERROR_MESSAGE) from e

        generations_total.labels(task="chat", status="success").inc()
        return content

    async def generate_insights(self, tenant_id: int) -> InsightsResult:
        """Quick insights about the agency; no model call is made."""
        snapshot = await build_tenant_snapshot(self.repository, tenant_id)
        generations_total.labels(task="insights", status="success").inc()
        return compute_insights(snapshot)
