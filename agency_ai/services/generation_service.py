"""Dispatch tagged generation requests to their task."""

from typing import Any, List, Union

from agency_ai.models.generation import (
    ChatTurnRequest,
    GenerationRequest,
    InsightsRequest,
    InsightsResult,
    OnboardingTasksRequest,
    ProposalDraftRequest,
    ReportDraftRequest,
    ReportSections,
)
from agency_ai.services.ai_service import AIService
from agency_ai.services.copilot_service import CopilotService

GenerationResult = Union[str, ReportSections, List[Any], InsightsResult]


class GenerationService:
    """Entry point that accepts any GenerationRequest."""

    def __init__(self, ai: AIService, copilot: CopilotService):
        self.ai = ai
        self.copilot = copilot

    async def run(self, request: GenerationRequest) -> GenerationResult:
        """
        Run one generation request.

        Returns:
            str for proposal and chat, ReportSections, a task list, or InsightsResult
        """
        if isinstance(request, ProposalDraftRequest):
            return await self.ai.generate_proposal(
                request.client,
                request.title,
                brief=request.brief,
                service_tier=request.service_tier,
                fee_cents=request.fee_cents,
            )
        if isinstance(request, ReportDraftRequest):
            return await self.ai.generate_report(
                request.client,
                request.engagement,
                recent_activity=request.recent_activity,
                completed_tasks=request.completed_tasks,
            )
        if isinstance(request, OnboardingTasksRequest):
            return await self.ai.generate_onboarding_tasks(
                request.service_tier,
                request.client_industry,
            )
        if isinstance(request, ChatTurnRequest):
            return await self.copilot.process_query(
                request.tenant_id,
                request.message,
                request.conversation_history,
            )
        if isinstance(request, InsightsRequest):
            return await self.copilot.generate_insights(request.tenant_id)
        raise ValueError(f"Unsupported generation request: {type(request).__name__}")
