"""AI content generation for proposals, client reports and onboarding checklists."""

import logging
from typing import Any, List, Optional, Sequence

from agency_ai.infra.error_handler import GatewayError, GenerationError
from agency_ai.infra.metrics import generations_total, generation_fallbacks_total
from agency_ai.models.generation import ClientProfile, EngagementTerms, ReportSections
from agency_ai.services.llm_gateway import LLMGateway
from agency_ai.services.prompt_builder import (
    build_onboarding_messages,
    build_proposal_messages,
    build_report_messages,
)
from agency_ai.services.response_parser import (
    DEFAULT_ONBOARDING_TASKS,
    ParseStatus,
    apply_report_fallbacks,
    parse_onboarding_tasks,
    parse_report_sections,
)

logger = logging.getLogger(__name__)

PROPOSAL_ERROR_MESSAGE = "Failed to generate proposal. Please try again."
REPORT_ERROR_MESSAGE = "Failed to generate report. Please try again."


class AIService:
    """Generation tasks that need no tenant data beyond what the caller passes in."""

    def __init__(self, gateway: LLMGateway):
        self.gateway = gateway

    async def generate_proposal(
        self,
        client: ClientProfile,
        title: str,
        brief: Optional[str] = None,
        service_tier: Optional[str] = None,
        fee_cents: Optional[int] = None,
    ) -> str:
        """
        Draft a proposal.

        Returns:
            The model's text, unchanged

        Raises:
            GenerationError: if the model call fails
        """
        messages = build_proposal_messages(
            client,
            title,
            brief=brief,
            service_tier=service_tier,
            fee_cents=fee_cents,
        )
        try:
            content = await self.gateway.invoke(messages)
        except GatewayError as e:
            generations_total.labels(task="proposal", status="failure").inc()
            logger.error(f"Proposal generation failed: {e.message}", exc_info=True)
            raise GenerationError("proposal", PROPOSAL_ERROR_MESSAGE) from e

        generations_total.labels(task="proposal", status="success").inc()
        return content

    async def generate_report(
        self,
        client: ClientProfile,
        engagement: EngagementTerms,
        recent_activity: Optional[Sequence[str]] = None,
        completed_tasks: Optional[Sequence[str]] = None,
    ) -> ReportSections:
        """
        Draft a client report and split it into summary, risks and next steps.

        Sections the model did not label get their fixed defaults; only a
        failed model call raises.
        """
        messages = build_report_messages(
            client,
            engagement,
            recent_activity=recent_activity,
            completed_tasks=completed_tasks,
        )
        try:
            content = await self.gateway.invoke(messages)
        except GatewayError as e:
            generations_total.labels(task="report", status="failure").inc()
            logger.error(f"Report generation failed: {e.message}", exc_info=True)
            raise GenerationError("report", REPORT_ERROR_MESSAGE) from e

        parsed = parse_report_sections(content)
        if parsed.status != ParseStatus.FULLY_PARSED:
            logger.warning(
                "Report response missing sections, using defaults",
                extra={"task": "report", "status": parsed.status.value, "missing": parsed.missing},
            )
            for field_name in parsed.missing:
                generation_fallbacks_total.labels(task="report", field=field_name).inc()

        generations_total.labels(task="report", status="success").inc()
        return apply_report_fallbacks(content, parsed)

    async def generate_onboarding_tasks(
        self,
        service_tier: str,
        client_industry: Optional[str] = None,
    ) -> List[Any]:
        """
        Suggest onboarding tasks for a new engagement.

        Never raises: a failed call or an answer that is not a JSON array
        yields DEFAULT_ONBOARDING_TASKS.
        """
        messages = build_onboarding_messages(service_tier, client_industry)
        try:
            content = await self.gateway.invoke(messages)
        except GatewayError as e:
            logger.error(f"Onboarding task generation failed: {e.message}", exc_info=True)
            tasks = None
        else:
            tasks = parse_onboarding_tasks(content)
            if tasks is None:
                logger.warning(
                    "Onboarding response is not a JSON array, using defaults",
                    extra={"task": "onboarding_tasks"},
                )

        if tasks is None:
            generation_fallbacks_total.labels(task="onboarding_tasks", field="tasks").inc()
            generations_total.labels(task="onboarding_tasks", status="fallback").inc()
            return list(DEFAULT_ONBOARDING_TASKS)

        generations_total.labels(task="onboarding_tasks", status="success").inc()
        return tasks
