"""Tests for proposal, report and onboarding generation."""

import pytest
from datetime import date

from agency_ai.infra.error_handler import (
    EmptyResponseError,
    GenerationError,
    LLMTimeoutError,
    UpstreamError,
)
from agency_ai.models.generation import ClientProfile, EngagementTerms, ReportSections
from agency_ai.services.ai_service import (
    AIService,
    PROPOSAL_ERROR_MESSAGE,
    REPORT_ERROR_MESSAGE,
)
from agency_ai.services.response_parser import (
    DEFAULT_NEXT_STEPS,
    DEFAULT_ONBOARDING_TASKS,
    DEFAULT_RISKS,
)


CLIENT = ClientProfile(name="Acme Corp", industry="Retail")
TERMS = EngagementTerms(service_tier="Growth", fee_cents=500000, start_date=date(2025, 1, 15))


def _sent_messages(gateway):
    """Payload dicts passed to the mocked model call."""
    return gateway._call.await_args.args[1]


class TestGenerateProposal:
    """Test proposal drafting."""

    @pytest.mark.asyncio
    async def test_returns_model_text_unchanged(self, make_gateway):
        text = "# Proposal\n\nExecutive summary...\n"
        gateway = make_gateway(reply=text)
        service = AIService(gateway)

        result = await service.generate_proposal(CLIENT, "Growth Retainer", fee_cents=500000)

        assert result == text
        sent = _sent_messages(gateway)
        assert [m["role"] for m in sent] == ["system", "user"]
        assert "$5,000" in sent[1]["content"]

    @pytest.mark.asyncio
    async def test_empty_response_fails(self, make_gateway):
        service = AIService(make_gateway(reply="   "))

        with pytest.raises(GenerationError) as exc_info:
            await service.generate_proposal(CLIENT, "Growth Retainer")

        assert exc_info.value.task == "proposal"
        assert exc_info.value.message == PROPOSAL_ERROR_MESSAGE
        assert isinstance(exc_info.value.__cause__, EmptyResponseError)

    @pytest.mark.asyncio
    async def test_upstream_failure(self, make_gateway):
        service = AIService(make_gateway(side_effect=RuntimeError("bad gateway")))

        with pytest.raises(GenerationError) as exc_info:
            await service.generate_proposal(CLIENT, "Growth Retainer")

        assert isinstance(exc_info.value.__cause__, UpstreamError)


class TestGenerateReport:
    """Test report drafting and section recovery."""

    @pytest.mark.asyncio
    async def test_sections_parsed(self, make_gateway):
        reply = (
            "**SUMMARY:**\nTraffic grew 20%.\n\n"
            "**RISKS & CONCERNS:**\n- Late assets\n\n"
            "**NEXT STEPS:**\n- Launch email campaign"
        )
        gateway = make_gateway(reply=reply)
        service = AIService(gateway)

        sections = await service.generate_report(
            CLIENT, TERMS,
            recent_activity=["Launched landing pages"],
            completed_tasks=["Site audit"],
        )

        assert sections == ReportSections(
            summary="Traffic grew 20%.",
            risks="- Late assets",
            next_steps="- Launch email campaign",
        )
        user_prompt = _sent_messages(gateway)[1]["content"]
        assert "- Monthly Investment: $5,000" in user_prompt
        assert "- Start Date: 1/15/2025" in user_prompt

    @pytest.mark.asyncio
    async def test_unlabeled_text_uses_defaults(self, make_gateway):
        service = AIService(make_gateway(reply="A quiet month.\n\nNothing else to add."))

        sections = await service.generate_report(CLIENT, TERMS)

        assert sections.summary == "A quiet month."
        assert sections.risks == DEFAULT_RISKS
        assert sections.next_steps == DEFAULT_NEXT_STEPS

    @pytest.mark.asyncio
    async def test_timeout_fails(self, make_gateway):
        service = AIService(make_gateway(side_effect=LLMTimeoutError("slow", provider="openai")))

        with pytest.raises(GenerationError) as exc_info:
            await service.generate_report(CLIENT, TERMS)

        assert exc_info.value.task == "report"
        assert str(exc_info.value) == REPORT_ERROR_MESSAGE


class TestGenerateOnboardingTasks:
    """Test onboarding task suggestions."""

    @pytest.mark.asyncio
    async def test_valid_array(self, make_gateway):
        gateway = make_gateway(reply='["Kickoff call", "Collect brand assets", "Set up reporting"]')
        service = AIService(gateway)

        tasks = await service.generate_onboarding_tasks("Growth", "Healthcare")

        assert tasks == ["Kickoff call", "Collect brand assets", "Set up reporting"]
        assert "- Client Industry: Healthcare" in _sent_messages(gateway)[1]["content"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [
        "Sure! Here are some tasks: kickoff, assets.",
        '{"tasks": ["Kickoff"]}',
    ])
    async def test_unusable_answer_falls_back(self, make_gateway, reply):
        service = AIService(make_gateway(reply=reply))

        tasks = await service.generate_onboarding_tasks("Growth")

        assert tasks == DEFAULT_ONBOARDING_TASKS

    @pytest.mark.asyncio
    async def test_gateway_failure_falls_back(self, make_gateway):
        service = AIService(make_gateway(side_effect=RuntimeError("connection refused")))

        tasks = await service.generate_onboarding_tasks("Growth")

        assert tasks == DEFAULT_ONBOARDING_TASKS

    @pytest.mark.asyncio
    async def test_fallback_is_a_copy(self, make_gateway):
        service = AIService(make_gateway(reply="not json"))

        tasks = await service.generate_onboarding_tasks("Growth")
        tasks.append("Extra")

        assert "Extra" not in DEFAULT_ONBOARDING_TASKS
