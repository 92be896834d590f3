"""Tests for tagged generation request dispatch."""

import pytest
from pydantic import TypeAdapter, ValidationError

from agency_ai.models.generation import (
    GenerationRequest,
    InsightsResult,
    OnboardingTasksRequest,
    ProposalDraftRequest,
    ReportSections,
)
from agency_ai.services.ai_service import AIService
from agency_ai.services.copilot_service import CopilotService
from agency_ai.services.generation_service import GenerationService


request_adapter = TypeAdapter(GenerationRequest)


def _service(repository, gateway):
    return GenerationService(AIService(gateway), CopilotService(repository, gateway))


class TestRequestParsing:
    """Test the kind discriminator."""

    def test_kind_selects_variant(self):
        request = request_adapter.validate_python({
            "kind": "proposal_draft",
            "client": {"name": "Acme Corp"},
            "title": "Growth Retainer",
            "fee_cents": 500000,
        })

        assert isinstance(request, ProposalDraftRequest)
        assert request.fee_cents == 500000

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            request_adapter.validate_python({"kind": "invoice", "tenant_id": 1})

    def test_negative_fee_rejected(self):
        with pytest.raises(ValidationError):
            request_adapter.validate_python({
                "kind": "report_draft",
                "client": {"name": "Acme Corp"},
                "engagement": {"service_tier": "Growth", "fee_cents": -1, "start_date": "2025-01-01"},
            })


class TestDispatch:
    """Test that each kind reaches its task."""

    @pytest.mark.asyncio
    async def test_proposal(self, repository, make_gateway):
        service = _service(repository, make_gateway(reply="Proposal text"))
        request = request_adapter.validate_python({
            "kind": "proposal_draft",
            "client": {"name": "Acme Corp"},
            "title": "Growth Retainer",
        })

        assert await service.run(request) == "Proposal text"

    @pytest.mark.asyncio
    async def test_report(self, repository, make_gateway):
        service = _service(repository, make_gateway(reply="SUMMARY: Fine.\nRISKS & CONCERNS: None.\nNEXT STEPS: More."))
        request = request_adapter.validate_python({
            "kind": "report_draft",
            "client": {"name": "Acme Corp"},
            "engagement": {"service_tier": "Growth", "fee_cents": 500000, "start_date": "2025-01-01"},
        })

        result = await service.run(request)

        assert result == ReportSections(summary="Fine.", risks="None.", next_steps="More.")

    @pytest.mark.asyncio
    async def test_onboarding(self, repository, make_gateway):
        service = _service(repository, make_gateway(reply='["Kickoff"]'))

        result = await service.run(OnboardingTasksRequest(service_tier="Starter"))

        assert result == ["Kickoff"]

    @pytest.mark.asyncio
    async def test_chat_turn(self, seeded_repository, make_gateway):
        gateway = make_gateway(reply="You have 1 prospect.")
        service = _service(seeded_repository, gateway)
        request = request_adapter.validate_python({
            "kind": "chat_turn",
            "tenant_id": 1,
            "message": "How many prospects?",
            "conversation_history": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}],
        })

        assert await service.run(request) == "You have 1 prospect."
        assert len(gateway._call.await_args.args[1]) == 4

    @pytest.mark.asyncio
    async def test_insights(self, seeded_repository, make_gateway):
        service = _service(seeded_repository, make_gateway())

        result = await service.run(request_adapter.validate_python({"kind": "insights", "tenant_id": 1}))

        assert isinstance(result, InsightsResult)
        assert len(result.recommendations) == 3
