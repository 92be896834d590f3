"""AI generation API router."""

from fastapi import APIRouter, Depends

from agency_ai.api.dependencies import get_ai_service, get_copilot_service
from agency_ai.api.models import (
    GenerateProposalRequest, GeneratedTextResponse,
    GenerateReportRequest, ReportSectionsResponse,
    GenerateOnboardingTasksRequest, OnboardingTasksResponse,
    CopilotQueryRequest, InsightsResponse,
)
from agency_ai.services.ai_service import AIService
from agency_ai.services.copilot_service import CopilotService

router = APIRouter(prefix="/tenants/{tenant_id}/ai")


@router.post("/proposals", tags=["AI"], response_model=GeneratedTextResponse)
async def generate_proposal(
    tenant_id: int,
    request: GenerateProposalRequest,
    ai_service: AIService = Depends(get_ai_service),
):
    """Draft a proposal for a client."""
    content = await ai_service.generate_proposal(
        request.client,
        request.title,
        brief=request.brief,
        service_tier=request.service_tier,
        fee_cents=request.fee_cents,
    )
    return GeneratedTextResponse(content=content)


@router.post("/reports", tags=["AI"], response_model=ReportSectionsResponse)
async def generate_report(
    tenant_id: int,
    request: GenerateReportRequest,
    ai_service: AIService = Depends(get_ai_service),
):
    """Draft a client report split into summary, risks and next steps."""
    sections = await ai_service.generate_report(
        request.client,
        request.engagement,
        recent_activity=request.recent_activity,
        completed_tasks=request.completed_tasks,
    )
    return ReportSectionsResponse(**sections.model_dump())


@router.post("/onboarding-tasks", tags=["AI"], response_model=OnboardingTasksResponse)
async def generate_onboarding_tasks(
    tenant_id: int,
    request: GenerateOnboardingTasksRequest,
    ai_service: AIService = Depends(get_ai_service),
):
    """Suggest onboarding tasks; always returns a list."""
    tasks = await ai_service.generate_onboarding_tasks(
        request.service_tier,
        request.client_industry,
    )
    return OnboardingTasksResponse(tasks=tasks)


@router.post("/copilot/query", tags=["AI"], response_model=GeneratedTextResponse)
async def copilot_query(
    tenant_id: int,
    request: CopilotQueryRequest,
    copilot: CopilotService = Depends(get_copilot_service),
):
    """Ask the copilot a question about the agency."""
    content = await copilot.process_query(
        tenant_id,
        request.message,
        request.conversation_history,
    )
    return GeneratedTextResponse(content=content)


@router.get("/insights", tags=["AI"], response_model=InsightsResponse)
async def insights(
    tenant_id: int,
    copilot: CopilotService = Depends(get_copilot_service),
):
    """Rule-based insights about the agency."""
    result = await copilot.generate_insights(tenant_id)
    return InsightsResponse(summary=result.summary, recommendations=result.recommendations)
