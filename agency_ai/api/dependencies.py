"""FastAPI dependencies providing the AI services."""

from functools import lru_cache

from agency_ai.services.agency_repository import SqlAgencyRepository
from agency_ai.services.ai_service import AIService
from agency_ai.services.copilot_service import CopilotService
from agency_ai.services.llm_gateway import LLMGateway


@lru_cache
def get_gateway() -> LLMGateway:
    return LLMGateway.from_config()


@lru_cache
def get_repository() -> SqlAgencyRepository:
    return SqlAgencyRepository()


def get_ai_service() -> AIService:
    return AIService(get_gateway())


def get_copilot_service() -> CopilotService:
    return CopilotService(get_repository(), get_gateway())
