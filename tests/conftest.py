"""Pytest configuration and fixtures."""

import os
from datetime import date, datetime
from unittest.mock import AsyncMock

import pytest
from dotenv import load_dotenv

# Load test environment variables
load_dotenv()

# Set test environment before any agency_ai module reads its config
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")

from agency_ai.models.agency import Client, Engagement, Proposal, Report
from agency_ai.services.agency_repository import InMemoryAgencyRepository
from agency_ai.services.llm_gateway import LLMGateway


TENANT_ID = 1


@pytest.fixture
def make_gateway():
    """Build a real LLMGateway around a mocked model call."""
    def _make(reply=None, side_effect=None, timeout=5.0):
        call = AsyncMock(return_value=reply, side_effect=side_effect)
        return LLMGateway(provider="openai", model="test-model", timeout=timeout, call=call)
    return _make


@pytest.fixture
def repository():
    return InMemoryAgencyRepository()


@pytest.fixture
def seeded_repository():
    """An agency with a prospect, an active client and a mix of engagements/proposals."""
    repo = InMemoryAgencyRepository()
    acme = repo.add_client(TENANT_ID, Client(
        id=1, name="Acme Corp", status="active", industry="Retail",
        created_at=datetime(2025, 1, 1),
    ))
    globex = repo.add_client(TENANT_ID, Client(
        id=2, name="Globex", status="prospect",
        created_at=datetime(2025, 2, 1),
    ))
    repo.add_engagement(TENANT_ID, Engagement(
        id=10, client_id=acme.id, service_tier="Growth", fee=500000,
        start_date=date(2025, 1, 15), status="active",
        created_at=datetime(2025, 1, 15),
    ))
    repo.add_engagement(TENANT_ID, Engagement(
        id=11, client_id=globex.id, service_tier="Starter", fee=150000,
        start_date=date(2025, 2, 15), status="onboarding",
        created_at=datetime(2025, 2, 15),
    ))
    repo.add_proposal(TENANT_ID, Proposal(
        id=20, client_id=globex.id, title="SEO Retainer", status="sent",
        created_at=datetime(2025, 2, 2),
    ))
    repo.add_report(TENANT_ID, Report(
        id=30, engagement_id=10, title="January", summary="Good month.",
        next_steps="Keep going.", created_at=datetime(2025, 2, 1),
    ))
    return repo
