"""Read-only, tenant-scoped access to agency records."""

import asyncio
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol

from sqlalchemy import text

from agency_ai.infra.database import get_db_session
from agency_ai.infra.error_handler import AggregationError
from agency_ai.models.agency import (
    Client,
    Engagement,
    Proposal,
    Report,
    EngagementWithClient,
    ProposalWithClient,
    ReportWithContext,
)


class AgencyRepository(Protocol):
    """Data-access collaborator consumed by the AI pipeline."""

    async def list_clients(self, tenant_id: int) -> List[Client]:
        """Clients of the agency, most recently created first."""
        ...

    async def list_engagements(self, tenant_id: int) -> List[EngagementWithClient]:
        ...

    async def list_proposals(self, tenant_id: int) -> List[ProposalWithClient]:
        ...

    async def list_reports(self, tenant_id: int) -> List[ReportWithContext]:
        ...


def _validate_tenant_id(tenant_id: int) -> int:
    if isinstance(tenant_id, bool) or not isinstance(tenant_id, int) or tenant_id <= 0:
        raise AggregationError(f"Invalid tenant id: {tenant_id!r}", tenant_id=None)
    return tenant_id


# ============================================================================
# SQL implementation
# ============================================================================

_CLIENT_COLUMNS = """
    c.id AS client_id, c.name AS client_name, c.status AS client_status,
    c.industry AS client_industry, c.website AS client_website,
    c.notes AS client_notes, c.created_at AS client_created_at
"""

_ENGAGEMENT_COLUMNS = """
    e.id AS engagement_id, e.client_id AS engagement_client_id,
    e.service_tier, e.fee, e.start_date, e.end_date,
    e.status AS engagement_status, e.created_at AS engagement_created_at
"""


def _client_from_row(row) -> Client:
    return Client(
        id=row.client_id,
        name=row.client_name,
        status=row.client_status,
        industry=row.client_industry,
        website=row.client_website,
        notes=row.client_notes,
        created_at=row.client_created_at,
    )


def _engagement_from_row(row) -> Engagement:
    return Engagement(
        id=row.engagement_id,
        client_id=row.engagement_client_id,
        service_tier=row.service_tier,
        fee=int(row.fee),
        start_date=row.start_date,
        end_date=row.end_date,
        status=row.engagement_status,
        created_at=row.engagement_created_at,
    )


class SqlAgencyRepository:
    """
    SQLAlchemy-backed repository.

    Each read opens its own session on a worker thread so the four reads of a
    tenant snapshot can run concurrently.
    """

    def __init__(self, session_factory=get_db_session):
        self._session_factory = session_factory

    def _fetch(self, query: str, tenant_id: int):
        with self._session_factory() as session:
            return session.execute(text(query), {"agency_id": tenant_id}).fetchall()

    def _clients(self, tenant_id: int) -> List[Client]:
        rows = self._fetch(
            f"""
                SELECT {_CLIENT_COLUMNS}
                FROM clients c
                WHERE c.agency_id = :agency_id
                ORDER BY c.created_at DESC
            """,
            tenant_id,
        )
        return [_client_from_row(row) for row in rows]

    def _engagements(self, tenant_id: int) -> List[EngagementWithClient]:
        rows = self._fetch(
            f"""
                SELECT {_ENGAGEMENT_COLUMNS}, {_CLIENT_COLUMNS}
                FROM engagements e
                JOIN clients c ON e.client_id = c.id
                WHERE e.agency_id = :agency_id
                ORDER BY e.created_at DESC
            """,
            tenant_id,
        )
        return [
            EngagementWithClient(engagement=_engagement_from_row(row), client=_client_from_row(row))
            for row in rows
        ]

    def _proposals(self, tenant_id: int) -> List[ProposalWithClient]:
        rows = self._fetch(
            f"""
                SELECT p.id AS proposal_id, p.client_id AS proposal_client_id, p.title,
                       p.status AS proposal_status, p.brief,
                       p.created_at AS proposal_created_at,
                       {_CLIENT_COLUMNS}
                FROM proposals p
                JOIN clients c ON p.client_id = c.id
                WHERE p.agency_id = :agency_id
                ORDER BY p.created_at DESC
            """,
            tenant_id,
        )
        return [
            ProposalWithClient(
                proposal=Proposal(
                    id=row.proposal_id,
                    client_id=row.proposal_client_id,
                    title=row.title,
                    status=row.proposal_status,
                    brief=row.brief,
                    created_at=row.proposal_created_at,
                ),
                client=_client_from_row(row),
            )
            for row in rows
        ]

    def _reports(self, tenant_id: int) -> List[ReportWithContext]:
        rows = self._fetch(
            f"""
                SELECT r.id AS report_id, r.engagement_id AS report_engagement_id,
                       r.title, r.summary, r.risks, r.next_steps,
                       r.created_at AS report_created_at,
                       {_ENGAGEMENT_COLUMNS}, {_CLIENT_COLUMNS}
                FROM reports r
                JOIN engagements e ON r.engagement_id = e.id
                JOIN clients c ON e.client_id = c.id
                WHERE r.agency_id = :agency_id
                ORDER BY r.created_at DESC
            """,
            tenant_id,
        )
        return [
            ReportWithContext(
                report=Report(
                    id=row.report_id,
                    engagement_id=row.report_engagement_id,
                    title=row.title,
                    summary=row.summary,
                    risks=row.risks,
                    next_steps=row.next_steps,
                    created_at=row.report_created_at,
                ),
                engagement=_engagement_from_row(row),
                client=_client_from_row(row),
            )
            for row in rows
        ]

    async def list_clients(self, tenant_id: int) -> List[Client]:
        return await asyncio.to_thread(self._clients, _validate_tenant_id(tenant_id))

    async def list_engagements(self, tenant_id: int) -> List[EngagementWithClient]:
        return await asyncio.to_thread(self._engagements, _validate_tenant_id(tenant_id))

    async def list_proposals(self, tenant_id: int) -> List[ProposalWithClient]:
        return await asyncio.to_thread(self._proposals, _validate_tenant_id(tenant_id))

    async def list_reports(self, tenant_id: int) -> List[ReportWithContext]:
        return await asyncio.to_thread(self._reports, _validate_tenant_id(tenant_id))


# ============================================================================
# In-memory implementation
# ============================================================================

def _newest_first(items: Iterable, created_at) -> list:
    # Records without a timestamp keep their insertion order after dated ones
    indexed = list(enumerate(items))
    indexed.sort(key=lambda pair: (created_at(pair[1]) or datetime.min, -pair[0]), reverse=True)
    return [item for _, item in indexed]


class InMemoryAgencyRepository:
    """Dict-backed repository for local tooling and tests."""

    def __init__(self):
        self._clients: Dict[int, List[Client]] = {}
        self._engagements: Dict[int, List[Engagement]] = {}
        self._proposals: Dict[int, List[Proposal]] = {}
        self._reports: Dict[int, List[Report]] = {}

    def add_client(self, tenant_id: int, client: Client) -> Client:
        self._clients.setdefault(tenant_id, []).append(client)
        return client

    def add_engagement(self, tenant_id: int, engagement: Engagement) -> Engagement:
        self._engagements.setdefault(tenant_id, []).append(engagement)
        return engagement

    def add_proposal(self, tenant_id: int, proposal: Proposal) -> Proposal:
        self._proposals.setdefault(tenant_id, []).append(proposal)
        return proposal

    def add_report(self, tenant_id: int, report: Report) -> Report:
        self._reports.setdefault(tenant_id, []).append(report)
        return report

    def _client(self, tenant_id: int, client_id: int) -> Optional[Client]:
        for client in self._clients.get(tenant_id, []):
            if client.id == client_id:
                return client
        return None

    def _engagement(self, tenant_id: int, engagement_id: int) -> Optional[Engagement]:
        for engagement in self._engagements.get(tenant_id, []):
            if engagement.id == engagement_id:
                return engagement
        return None

    async def list_clients(self, tenant_id: int) -> List[Client]:
        _validate_tenant_id(tenant_id)
        return _newest_first(self._clients.get(tenant_id, []), lambda c: c.created_at)

    async def list_engagements(self, tenant_id: int) -> List[EngagementWithClient]:
        _validate_tenant_id(tenant_id)
        result = []
        for engagement in _newest_first(self._engagements.get(tenant_id, []), lambda e: e.created_at):
            client = self._client(tenant_id, engagement.client_id)
            # Inner join semantics: orphans are not returned
            if client is not None:
                result.append(EngagementWithClient(engagement=engagement, client=client))
        return result

    async def list_proposals(self, tenant_id: int) -> List[ProposalWithClient]:
        _validate_tenant_id(tenant_id)
        result = []
        for proposal in _newest_first(self._proposals.get(tenant_id, []), lambda p: p.created_at):
            client = self._client(tenant_id, proposal.client_id)
            if client is not None:
                result.append(ProposalWithClient(proposal=proposal, client=client))
        return result

    async def list_reports(self, tenant_id: int) -> List[ReportWithContext]:
        _validate_tenant_id(tenant_id)
        result = []
        for report in _newest_first(self._reports.get(tenant_id, []), lambda r: r.created_at):
            engagement = self._engagement(tenant_id, report.engagement_id)
            client = self._client(tenant_id, engagement.client_id) if engagement else None
            if engagement is not None and client is not None:
                result.append(ReportWithContext(report=report, engagement=engagement, client=client))
        return result
