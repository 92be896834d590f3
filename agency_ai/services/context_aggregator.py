"""Aggregate a tenant's business records into a bounded snapshot for prompts."""

import asyncio
import logging
import time
from typing import List, Sequence

from agency_ai.infra.metrics import tenant_snapshot_duration
from agency_ai.models.agency import (
    Client,
    EngagementWithClient,
    ProposalWithClient,
    ReportWithContext,
    TenantSnapshot,
)
from agency_ai.services.agency_repository import AgencyRepository
from agency_ai.services.prompt_builder import format_fee

logger = logging.getLogger(__name__)

MAX_CLIENT_LINES = 5
MAX_ENGAGEMENT_LINES = 3


def _truncated(lines: List[str], limit: int) -> List[str]:
    if len(lines) <= limit:
        return lines
    return lines[:limit] + [f"... and {len(lines) - limit} more"]


def _client_line(client: Client) -> str:
    details = client.status
    if client.industry:
        details += f", {client.industry}"
    return f"- {client.name} ({details})"


def _engagement_line(item: EngagementWithClient) -> str:
    engagement = item.engagement
    return f"- {item.client.name}: {engagement.service_tier} - ${format_fee(engagement.fee)}/mo"


def summarize(
    tenant_id: int,
    clients: Sequence[Client],
    engagements: Sequence[EngagementWithClient],
    proposals: Sequence[ProposalWithClient],
    reports: Sequence[ReportWithContext],
) -> TenantSnapshot:
    """
    Derive counts, MRR and display lists from already-fetched records.

    Lists keep the order they were fetched in; MRR is summed in cents and only
    converted when rendered.
    """
    active_engagements = [e for e in engagements if e.engagement.status == "active"]

    return TenantSnapshot(
        tenant_id=tenant_id,
        total_client_count=len(clients),
        active_client_count=sum(1 for c in clients if c.status == "active"),
        prospect_client_count=sum(1 for c in clients if c.status == "prospect"),
        total_engagement_count=len(engagements),
        active_engagement_count=len(active_engagements),
        onboarding_engagement_count=sum(1 for e in engagements if e.engagement.status == "onboarding"),
        mrr_cents=sum(e.engagement.fee for e in active_engagements),
        total_proposal_count=len(proposals),
        pending_proposal_count=sum(1 for p in proposals if p.proposal.status == "sent"),
        total_report_count=len(reports),
        client_lines=_truncated([_client_line(c) for c in clients], MAX_CLIENT_LINES),
        engagement_lines=_truncated([_engagement_line(e) for e in active_engagements], MAX_ENGAGEMENT_LINES),
    )


async def build_tenant_snapshot(repository: AgencyRepository, tenant_id: int) -> TenantSnapshot:
    """
    Load a tenant's records concurrently and summarize them.

    The four reads are independent and joined before returning. If any read
    fails its exception propagates unchanged and the reads still pending are
    cancelled; no partial snapshot is built.
    """
    start_time = time.monotonic()
    reads = [
        asyncio.ensure_future(repository.list_clients(tenant_id)),
        asyncio.ensure_future(repository.list_engagements(tenant_id)),
        asyncio.ensure_future(repository.list_proposals(tenant_id)),
        asyncio.ensure_future(repository.list_reports(tenant_id)),
    ]
    try:
        clients, engagements, proposals, reports = await asyncio.gather(*reads)
    except Exception:
        # gather leaves the sibling reads running after the first failure
        for read in reads:
            read.cancel()
        raise
    snapshot = summarize(tenant_id, clients, engagements, proposals, reports)
    tenant_snapshot_duration.observe(time.monotonic() - start_time)

    logger.debug(
        "Tenant snapshot built",
        extra={
            "tenant_id": tenant_id,
            "clients": snapshot.total_client_count,
            "engagements": snapshot.total_engagement_count,
            "proposals": snapshot.total_proposal_count,
            "reports": snapshot.total_report_count,
        },
    )
    return snapshot
