"""Prompt builder for the agency AI tasks."""

from datetime import date
from typing import List, Optional, Sequence

from agency_ai.models.agency import TenantSnapshot
from agency_ai.models.generation import ClientProfile, EngagementTerms
from agency_ai.models.message import ConversationTurn, PromptMessage


MAX_HISTORY_MESSAGES = 10

PROPOSAL_SECTIONS = [
    "Executive Summary",
    "Understanding Your Needs",
    "Our Approach & Methodology",
    "Scope of Work & Deliverables",
    "Timeline & Milestones",
    "Investment & Terms",
    "Why Choose Us",
    "Next Steps",
]

PROPOSAL_SYSTEM_PROMPT = """You are an expert business proposal writer for a digital agency.
Your task is to create professional, persuasive, and well-structured proposals that win clients.
Use a professional yet approachable tone. Focus on value, outcomes, and clear deliverables."""

REPORT_SYSTEM_PROMPT = """You are an expert client success manager for a digital agency.
Your task is to create clear, honest, and actionable client reports that build trust and demonstrate value.
Be specific, data-driven, and proactive in identifying risks and opportunities."""

ONBOARDING_SYSTEM_PROMPT = """You are an expert project manager for a digital agency.
Generate a practical onboarding checklist for new client engagements."""

REPORT_INSTRUCTIONS = """Please provide:

1. **SUMMARY** (2-3 paragraphs):
   - Overview of work completed this period
   - Key achievements and milestones
   - Overall progress assessment

2. **RISKS & CONCERNS** (bullet points):
   - Any blockers or challenges
   - Resource constraints
   - Timeline concerns
   - Budget considerations
   - If none, state "No significant risks identified at this time"

3. **NEXT STEPS** (bullet points):
   - Specific actions planned for next period
   - Upcoming milestones
   - Client action items (if any)
   - Timeline for deliverables

Be honest, specific, and actionable. Focus on value delivered and clear next steps."""

COPILOT_ROLE_INSTRUCTIONS = """Your role:
- Answer questions about their business metrics, clients, and engagements
- Provide insights and recommendations
- Help them prioritize work and identify opportunities
- Be concise, helpful, and data-driven
- Use markdown formatting for better readability
- When showing lists or data, use tables or bullet points

If the user asks about specific clients or engagements, reference the data above.
If you don't have enough information to answer accurately, say so and suggest what data would help."""


def format_fee(cents: int) -> str:
    """
    Format an amount in cents as major units with thousands grouping.

    Only the fraction digits the value actually has are shown:
    500000 -> "5,000", 123450 -> "1,234.5", 123456 -> "1,234.56".
    """
    sign = "-" if cents < 0 else ""
    whole, fraction = divmod(abs(cents), 100)
    text = f"{sign}{whole:,}"
    if fraction:
        text += "." + f"{fraction:02d}".rstrip("0")
    return text


def format_date(value: date) -> str:
    """US short date without zero padding, e.g. 1/5/2025."""
    return f"{value.month}/{value.day}/{value.year}"


def _blocks(*blocks: Optional[str]) -> str:
    # Absent blocks are dropped rather than left as blank lines
    return "\n\n".join(block for block in blocks if block)


def _lines(*lines: Optional[str]) -> str:
    return "\n".join(line for line in lines if line)


def build_proposal_messages(
    client: ClientProfile,
    title: str,
    brief: Optional[str] = None,
    service_tier: Optional[str] = None,
    fee_cents: Optional[int] = None,
) -> List[PromptMessage]:
    """Build the transcript for drafting a proposal."""
    client_block = _lines(
        "**Client Information:**",
        f"- Company: {client.name}",
        f"- Industry: {client.industry}" if client.industry else None,
        f"- Website: {client.website}" if client.website else None,
    )
    terms_block = _lines(
        f"**Service Tier:** {service_tier}" if service_tier else None,
        f"**Proposed Investment:** ${format_fee(fee_cents)}/month" if fee_cents else None,
    )
    outline = "\n".join(
        f"{number}. {section}" for number, section in enumerate(PROPOSAL_SECTIONS, start=1)
    )

    user_prompt = _blocks(
        "Create a comprehensive business proposal with the following details:",
        f"**Proposal Title:** {title}",
        client_block,
        terms_block,
        f"**Project Brief:**\n{brief}" if brief else None,
        f"Please structure the proposal with the following sections:\n{outline}",
        "Make it compelling, specific to the client's industry, and focused on delivering measurable value.",
    )

    return [
        PromptMessage(role="system", content=PROPOSAL_SYSTEM_PROMPT),
        PromptMessage(role="user", content=user_prompt),
    ]


def build_report_messages(
    client: ClientProfile,
    engagement: EngagementTerms,
    recent_activity: Optional[Sequence[str]] = None,
    completed_tasks: Optional[Sequence[str]] = None,
) -> List[PromptMessage]:
    """Build the transcript for drafting a client report."""
    client_block = _lines(
        f"**Client:** {client.name}",
        f"**Industry:** {client.industry}" if client.industry else None,
    )
    engagement_block = _lines(
        "**Engagement Details:**",
        f"- Service Tier: {engagement.service_tier}",
        f"- Monthly Investment: ${format_fee(engagement.fee_cents)}",
        f"- Start Date: {format_date(engagement.start_date)}",
    )
    tasks_block = None
    if completed_tasks:
        tasks_block = "**Completed Tasks:**\n" + "\n".join(f"- {task}" for task in completed_tasks)
    activity_block = None
    if recent_activity:
        activity_block = "**Recent Activity:**\n" + "\n".join(recent_activity)

    user_prompt = _blocks(
        "Create a comprehensive client report with the following context:",
        client_block,
        engagement_block,
        tasks_block,
        activity_block,
        REPORT_INSTRUCTIONS,
    )

    return [
        PromptMessage(role="system", content=REPORT_SYSTEM_PROMPT),
        PromptMessage(role="user", content=user_prompt),
    ]


def build_onboarding_messages(
    service_tier: str,
    client_industry: Optional[str] = None,
) -> List[PromptMessage]:
    """Build the transcript asking for a JSON array of onboarding tasks."""
    user_prompt = _blocks(
        _lines(
            "Generate 5-7 specific onboarding tasks for a new client engagement:",
            f"- Service Tier: {service_tier}",
            f"- Client Industry: {client_industry}" if client_industry else None,
        ),
        _lines(
            "Return ONLY a JSON array of task strings, no other text.",
            'Example: ["Task 1", "Task 2", "Task 3"]',
        ),
    )

    return [
        PromptMessage(role="system", content=ONBOARDING_SYSTEM_PROMPT),
        PromptMessage(role="user", content=user_prompt),
    ]


def render_agency_context(snapshot: TenantSnapshot) -> str:
    """Render the copilot system prompt from a tenant snapshot."""
    clients_block = _lines(
        f"**Clients:** {snapshot.total_client_count} total ({snapshot.active_client_count} active)",
        *snapshot.client_lines,
    )
    engagements_block = _lines(
        f"**Engagements:** {snapshot.total_engagement_count} total ({snapshot.active_engagement_count} active)",
        f"**Monthly Recurring Revenue (MRR):** ${format_fee(snapshot.mrr_cents)}",
        *snapshot.engagement_lines,
    )

    return _blocks(
        "You are an AI assistant for Smart Agency OS, helping agency owners manage their business.",
        "You have access to the following data about the user's agency:",
        clients_block,
        engagements_block,
        f"**Proposals:** {snapshot.total_proposal_count} total ({snapshot.pending_proposal_count} pending)",
        f"**Reports:** {snapshot.total_report_count} total",
        f"**Engagements in Onboarding:** {snapshot.onboarding_engagement_count}",
        COPILOT_ROLE_INSTRUCTIONS,
    )


def build_copilot_messages(
    snapshot: TenantSnapshot,
    message: str,
    conversation_history: Optional[Sequence[ConversationTurn]] = None,
) -> List[PromptMessage]:
    """
    Build the copilot transcript.

    Order (strict):
    1. Agency context (system)
    2. The most recent MAX_HISTORY_MESSAGES prior turns, in original order
    3. Current user message (user)
    """
    messages = [PromptMessage(role="system", content=render_agency_context(snapshot))]

    history = list(conversation_history or [])
    if len(history) > MAX_HISTORY_MESSAGES:
        history = history[-MAX_HISTORY_MESSAGES:]
    for turn in history:
        messages.append(PromptMessage(role=turn.role, content=turn.content))

    messages.append(PromptMessage(role="user", content=message))
    return messages
