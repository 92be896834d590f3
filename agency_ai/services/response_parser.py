"""Recover structured fields from freeform model text."""

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from agency_ai.models.generation import ReportSections


SUMMARY_UNAVAILABLE = "Summary not available"
DEFAULT_RISKS = "No significant risks identified at this time"
DEFAULT_NEXT_STEPS = "Next steps to be determined"

DEFAULT_ONBOARDING_TASKS = [
    "Kickoff meeting scheduled",
    "Access credentials provided",
    "Brand assets collected",
    "Project goals documented",
    "Communication channels set up",
]

REPORT_FIELDS = ("summary", "risks", "next_steps")

_EMPHASIS = r"(?:\*\*|__|\*|_)?"


def _heading(keyword: str) -> "re.Pattern[str]":
    # Emphasis may wrap the keyword, the colon, or both: "**Risks:**", "**Risks**:".
    # Closing markup must touch the heading so a "* item" bullet below it is kept.
    # A heading starts a line and ends with a colon or the end of that line.
    return re.compile(
        rf"^[ \t]*(?:#{{1,6}}[ \t]*)?(?:\d+[.)][ \t]*)?{_EMPHASIS}[ \t]*{keyword}{_EMPHASIS}[ \t]*"
        rf"(?::{_EMPHASIS}|(?=[ \t\r]*$))",
        re.IGNORECASE | re.MULTILINE,
    )


REPORT_HEADINGS: Dict[str, "re.Pattern[str]"] = {
    "summary": _heading(r"SUMMARY"),
    "risks": _heading(r"RISKS?\s*(?:&|AND)?\s*CONCERNS?"),
    "next_steps": _heading(r"NEXT\s*STEPS?"),
}


class ParseStatus(str, Enum):
    FULLY_PARSED = "fully_parsed"
    PARTIALLY_PARSED = "partially_parsed"
    UNPARSED = "unparsed"


@dataclass
class SectionParse:
    """Outcome of segmenting report text by its headings."""
    status: ParseStatus
    found: Dict[str, str] = field(default_factory=dict)

    @property
    def missing(self) -> List[str]:
        return [name for name in REPORT_FIELDS if name not in self.found]


def parse_report_sections(text: str) -> SectionParse:
    """
    Split report text into its SUMMARY / RISKS & CONCERNS / NEXT STEPS sections.

    Each heading is located by its first case-insensitive match at the start
    of a line, so the same words inside a sentence ("we agreed on next steps")
    do not split a section. A section runs from the end of its heading to the start of the
    next heading found, or to the end of the text. Wording the model invents
    (e.g. "Action Items") is not a heading, so its content stays attached to
    the preceding section.
    """
    matches = []
    for name, pattern in REPORT_HEADINGS.items():
        match = pattern.search(text or "")
        if match:
            matches.append((match.start(), match.end(), name))
    matches.sort()

    found: Dict[str, str] = {}
    for index, (_, body_start, name) in enumerate(matches):
        body_end = matches[index + 1][0] if index + 1 < len(matches) else len(text)
        # A later heading matched inside this heading's own text
        body_end = max(body_end, body_start)
        found[name] = text[body_start:body_end].strip()

    if len(found) == len(REPORT_FIELDS):
        status = ParseStatus.FULLY_PARSED
    elif found:
        status = ParseStatus.PARTIALLY_PARSED
    else:
        status = ParseStatus.UNPARSED
    return SectionParse(status=status, found=found)


def fallback_summary(text: str) -> str:
    """Text before the first blank line, or SUMMARY_UNAVAILABLE if there is none."""
    if not text or "\n\n" not in text:
        return SUMMARY_UNAVAILABLE
    first_block = text.split("\n\n", 1)[0].strip()
    return first_block or SUMMARY_UNAVAILABLE


def apply_report_fallbacks(text: str, parsed: SectionParse) -> ReportSections:
    """Fill every field the parse did not find with its fixed default."""
    return ReportSections(
        summary=parsed.found["summary"] if "summary" in parsed.found else fallback_summary(text),
        risks=parsed.found.get("risks", DEFAULT_RISKS),
        next_steps=parsed.found.get("next_steps", DEFAULT_NEXT_STEPS),
    )


def parse_onboarding_tasks(text: Optional[str]) -> Optional[List[Any]]:
    """
    Parse the model's JSON array of tasks.

    Returns None when the text is not valid JSON or not an array. Element
    types are not checked.
    """
    if not text:
        return None
    try:
        tasks = json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None
    if not isinstance(tasks, list):
        return None
    return tasks
