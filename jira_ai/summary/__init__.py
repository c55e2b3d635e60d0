"""Summary request composition, results and orchestration.

The orchestrator and renderer are imported from their own modules
(``jira_ai.summary.orchestrator``, ``jira_ai.summary.render``); they depend
on the backends package, which itself imports from here.
"""

from jira_ai.summary.request import (
    SummaryRequest,
    build_prompt,
    build_summary_request,
    render_comments,
)
from jira_ai.summary.result import (
    RawSummary,
    StructuredSummary,
    SummaryResult,
    parse_summary_output,
    summary_from_payload,
)

__all__ = [
    "RawSummary",
    "StructuredSummary",
    "SummaryRequest",
    "SummaryResult",
    "build_prompt",
    "build_summary_request",
    "parse_summary_output",
    "render_comments",
    "summary_from_payload",
]
