"""Summary results returned by AI backends.

A summary is one of two variants:

- StructuredSummary: the model returned the requested JSON object
- RawSummary: the model returned something else; the text is kept as-is

A model answer that is not valid JSON is an expected outcome, not an
error, so parse_summary_output never raises.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# One optional ```json ... ``` fence around the whole answer
_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n(?P<body>.*?)\n?```$", re.DOTALL)


@dataclass(frozen=True)
class StructuredSummary:
    """Machine-readable summary.

    Attributes:
        one_line_summary: One sentence describing the ticket
        tasks: Short actionable tasks
        final_comment: Text suitable for posting as a Jira comment
    """

    one_line_summary: str = ""
    tasks: tuple[str, ...] = field(default_factory=tuple)
    final_comment: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "one_line_summary": self.one_line_summary,
            "tasks": list(self.tasks),
            "final_comment": self.final_comment,
        }


@dataclass(frozen=True)
class RawSummary:
    """Model output that could not be read as a StructuredSummary.

    Attributes:
        raw_text: The unparsed model output
    """

    raw_text: str

    def to_dict(self) -> dict[str, Any]:
        return {"raw": self.raw_text}


SummaryResult = StructuredSummary | RawSummary


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value) if isinstance(value, dict | list) else str(value)


def _as_tasks(value: Any) -> tuple[str, ...]:
    if isinstance(value, list | tuple):
        return tuple(_as_text(item) for item in value if item is not None)
    if isinstance(value, str) and value:
        return (value,)
    return ()


def structured_from_mapping(data: Mapping[str, Any]) -> StructuredSummary:
    """Build a StructuredSummary from a decoded JSON object.

    Missing keys default to empty values; non-string entries are coerced
    to strings so consumers always get the declared types.
    """
    return StructuredSummary(
        one_line_summary=_as_text(data.get("one_line_summary")),
        tasks=_as_tasks(data.get("tasks")),
        final_comment=_as_text(data.get("final_comment")),
    )


def parse_summary_output(text: str) -> SummaryResult:
    """Interpret a model answer as a summary.

    Args:
        text: Raw model output

    Returns:
        StructuredSummary if the text (optionally wrapped in one Markdown
        code fence) decodes to a JSON object, RawSummary wrapping the exact
        original text otherwise
    """
    candidate = text.strip()
    fenced = _CODE_FENCE.match(candidate)
    if fenced:
        candidate = fenced.group("body").strip()

    try:
        decoded = json.loads(candidate)
    except (json.JSONDecodeError, RecursionError):
        return RawSummary(raw_text=text)

    if not isinstance(decoded, dict):
        return RawSummary(raw_text=text)
    return structured_from_mapping(decoded)


def summary_from_payload(payload: Any) -> SummaryResult | None:
    """Read a summary from the proxy's JSON shape.

    The proxy answers ``{"raw": "..."}`` for unparsed output and the three
    structured keys otherwise.

    Returns:
        The summary, or None if the payload is not an object
    """
    if not isinstance(payload, dict):
        return None
    if "raw" in payload and not {"one_line_summary", "tasks", "final_comment"} & payload.keys():
        return RawSummary(raw_text=_as_text(payload["raw"]))
    return structured_from_mapping(payload)


__all__ = [
    "RawSummary",
    "StructuredSummary",
    "SummaryResult",
    "parse_summary_output",
    "structured_from_mapping",
    "summary_from_payload",
]
