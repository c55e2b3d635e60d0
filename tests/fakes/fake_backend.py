"""Reusable FakeSummaryBackend for orchestrator and CLI tests.

Returns pre-configured results (or raises pre-configured errors) in order
and records every request, so tests can assert on what the orchestrator
sent without any HTTP.
"""

from __future__ import annotations

from jira_ai.integrations.backends.base import SummaryBackend
from jira_ai.summary.request import SummaryRequest
from jira_ai.summary.result import SummaryResult


class FakeSummaryBackend(SummaryBackend):
    """Fake SummaryBackend that returns pre-configured outcomes in order.

    By default, raises ``IndexError`` when all outcomes have been consumed.
    This catches tests that make more calls than expected.

    Attributes:
        requests: Every SummaryRequest received, in order
    """

    def __init__(self, outcomes: list[SummaryResult | Exception], name: str = "Fake") -> None:
        super().__init__()
        self._outcomes = outcomes
        self._name = name
        self.requests: list[SummaryRequest] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def summarize(self, request: SummaryRequest) -> SummaryResult:
        if self.call_count >= len(self._outcomes):
            raise IndexError(
                f"FakeSummaryBackend exhausted: {self.call_count} calls made "
                f"but only {len(self._outcomes)} outcomes configured"
            )
        outcome = self._outcomes[self.call_count]
        self.requests.append(request)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome
