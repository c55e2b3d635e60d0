"""Summary run orchestration.

This module provides:
- RunState: Enum of the states a summary run moves through
- SummaryView: Dataclass composed for a finished run
- SummaryRun: Dataclass tracking one run (state, history, outcome)
- SummaryOrchestrator: Drives fetch -> extract -> summarize for one issue
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from jira_ai.integrations.backends.base import SummaryBackend
from jira_ai.integrations.jira.adf import extract_text
from jira_ai.integrations.jira.client import IssueClient
from jira_ai.integrations.jira.models import IssueRecord
from jira_ai.profiles.base import ProfileStore
from jira_ai.summary.request import build_summary_request
from jira_ai.summary.result import SummaryResult
from jira_ai.utils.errors import JiraAiError
from jira_ai.utils.logging import log_message

logger = logging.getLogger(__name__)


class RunState(Enum):
    """States of a summary run, in the only order they may be entered."""

    IDLE = "idle"
    FETCHING_ISSUE = "fetching_issue"
    EXTRACTING_TEXT = "extracting_text"
    REQUESTING_SUMMARY = "requesting_summary"
    DONE = "done"
    FAILED = "failed"


_STATE_ORDER: tuple[RunState, ...] = tuple(RunState)
TERMINAL_STATES = frozenset({RunState.DONE, RunState.FAILED})


@dataclass(frozen=True)
class SummaryView:
    """Everything needed to display a finished run.

    Attributes:
        issue: Normalized issue
        description_text: Description flattened to plain text
        summary: Backend result (structured or raw)
    """

    issue: IssueRecord
    description_text: str
    summary: SummaryResult


@dataclass
class SummaryRun:
    """Record of one summary run.

    Attributes:
        profile_name: Profile used for the tracker request
        issue_key: Requested issue key
        state: Current state
        history: Every state entered, starting with IDLE
        issue: Fetched issue, kept once the fetch succeeded
        view: Composed result, set only in DONE
        error: Failure, set only in FAILED
        start_time: Unix timestamp when the run was created
        end_time: Unix timestamp when a terminal state was entered
    """

    profile_name: str
    issue_key: str
    state: RunState = RunState.IDLE
    history: list[RunState] = field(default_factory=lambda: [RunState.IDLE])
    issue: IssueRecord | None = None
    view: SummaryView | None = None
    error: JiraAiError | None = None
    start_time: float = field(default_factory=time.time)
    end_time: float | None = None

    @property
    def is_finished(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def succeeded(self) -> bool:
        return self.state is RunState.DONE

    @property
    def duration(self) -> float | None:
        if self.end_time is None:
            return None
        return self.end_time - self.start_time

    def advance(self, new_state: RunState) -> None:
        """Enter a later state.

        Raises:
            ValueError: If the run is finished or new_state is not after
                the current state
        """
        if self.is_finished or _STATE_ORDER.index(new_state) <= _STATE_ORDER.index(self.state):
            raise ValueError(f"Invalid run transition {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)
        if new_state in TERMINAL_STATES:
            self.end_time = time.time()


# Type alias for state change callback functions
StateChangeCallback = Callable[[SummaryRun], None]


class SummaryOrchestrator:
    """Runs the fetch -> extract -> summarize pipeline for one issue at a time.

    The orchestrator holds no per-run state, so concurrent run() calls are
    independent. A JiraAiError in any stage ends the run in FAILED and
    later stages are not entered; any other exception propagates.
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        issue_client: IssueClient,
        backend: SummaryBackend,
        requesting_user: str,
        on_state_change: StateChangeCallback | None = None,
    ) -> None:
        self._profile_store = profile_store
        self._issue_client = issue_client
        self._backend = backend
        self._requesting_user = requesting_user
        self._on_state_change = on_state_change

    def _transition(self, run: SummaryRun, new_state: RunState) -> None:
        run.advance(new_state)
        logger.debug("Run %s: %s", run.issue_key, new_state.value)
        if self._on_state_change is not None:
            self._on_state_change(run)

    async def run(self, profile_name: str, issue_key: str) -> SummaryRun:
        """Summarize one issue.

        Args:
            profile_name: Stored profile to fetch the issue with
            issue_key: Issue key (e.g., "PROJ-123")

        Returns:
            The run, in DONE (view set) or FAILED (error set)

        Raises:
            asyncio.CancelledError: If the awaiting task is cancelled; the
                partially fetched issue is discarded
        """
        run = SummaryRun(profile_name=profile_name, issue_key=issue_key)
        log_message(f"Summary run started: {issue_key} (profile {profile_name})")

        try:
            profile = await self._profile_store.require(profile_name)

            self._transition(run, RunState.FETCHING_ISSUE)
            run.issue = await self._issue_client.fetch_for_profile(profile, issue_key)

            self._transition(run, RunState.EXTRACTING_TEXT)
            description_text = extract_text(run.issue.description)
            request = build_summary_request(
                issue_key, profile, run.issue, description_text, self._requesting_user
            )

            self._transition(run, RunState.REQUESTING_SUMMARY)
            summary = await self._backend.summarize(request)
        except JiraAiError as e:
            run.error = e
            self._transition(run, RunState.FAILED)
            log_message(
                f"Summary run failed: {issue_key}: {type(e).__name__} after {run.duration:.2f}s"
            )
            return run
        except asyncio.CancelledError:
            run.issue = None
            log_message(f"Summary run cancelled: {issue_key}")
            raise

        run.view = SummaryView(issue=run.issue, description_text=description_text, summary=summary)
        self._transition(run, RunState.DONE)
        log_message(f"Summary run finished: {issue_key} in {run.duration:.2f}s")
        return run


__all__ = [
    "RunState",
    "StateChangeCallback",
    "SummaryOrchestrator",
    "SummaryRun",
    "SummaryView",
    "TERMINAL_STATES",
]
