"""Test fakes for Jira AI Helper."""

from tests.fakes.fake_backend import FakeSummaryBackend

__all__ = ["FakeSummaryBackend"]
