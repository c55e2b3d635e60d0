"""Command-line interface for Jira AI Helper."""

from jira_ai.cli.app import app, main

__all__ = ["app", "main"]
