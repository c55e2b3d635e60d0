"""Jira AI Helper - fetch a Jira ticket and summarize it with an AI backend.

This package provides a small client/server pipeline: connection profiles,
a Jira REST client, rich-text flattening, and summarization through either
a chat-completions provider or the bundled summary proxy.
"""

__version__ = "0.1.0"
SCRIPT_NAME = "Jira AI Helper"

__all__ = [
    "__version__",
    "SCRIPT_NAME",
]
