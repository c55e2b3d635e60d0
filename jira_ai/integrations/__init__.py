"""External service integrations: the Jira issue tracker and AI summary backends."""
