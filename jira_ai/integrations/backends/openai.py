"""Chat-completions summary backend (OpenAI-compatible API).

Sends the built prompt to a chat-completions endpoint with a small token
budget and low temperature, since the answer has to be machine-parseable.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx

from jira_ai.config.manager import require_provider_key
from jira_ai.config.settings import DEFAULT_AI_API_URL
from jira_ai.integrations.backends.base import DEFAULT_TIMEOUT_SECONDS, SummaryBackend
from jira_ai.summary.request import SYSTEM_PROMPT, SummaryRequest
from jira_ai.summary.result import SummaryResult, parse_summary_output
from jira_ai.utils.errors import SummaryBackendError


def extract_answer_text(completion: Any) -> str | None:
    """Pull the model answer out of a chat-completions response.

    Reads ``choices[0].message.content``, falling back to the legacy
    ``choices[0].text``.

    Returns:
        The answer ("" when the choice has no text), or None when the
        response has no choices at all
    """
    if not isinstance(completion, dict):
        return None
    choices = completion.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    first = choices[0]
    message = first.get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        content: str = message["content"]
        if content:
            return content
    text = first.get("text")
    return text if isinstance(text, str) else ""


class OpenAIChatBackend(SummaryBackend):
    """Summarize through a chat-completions endpoint.

    The provider key is resolved when summarize() is called, before any
    request is sent, so a missing key is reported as ConfigurationError
    rather than as an upstream 401.
    """

    def __init__(
        self,
        *,
        api_url: str = DEFAULT_AI_API_URL,
        model: str = "gpt-3.5-turbo",
        max_tokens: int = 800,
        temperature: float = 0.2,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        key_resolver: Callable[[], str] = require_provider_key,
    ) -> None:
        super().__init__(http_client=http_client, timeout_seconds=timeout_seconds)
        self.api_url = api_url
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._key_resolver = key_resolver

    @property
    def name(self) -> str:
        return "OpenAI"

    def build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def complete(self, prompt: str) -> str:
        """Send one prompt and return the model's raw answer text.

        Raises:
            ConfigurationError: If no provider key is configured
            SummaryBackendError: On upstream failure or an unreadable envelope
        """
        api_key = self._key_resolver()
        response = await self._post_json(
            self.api_url,
            self.build_payload(prompt),
            headers={"Authorization": f"Bearer {api_key}"},
        )
        try:
            completion = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SummaryBackendError(
                "Summary backend returned a response that is not valid JSON",
                status=response.status_code,
                body=response.text,
            ) from e

        answer = extract_answer_text(completion)
        if answer is None:
            raise SummaryBackendError(
                "Summary backend response has no choices",
                status=response.status_code,
                body=response.text,
            )
        return answer

    async def summarize(self, request: SummaryRequest) -> SummaryResult:
        return parse_summary_output(await self.complete(request.prompt))


__all__ = ["OpenAIChatBackend", "extract_answer_text"]
