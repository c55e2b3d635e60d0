"""Typer application and main entry point for the CLI.

Contains the Typer app, the version callback, and the summarize and serve
commands. Profile commands live in ``jira_ai.cli.profiles``.
"""

from __future__ import annotations

import json
from typing import Annotated

import httpx
import typer
from rich.markdown import Markdown

from jira_ai import SCRIPT_NAME
from jira_ai.cli.profiles import profile_app
from jira_ai.cli.runtime import exit_on_error, load_config, open_profile_store, run_async
from jira_ai.config.manager import ConfigManager
from jira_ai.integrations.backends import create_summary_backend
from jira_ai.integrations.jira import IssueClient
from jira_ai.profiles import ProfileError, ProfileStore
from jira_ai.summary.orchestrator import RunState, SummaryOrchestrator, SummaryRun
from jira_ai.summary.render import render_view_markdown, view_to_dict
from jira_ai.utils.console import console, console_err, print_info, show_version
from jira_ai.utils.logging import setup_logging

# Create Typer app
app = typer.Typer(
    name="jira-ai",
    help=f"{SCRIPT_NAME} - summarize Jira tickets with an AI backend",
    add_completion=False,
    no_args_is_help=True,
)
app.add_typer(profile_app, name="profile")

_STATE_MESSAGES: dict[RunState, str] = {
    RunState.FETCHING_ISSUE: "Fetching issue...",
    RunState.EXTRACTING_TEXT: "Extracting text...",
    RunState.REQUESTING_SUMMARY: "Requesting summary...",
}


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
) -> None:
    """Jira AI Helper - fetch a Jira ticket and summarize it."""
    setup_logging()


async def _resolve_profile_name(store: ProfileStore, profile: str | None) -> str:
    """Pick the profile to use; a single stored profile is the default."""
    if profile:
        return profile
    names = await store.list()
    if len(names) == 1:
        return names[0]
    if not names:
        raise ProfileError("No Jira connections configured. Add one with 'jira-ai profile add'.")
    raise ProfileError(f"Several connections exist ({', '.join(names)}). Choose one with --profile.")


def _report_state(run: SummaryRun) -> None:
    message = _STATE_MESSAGES.get(run.state)
    if message:
        console_err.print(f"[dim]{message}[/dim]")


async def _summarize_async(
    config: ConfigManager,
    issue_key: str,
    profile: str | None,
    quiet: bool,
) -> SummaryRun:
    settings = config.settings
    store = open_profile_store(config)
    profile_name = await _resolve_profile_name(store, profile)

    async with httpx.AsyncClient() as http_client:
        orchestrator = SummaryOrchestrator(
            store,
            IssueClient(
                http_client,
                api_version=settings.jira_api_version,
                timeout_seconds=settings.request_timeout_seconds,
            ),
            create_summary_backend(settings, http_client),
            config.get_or_create_user_id(),
            on_state_change=None if quiet else _report_state,
        )
        return await orchestrator.run(profile_name, issue_key)


@app.command()
def summarize(
    issue_key: Annotated[str, typer.Argument(help="Jira issue key, e.g. PROJ-123")],
    profile: Annotated[
        str | None,
        typer.Option("--profile", "-p", help="Connection profile (default: the only one stored)"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON instead of Markdown"),
    ] = False,
) -> None:
    """Fetch a Jira ticket and print an AI summary of it."""
    with exit_on_error():
        config = load_config()
        run = run_async(lambda: _summarize_async(config, issue_key.strip(), profile, as_json))
        if run.error is not None:
            raise run.error

    if run.view is None:
        raise typer.Exit(1)
    if as_json:
        typer.echo(json.dumps(view_to_dict(run.view), indent=2))
    else:
        console.print(Markdown(render_view_markdown(run.view)))


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Port to listen on")] = 8000,
) -> None:
    """Run the summary proxy (POST /api/generate-summary)."""
    import uvicorn

    from jira_ai.server import create_app

    with exit_on_error():
        config = load_config()
        application = create_app(config.settings)
        print_info(f"Summary proxy listening on http://{host}:{port}")
        uvicorn.run(application, host=host, port=port, log_level="info")


__all__ = ["app", "main", "serve", "summarize"]
