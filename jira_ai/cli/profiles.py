"""``jira-ai profile`` commands: manage stored Jira connections."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from jira_ai.cli.runtime import exit_on_error, load_config, open_profile_store, run_async
from jira_ai.profiles import ConnectionProfile
from jira_ai.utils.console import console, print_info, print_success, print_warning

profile_app = typer.Typer(
    name="profile",
    help="Manage Jira connection profiles",
    no_args_is_help=True,
)


def _validate_url(url: str) -> str:
    """Normalize a Jira base URL.

    Raises:
        typer.BadParameter: If the URL is not http(s)
    """
    url = url.strip()
    if not url.startswith(("https://", "http://")):
        raise typer.BadParameter(f"Jira URL must start with https:// (got '{url}')")
    return url.rstrip("/")


def _prompt_token() -> str:
    return str(typer.prompt("Jira API token", hide_input=True)).strip()


@profile_app.command("add")
def add_profile(
    name: Annotated[str, typer.Argument(help="Profile name (e.g. 'work')")],
    url: Annotated[
        str,
        typer.Option("--url", help="Jira base URL, e.g. https://your-company.atlassian.net"),
    ],
    email: Annotated[str, typer.Option("--email", help="Jira account email")],
    token: Annotated[
        str | None,
        typer.Option("--token", help="Jira API token (prompted with hidden input if omitted)"),
    ] = None,
) -> None:
    """Add a Jira connection profile."""
    if not name.strip():
        raise typer.BadParameter("Profile name must not be empty")
    base_url = _validate_url(url)
    with exit_on_error():
        api_token = token if token else _prompt_token()
        if not api_token:
            raise typer.BadParameter("API token must not be empty")
        profile = ConnectionProfile(
            name=name.strip(), base_url=base_url, email=email.strip(), api_token=api_token
        )
        store = open_profile_store(load_config())
        run_async(lambda: store.add(profile))
    print_success(f"Connection '{profile.name}' saved.")


@profile_app.command("update")
def update_profile(
    name: Annotated[str, typer.Argument(help="Profile name")],
    url: Annotated[str | None, typer.Option("--url", help="New Jira base URL")] = None,
    email: Annotated[str | None, typer.Option("--email", help="New account email")] = None,
    token: Annotated[str | None, typer.Option("--token", help="New API token")] = None,
    prompt_token: Annotated[
        bool,
        typer.Option("--prompt-token", help="Prompt for a new API token with hidden input"),
    ] = False,
) -> None:
    """Change the URL, email or token of an existing profile."""
    if url is None and email is None and token is None and not prompt_token:
        raise typer.BadParameter("Nothing to update: pass --url, --email, --token or --prompt-token")
    new_url = _validate_url(url) if url is not None else None

    with exit_on_error():
        store = open_profile_store(load_config())
        current = run_async(lambda: store.require(name))
        new_token = token if token else (_prompt_token() if prompt_token else current.api_token)
        updated = ConnectionProfile(
            name=current.name,
            base_url=new_url or current.base_url,
            email=email.strip() if email else current.email,
            api_token=new_token or current.api_token,
        )
        run_async(lambda: store.update(updated))
    print_success(f"Connection '{name}' updated.")


@profile_app.command("list")
def list_profiles() -> None:
    """List stored profiles (tokens are never shown)."""
    with exit_on_error():
        store = open_profile_store(load_config())

        async def _load() -> list[ConnectionProfile]:
            profiles = []
            for profile_name in await store.list():
                profile = await store.get(profile_name)
                if profile is not None:
                    profiles.append(profile)
            return profiles

        profiles = run_async(_load)

    if not profiles:
        print_info("No Jira connections configured. Add one with 'jira-ai profile add'.")
        return

    table = Table(title="Jira connections")
    table.add_column("Name", style="bold")
    table.add_column("URL")
    table.add_column("Email")
    for profile in profiles:
        table.add_row(profile.name, profile.base_url, profile.email)
    console.print(table)


@profile_app.command("delete")
def delete_profile(
    name: Annotated[str, typer.Argument(help="Profile name")],
) -> None:
    """Delete a stored profile and its credentials."""
    with exit_on_error():
        store = open_profile_store(load_config())
        if name not in run_async(store.list):
            print_warning(f"Connection '{name}' does not exist.")
            return
        run_async(lambda: store.delete(name))
    print_success(f"Deleted connection '{name}'.")


__all__ = ["profile_app"]
