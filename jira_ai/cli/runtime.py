"""Shared helpers for CLI commands: async bridging and error reporting."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine, Iterator
from contextlib import contextmanager
from typing import TypeVar

import typer

from jira_ai.config.manager import ConfigManager, validate_settings
from jira_ai.profiles import ProfileStore, create_profile_store
from jira_ai.utils.console import print_error, print_info
from jira_ai.utils.errors import ExitCode, JiraAiError, UserCancelledError

# Type variable for async helper
T = TypeVar("T")


class AsyncLoopAlreadyRunningError(JiraAiError):
    """Raised when trying to run async code in an existing event loop.

    This occurs in environments like Jupyter notebooks or when already
    running inside an async context.
    """

    _default_exit_code = ExitCode.GENERAL_ERROR


def run_async(coro_factory: Callable[[], Coroutine[None, None, T]]) -> T:
    """Run a coroutine from synchronous CLI code.

    Takes a factory instead of a coroutine object so the running-loop check
    happens before the coroutine exists.

    Args:
        coro_factory: A callable that returns the coroutine to run.
            Example: lambda: store.list()

    Returns:
        The result of the coroutine

    Raises:
        AsyncLoopAlreadyRunningError: If an event loop is already running
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        raise AsyncLoopAlreadyRunningError(
            "Cannot run async operation: an event loop is already running. "
            "Use 'await' directly or run from a synchronous environment."
        )

    return asyncio.run(coro_factory())


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Report application errors and exit with their exit code."""
    try:
        yield
    except UserCancelledError as e:
        print_info(f"\n{e}")
        raise typer.Exit(ExitCode.USER_CANCELLED) from e
    except JiraAiError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code) from e
    except KeyboardInterrupt as e:
        print_info("\nOperation cancelled by user")
        raise typer.Exit(ExitCode.USER_CANCELLED) from e


def load_config() -> ConfigManager:
    """Load and validate configuration.

    Raises:
        ConfigurationError: If a setting is invalid
    """
    config = ConfigManager()
    validate_settings(config.load())
    return config


def open_profile_store(config: ConfigManager) -> ProfileStore:
    return create_profile_store(config.settings)


__all__ = [
    "AsyncLoopAlreadyRunningError",
    "exit_on_error",
    "load_config",
    "open_profile_store",
    "run_async",
]
