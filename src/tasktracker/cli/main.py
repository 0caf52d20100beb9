"""TaskTracker CLI — run the server, migrate the database, manage your tasks.

Usage:
    tasktracker serve                      # Run the API under uvicorn
    tasktracker migrate                    # Apply database migrations
    tasktracker register alice             # Create an account (prompts for password)
    tasktracker login alice                # Log in and remember the token
    tasktracker tasks                      # List your tasks
    tasktracker add "buy milk"             # Add a task
    tasktracker toggle <task-id>           # Mark done / not done
    tasktracker rm <task-id>               # Delete a task
    tasktracker status                     # Who am I, which view
    tasktracker logout                     # Forget the token

Server commands read TASKTRACKER_* settings; client commands talk to
TASKTRACKER_API_URL and keep the session in TASKTRACKER_SESSION_FILE.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys
from typing import Awaitable, Callable, TypeVar

import click
import httpx

from tasktracker import __version__
from tasktracker.client.api import ApiError, TaskTrackerClient, api_url
from tasktracker.client.session import load_state, save_state
from tasktracker.client.state import (
    AuthFailed,
    ClientState,
    Logout,
    Registered,
    SetToken,
    SetView,
    TaskAdded,
    TaskRemoved,
    TasksLoaded,
    TaskToggled,
    View,
    reduce,
)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the TaskTracker API."""
    return httpx.AsyncClient(base_url=api_url(), timeout=30.0)


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def _require_login(state: ClientState) -> None:
    if not state.authenticated:
        _fail("not logged in (run `tasktracker login USERNAME`)")


async def _call(token: str | None, fn: Callable[[TaskTrackerClient], Awaitable[T]]) -> T:
    async with _client() as http:
        try:
            return await fn(TaskTrackerClient(http, token=token))
        except httpx.TransportError as e:
            raise ApiError(0, f"cannot reach {api_url()} ({e.__class__.__name__})")


def _api(state: ClientState, fn: Callable[[TaskTrackerClient], Awaitable[T]]) -> T:
    """Run one authenticated API call. A 401 logs the user out, like the web client."""
    try:
        return _run(_call(state.token, fn))
    except ApiError as e:
        if e.status_code == 401:
            save_state(reduce(state, Logout()))
            _fail(f"{e.message}. You have been logged out, please log in again")
        _fail(e.message)


def _print_tasks(tasks: list[dict] | tuple[dict, ...]) -> None:
    if not tasks:
        click.echo("No tasks yet. Add one with `tasktracker add TITLE`.")
        return
    for task in tasks:
        mark = click.style("[x]", fg="green") if task["isCompleted"] else "[ ]"
        click.echo(f"{mark} {task['id']}  {task['title']}")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="tasktracker")
def main():
    """TaskTracker — a personal to-do list with token-based auth."""


# ---------------------------------------------------------------------------
# Server commands
# ---------------------------------------------------------------------------


def _load_settings():
    """Validate configuration, exiting with a message instead of a traceback."""
    from pydantic import ValidationError
    from tasktracker.config import Settings

    try:
        return Settings()
    except ValidationError as e:
        missing = ", ".join(
            f"TASKTRACKER_{str(err['loc'][0]).upper()}" for err in e.errors() if err["loc"]
        )
        _fail(f"invalid or missing configuration: {missing}")


@main.command()
@click.option("--host", default=None, help="Bind address (default: TASKTRACKER_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: TASKTRACKER_PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the API server."""
    import uvicorn

    cfg = _load_settings()
    uvicorn.run(
        "tasktracker.main:app",
        host=host or cfg.host,
        port=port or cfg.port,
        reload=reload,
    )


@main.command()
@click.option("--revision", default="head", show_default=True, help="Target revision")
def migrate(revision: str):
    """Apply database migrations."""
    from tasktracker.db.migrate import upgrade

    cfg = _load_settings()
    upgrade(cfg.database_url, revision)
    click.secho(f"Database migrated to {revision}", fg="green")


# ---------------------------------------------------------------------------
# Account commands
# ---------------------------------------------------------------------------


@main.command()
@click.argument("username")
@click.password_option()
def register(username: str, password: str):
    """Create an account. Log in afterwards to get a token."""
    state = reduce(load_state(), SetView(View.REGISTER))
    try:
        _run(_call(None, lambda c: c.register(username, password)))
    except ApiError as e:
        state = reduce(state, AuthFailed(e.message))
        _fail(state.error)
    state = reduce(state, Registered(username))
    click.secho(state.notice, fg="green")


@main.command()
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True)
def login(username: str, password: str):
    """Log in and remember the access token."""
    state = reduce(load_state(), SetView(View.LOGIN))
    try:
        data = _run(_call(None, lambda c: c.login(username, password)))
    except ApiError as e:
        state = reduce(state, AuthFailed(e.message))
        _fail(state.error)
    state = reduce(state, SetToken(token=data["token"], username=data["username"]))
    save_state(state)
    click.secho(f"Logged in as {state.username}", fg="green")


@main.command()
def logout():
    """Forget the saved token."""
    save_state(reduce(load_state(), Logout()))
    click.echo("Logged out")


@main.command()
def status():
    """Show the current view and user."""
    state = load_state()
    click.echo(f"View: {state.view.value}")
    if state.authenticated:
        click.echo(f"User: {state.username}")
    click.echo(f"API:  {api_url()}")


# ---------------------------------------------------------------------------
# Task commands
# ---------------------------------------------------------------------------


@main.command()
def tasks():
    """List your tasks."""
    state = load_state()
    _require_login(state)
    state = reduce(state, TasksLoaded(_api(state, lambda c: c.list_tasks())))
    _print_tasks(state.tasks)


@main.command()
@click.argument("title")
def add(title: str):
    """Add a task."""
    state = load_state()
    _require_login(state)
    if not title.strip():
        _fail("title must not be empty")
    state = reduce(state, TaskAdded(_api(state, lambda c: c.add_task(title))))
    _print_tasks(state.tasks[-1:])


@main.command()
@click.argument("task_id")
def toggle(task_id: str):
    """Flip a task between done and not done."""
    state = load_state()
    _require_login(state)
    state = reduce(state, TasksLoaded(_api(state, lambda c: c.list_tasks())))
    state = reduce(state, TaskToggled(_api(state, lambda c: c.toggle_task(task_id))))
    _print_tasks(state.tasks)


@main.command()
@click.argument("task_id")
def rm(task_id: str):
    """Delete a task."""
    state = load_state()
    _require_login(state)
    state = reduce(state, TasksLoaded(_api(state, lambda c: c.list_tasks())))
    click.echo(_api(state, lambda c: c.delete_task(task_id)))
    state = reduce(state, TaskRemoved(task_id))
    _print_tasks(state.tasks)


if __name__ == "__main__":
    main()
