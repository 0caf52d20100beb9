"""Persisted client session — the CLI's stand-in for browser localStorage.

Only the token and username survive between invocations; the view is
derived from them by initial_state().
"""

import json
import os
from pathlib import Path

from tasktracker.client.state import ClientState, initial_state

DEFAULT_SESSION_FILE = Path.home() / ".tasktracker" / "session.json"


def session_path() -> Path:
    return Path(os.environ.get("TASKTRACKER_SESSION_FILE", DEFAULT_SESSION_FILE))


def load_state() -> ClientState:
    path = session_path()
    try:
        data = json.loads(path.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return initial_state()
    return initial_state(token=data.get("token"), username=data.get("username"))


def save_state(state: ClientState) -> None:
    """Write the session, or remove it when logged out."""
    path = session_path()
    if not state.authenticated:
        path.unlink(missing_ok=True)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    # Owner-only from creation; the file holds a bearer token
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    os.fchmod(fd, 0o600)
    with os.fdopen(fd, "w") as f:
        json.dump({"token": state.token, "username": state.username}, f)
