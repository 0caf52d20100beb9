"""Client state container — one immutable state, one reducer.

Learn: The browser client kept a handful of loose flags (view, token,
tasks, error) and mutated them from event handlers. Here the same state
is a frozen dataclass, and the only way to change it is
reduce(state, action), which returns a new state. The CLI loads the
state from the saved session, dispatches actions as responses arrive,
and saves whatever comes out.

Views and how you move between them:

  LANDING ──SetView──▶ LOGIN ◀──Registered── REGISTER
     ▲                   │
     │                SetToken
   Logout                ▼
     └────────────── DASHBOARD

DASHBOARD is only reachable with a token; SetView(DASHBOARD) without
one lands on LANDING instead.
"""

import enum
from dataclasses import dataclass, field, replace
from typing import Optional, Union


class View(str, enum.Enum):
    LANDING = "landing"
    LOGIN = "login"
    REGISTER = "register"
    DASHBOARD = "dashboard"


@dataclass(frozen=True)
class ClientState:
    view: View = View.LANDING
    token: Optional[str] = None
    username: Optional[str] = None
    tasks: tuple[dict, ...] = ()
    notice: Optional[str] = None
    error: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.token is not None


def initial_state(token: Optional[str] = None, username: Optional[str] = None) -> ClientState:
    """Start on the dashboard when a saved token exists, else on the landing view."""
    if token:
        return ClientState(view=View.DASHBOARD, token=token, username=username)
    return ClientState()


# ─── Actions ─────────────────────────────────────────────


@dataclass(frozen=True)
class SetView:
    view: View


@dataclass(frozen=True)
class SetToken:
    token: str
    username: str


@dataclass(frozen=True)
class Registered:
    username: str


@dataclass(frozen=True)
class AuthFailed:
    error: str


@dataclass(frozen=True)
class TasksLoaded:
    tasks: list[dict] = field(default_factory=list)


@dataclass(frozen=True)
class TaskAdded:
    task: dict


@dataclass(frozen=True)
class TaskToggled:
    task: dict


@dataclass(frozen=True)
class TaskRemoved:
    task_id: str


@dataclass(frozen=True)
class Logout:
    pass


Action = Union[
    SetView,
    SetToken,
    Registered,
    AuthFailed,
    TasksLoaded,
    TaskAdded,
    TaskToggled,
    TaskRemoved,
    Logout,
]


# ─── Reducer ─────────────────────────────────────────────


def reduce(state: ClientState, action: Action) -> ClientState:
    """Apply one action and return the next state. Never mutates `state`."""
    if isinstance(action, SetView):
        if action.view is View.DASHBOARD and not state.authenticated:
            return replace(state, view=View.LANDING, notice=None, error=None)
        return replace(state, view=action.view, notice=None, error=None)

    if isinstance(action, SetToken):
        return replace(
            state,
            view=View.DASHBOARD,
            token=action.token,
            username=action.username,
            notice=None,
            error=None,
        )

    if isinstance(action, Registered):
        return replace(
            state,
            view=View.LOGIN,
            notice="Account created! Please log in.",
            error=None,
        )

    if isinstance(action, AuthFailed):
        return replace(state, error=action.error or "Authentication failed", notice=None)

    if isinstance(action, TasksLoaded):
        return replace(state, tasks=tuple(action.tasks), error=None)

    if isinstance(action, TaskAdded):
        return replace(state, tasks=state.tasks + (action.task,), error=None)

    if isinstance(action, TaskToggled):
        tasks = tuple(
            action.task if t["id"] == action.task["id"] else t for t in state.tasks
        )
        return replace(state, tasks=tasks, error=None)

    if isinstance(action, TaskRemoved):
        tasks = tuple(t for t in state.tasks if t["id"] != action.task_id)
        return replace(state, tasks=tasks, error=None)

    if isinstance(action, Logout):
        return ClientState()

    raise TypeError(f"Unknown action: {action!r}")
