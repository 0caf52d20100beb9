"""Task API routes.

Learn: These routes are the HTTP interface to TaskService. The caller's
identity always comes from the access guard (get_current_user), never
from the request, and is passed as owner_id into every service call.

- GET    /tasks       → the caller's tasks
- POST   /tasks       → create (starts incomplete)
- PUT    /tasks/{id}  → toggle completion (not idempotent: it flips)
- DELETE /tasks/{id}  → delete permanently
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tasktracker.auth.dependencies import CurrentIdentity, get_current_user
from tasktracker.db.engine import get_db
from tasktracker.schemas.task import MessageResponse, TaskCreate, TaskRead
from tasktracker.services.task_service import TaskService, parse_task_id

router = APIRouter()


def _task_svc(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


@router.get("/tasks", response_model=list[TaskRead])
async def list_tasks(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """List the caller's tasks."""
    return await svc.list_tasks(identity.user_id)


@router.post("/tasks", response_model=TaskRead, status_code=201)
async def create_task(
    body: TaskCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Create a new, incomplete task."""
    return await svc.create_task(identity.user_id, body.title)


@router.put("/tasks/{task_id}", response_model=TaskRead)
async def toggle_task(
    task_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Flip a task between complete and incomplete.

    Learn: task_id is taken as a plain string so a malformed id gets the
    same 404 as a missing one instead of a validation error.
    """
    return await svc.toggle_task(identity.user_id, parse_task_id(task_id))


@router.delete("/tasks/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Delete a task."""
    await svc.delete_task(identity.user_id, parse_task_id(task_id))
    return MessageResponse(message="Task deleted successfully")
