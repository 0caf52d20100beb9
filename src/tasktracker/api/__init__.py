"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter, so every route in the tasks router is guarded
even if a handler forgot to ask for the identity. FastAPI caches the
dependency per request, so handlers that do ask for it don't verify
the token twice. Health and auth routers are open.
"""

from fastapi import APIRouter, Depends

from tasktracker.api.auth import router as auth_router
from tasktracker.api.health import router as health_router
from tasktracker.api.tasks import router as tasks_router
from tasktracker.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter()

# Open routes: no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes: require a valid token
api_router.include_router(tasks_router, tags=["tasks"], dependencies=_auth)
