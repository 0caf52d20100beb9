"""Auth API — registration and login.

Learn: Routes for user authentication:
- POST /register → create an account (no token; the client logs in next)
- POST /login → username/password → signed access token

Both are open routes. Every failure here is a 400: missing fields,
taken username, unknown user, or wrong password.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tasktracker.auth.jwt import create_access_token
from tasktracker.db.engine import get_db
from tasktracker.schemas.auth import Credentials, LoginResponse
from tasktracker.schemas.task import MessageResponse
from tasktracker.services.user_service import UserService

router = APIRouter()


def _user_svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(body: Credentials, svc: UserService = Depends(_user_svc)):
    """Create a new user account."""
    await svc.register(body.username, body.password)
    return MessageResponse(message="User created successfully")


@router.post("/login", response_model=LoginResponse)
async def login(body: Credentials, svc: UserService = Depends(_user_svc)):
    """Login with username and password → access token."""
    user = await svc.authenticate(body.username, body.password)
    return LoginResponse(
        token=create_access_token(str(user.id)),
        username=user.username,
    )
