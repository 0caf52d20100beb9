"""Pydantic schemas for registration and login."""

from typing import Optional

from pydantic import BaseModel


class Credentials(BaseModel):
    """Body of POST /register and POST /login.

    Both fields are optional at the schema level; emptiness is checked by
    the handlers so a missing field and an empty one get the same 400.
    """

    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    username: str
