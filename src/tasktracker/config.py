"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with the TASKTRACKER_
prefix (or a local .env file). The database URL and the token signing
secret have no defaults: if either is missing, building Settings fails and
the process refuses to start.

Learn: a required field with no default is the simplest way to make a
misconfigured deployment fail loudly at import time instead of running
with an empty secret.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All app configuration. Set via TASKTRACKER_* env vars."""

    # Store
    database_url: str

    # Auth
    secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = Field(default=12, ge=10, le=31)

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS: static allow-list, fixed at startup
    cors_origins: list[str] = ["http://localhost:5173"]
    cors_methods: list[str] = ["GET", "POST", "PUT", "DELETE"]

    model_config = {"env_prefix": "TASKTRACKER_", "env_file": ".env", "extra": "ignore"}

    @field_validator("database_url", "secret_key")
    @classmethod
    def not_blank(cls, value: str, info) -> str:
        if not value or not value.strip():
            raise ValueError(f"TASKTRACKER_{info.field_name.upper()} must not be empty")
        return value


# Singleton, import this everywhere
settings = Settings()
