"""Configuration management for the JSON:API Gateway."""

import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import cast

from dotenv import load_dotenv
import structlog


DEFAULT_JSONAPI_FUNCTION = "jsonapi"

# Plain or schema-qualified SQL identifier, e.g. "jsonapi" or "public.jsonapi"
SQL_FUNCTION_NAME_REGEX = re.compile(
    r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)?$"
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    app_env: str
    database_url: str
    db_pool_min: int
    db_pool_max: int
    jsonapi_function: str
    jsonapi_user_id: str
    jsonapi_company_id: str
    request_max_bytes: int
    backend_host: str
    backend_port: int


def load_settings() -> Settings:
    """
    Load settings from environment variables.

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If required environment variables are missing or invalid
    """
    load_dotenv()

    app_env = os.getenv("APP_ENV", "development").strip().lower()

    min_pool_size = 1
    try:
        backend_port = int(os.getenv("BACKEND_PORT", "8000"))
    except ValueError as exc:
        raise ValueError(
            "BACKEND_PORT must be a valid integer. Check your .env file."
        ) from exc
    try:
        db_pool_min = int(os.getenv("DB_POOL_MIN", str(min_pool_size)))
        db_pool_max = int(os.getenv("DB_POOL_MAX", "10"))
        request_max_bytes = int(os.getenv("REQUEST_MAX_BYTES", "1048576"))
    except ValueError as exc:
        raise ValueError(
            "DB_POOL_MIN, DB_POOL_MAX and REQUEST_MAX_BYTES "
            "must be valid integers. Check your .env file."
        ) from exc
    if db_pool_min < min_pool_size or db_pool_max < db_pool_min:
        raise ValueError(
            "DB_POOL_MIN must be >= 1 and DB_POOL_MAX must be >= DB_POOL_MIN."
        )
    if request_max_bytes < 1:
        raise ValueError("REQUEST_MAX_BYTES must be >= 1.")

    jsonapi_function = os.getenv("JSONAPI_FUNCTION", DEFAULT_JSONAPI_FUNCTION).strip()
    if not SQL_FUNCTION_NAME_REGEX.fullmatch(jsonapi_function):
        raise ValueError(
            "JSONAPI_FUNCTION must be a SQL identifier, optionally schema-qualified "
            f"(got {jsonapi_function!r})."
        )

    required = ["DATABASE_URL"]
    values = {key: os.getenv(key) for key in required}
    missing = [key for key, value in values.items() if not value]
    if missing:
        missing_list = ", ".join(sorted(missing))
        raise ValueError(
            "Missing required environment variables: "
            f"{missing_list}. Copy .env.example to .env and fill values."
        )

    database_url = cast(str, values["DATABASE_URL"])
    if not database_url.startswith(("postgres://", "postgresql://")):
        logger.warning("database_url_unexpected_scheme", env=app_env)

    return Settings(
        app_env=app_env,
        database_url=database_url,
        db_pool_min=db_pool_min,
        db_pool_max=db_pool_max,
        jsonapi_function=jsonapi_function,
        jsonapi_user_id=os.getenv("JSONAPI_USER_ID", ""),
        jsonapi_company_id=os.getenv("JSONAPI_COMPANY_ID", ""),
        request_max_bytes=request_max_bytes,
        backend_host=os.getenv("BACKEND_HOST", "0.0.0.0"),
        backend_port=backend_port,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once
    from environment variables.

    Returns:
        Cached Settings instance
    """
    return load_settings()
