"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts against a local SQLite file without any setup.  Tests
and embedding applications may construct their own ``Settings``
instance and pass it to ``create_app``.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Travel Agency API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # All client and trip routes are mounted below this prefix.
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # Path or connection string for the SQLite database.  Relative paths
    # are resolved against the project root by the ``db`` module; values
    # starting with ``file:`` are passed to SQLite as URIs.
    database_url: str = os.getenv("DATABASE_URL", "travel_agency.db")

    # Seconds a connection waits on a locked database before giving up.
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "5.0"))

    # Create the Client/Trip/Country tables on startup if they are
    # missing.  Intended for local development only.
    create_schema: bool = _env_flag("CREATE_SCHEMA", "false")

    # Run the enrollment checks and insert inside a single write
    # transaction.  When disabled, concurrent enrollments for the same
    # trip may overshoot ``MaxPeople``.
    atomic_registration: bool = _env_flag("ATOMIC_REGISTRATION", "true")

    # Include the underlying error message in 500 responses.  Disable in
    # production.
    expose_error_details: bool = _env_flag("EXPOSE_ERROR_DETAILS", "true")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
