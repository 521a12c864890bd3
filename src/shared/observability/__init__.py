"""Observability module for structured logging."""

from .logging import (
    RequestContextManager,
    get_logger,
    log_database_query,
    project_id_var,
    request_id_var,
    setup_logging,
    user_id_var,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Context
    "RequestContextManager",
    "request_id_var",
    "user_id_var",
    "project_id_var",
    # Logging helpers
    "log_database_query",
]
