"""Core module exports."""

from jdiffreport.core.errors import (
    ConfigError,
    ErrorCode,
    ExecutableNotFoundError,
    FetchError,
    InternalError,
    InvalidVersionConstraintError,
    JDiffError,
    MetadataRetrievalError,
    MissingScmConnectionError,
    ProcessExecutionError,
    ProjectError,
)
from jdiffreport.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from jdiffreport.core.progress import spinner, status, task

__all__ = [
    # Errors
    "JDiffError",
    "ErrorCode",
    "ConfigError",
    "ExecutableNotFoundError",
    "FetchError",
    "InternalError",
    "InvalidVersionConstraintError",
    "MetadataRetrievalError",
    "MissingScmConnectionError",
    "ProcessExecutionError",
    "ProjectError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "spinner",
    "status",
    "task",
]
