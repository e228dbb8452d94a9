"""jdiff-report error types with typed error codes.

Error code ranges:
- 1xxx: Executable lookup
- 2xxx: Config / project model
- 3xxx: Versions
- 4xxx: Source control
- 5xxx: External process
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Executable lookup (1xxx)
    EXECUTABLE_OVERRIDE_INVALID = 1001
    EXECUTABLE_ENV_NOT_SET = 1002
    EXECUTABLE_ENV_INVALID = 1003
    EXECUTABLE_NOT_FOUND = 1004

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    PROJECT_INVALID_POM = 2005

    # Versions (3xxx)
    VERSION_INVALID_CONSTRAINT = 3001
    VERSION_METADATA_RETRIEVAL = 3002
    VERSION_POM_NOT_FOUND = 3003

    # Source control (4xxx)
    SCM_CONNECTION_MISSING = 4001
    SCM_CHECKOUT_FAILED = 4002
    SCM_UPDATE_FAILED = 4003
    SCM_UNSUPPORTED_PROVIDER = 4004

    # External process (5xxx)
    PROCESS_LAUNCH_FAILED = 5001
    PROCESS_NON_ZERO_EXIT = 5002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True)
class JDiffError(Exception):
    """Base error with structured context for CLI and JSON output.

    Not slotted, so ``__traceback__`` stays assignable when the error leaves
    a ``contextmanager`` block. Raise subclasses, not this class.
    """

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SCM_CONNECTION_MISSING')."""
        return self.code.name

    @property
    def cause(self) -> BaseException | None:
        """Underlying exception this error was raised from, if any."""
        return self.__cause__

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        result: dict[str, Any] = {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ExecutableNotFoundError(JDiffError):
    """The javadoc executable could not be located."""

    @classmethod
    def invalid_override(cls, path: str) -> "ExecutableNotFoundError":
        return cls(
            code=ErrorCode.EXECUTABLE_OVERRIDE_INVALID,
            message=f"The javadoc executable '{path}' doesn't exist or is not a file. "
            "Verify the javadoc executable setting.",
            details={"path": path},
        )

    @classmethod
    def env_not_set(cls, env_var: str) -> "ExecutableNotFoundError":
        return cls(
            code=ErrorCode.EXECUTABLE_ENV_NOT_SET,
            message=f"The environment variable {env_var} is not correctly set.",
            details={"env_var": env_var},
        )

    @classmethod
    def env_invalid(cls, env_var: str, value: str) -> "ExecutableNotFoundError":
        return cls(
            code=ErrorCode.EXECUTABLE_ENV_INVALID,
            message=f"The environment variable {env_var}={value} doesn't exist "
            "or is not a valid directory.",
            details={"env_var": env_var, "value": value},
        )

    @classmethod
    def not_found_under_env(cls, path: str, env_var: str) -> "ExecutableNotFoundError":
        return cls(
            code=ErrorCode.EXECUTABLE_NOT_FOUND,
            message=f"The javadoc executable '{path}' doesn't exist or is not a file. "
            f"Verify the {env_var} environment variable.",
            details={"path": path, "env_var": env_var},
        )


class ConfigError(JDiffError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ProjectError(JDiffError):
    """A project descriptor (pom.xml) could not be read."""

    @classmethod
    def invalid_pom(cls, path: str, reason: str) -> "ProjectError":
        return cls(
            code=ErrorCode.PROJECT_INVALID_POM,
            message=f"Unable to read project descriptor {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InvalidVersionConstraintError(JDiffError):
    """A version range expression is malformed."""

    @classmethod
    def malformed(cls, spec: str, reason: str) -> "InvalidVersionConstraintError":
        return cls(
            code=ErrorCode.VERSION_INVALID_CONSTRAINT,
            message=f"Invalid comparison version: {reason}",
            details={"spec": spec, "reason": reason},
        )


class MetadataRetrievalError(JDiffError):
    """Published versions or a POM could not be read from a repository."""

    @classmethod
    def lookup_failed(cls, coordinates: str, reason: str) -> "MetadataRetrievalError":
        return cls(
            code=ErrorCode.VERSION_METADATA_RETRIEVAL,
            message=f"Error determining previous version of {coordinates}: {reason}",
            retryable=True,
            details={"coordinates": coordinates, "reason": reason},
        )

    @classmethod
    def pom_not_found(cls, coordinates: str, version: str) -> "MetadataRetrievalError":
        return cls(
            code=ErrorCode.VERSION_POM_NOT_FOUND,
            message=f"No project descriptor found for {coordinates}:{version}",
            details={"coordinates": coordinates, "version": version},
        )


class MissingScmConnectionError(JDiffError):
    """The project declares no source-control location."""

    @classmethod
    def for_project(cls, project_id: str) -> "MissingScmConnectionError":
        return cls(
            code=ErrorCode.SCM_CONNECTION_MISSING,
            message=f"SCM connection is not set in the pom.xml of {project_id}.",
            details={"project": project_id},
        )


class FetchError(JDiffError):
    """Checkout or update against source control failed."""

    @classmethod
    def checkout_failed(cls, url: str, directory: str, reason: str) -> "FetchError":
        return cls(
            code=ErrorCode.SCM_CHECKOUT_FAILED,
            message=f"Checkout of {url} into {directory} failed: {reason}",
            retryable=True,
            details={"url": url, "directory": directory, "reason": reason},
        )

    @classmethod
    def update_failed(cls, url: str, directory: str, reason: str) -> "FetchError":
        return cls(
            code=ErrorCode.SCM_UPDATE_FAILED,
            message=f"Update of {directory} from {url} failed: {reason}",
            retryable=True,
            details={"url": url, "directory": directory, "reason": reason},
        )

    @classmethod
    def unsupported_provider(cls, connection: str, provider: str) -> "FetchError":
        return cls(
            code=ErrorCode.SCM_UNSUPPORTED_PROVIDER,
            message=f"Unsupported SCM provider '{provider}' in connection {connection}",
            details={"connection": connection, "provider": provider},
        )


class ProcessExecutionError(JDiffError):
    """The external tool could not be started or exited non-zero."""

    @classmethod
    def launch_failed(cls, executable: str, reason: str) -> "ProcessExecutionError":
        return cls(
            code=ErrorCode.PROCESS_LAUNCH_FAILED,
            message=f"Unable to run {executable}: {reason}",
            details={"executable": executable, "reason": reason},
        )

    @classmethod
    def non_zero_exit(
        cls, executable: str, exit_code: int, stderr: str = ""
    ) -> "ProcessExecutionError":
        return cls(
            code=ErrorCode.PROCESS_NON_ZERO_EXIT,
            message=f"{executable} exited with code {exit_code}",
            details={"executable": executable, "exit_code": exit_code, "stderr": stderr},
        )


class InternalError(JDiffError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
