"""Error types, classification and the operation fault boundary for MCP Git Tools."""

import functools
import inspect
import logging
import time
from collections import Counter
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from .types import OperationResponse

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[OperationResponse]])


class GitToolError(Exception):
    """Base class for faults raised inside MCP Git Tools."""


class NotAGitRepositoryError(GitToolError):
    """The target path was required to be a repository but is not."""

    def __init__(self, path: str):
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class GitProviderError(GitToolError):
    """A provider primitive failed; the message is git's own error text."""

    def __init__(self, message: str, command: Optional[list[str]] = None):
        super().__init__(message)
        self.command = command or []


class UnknownToolError(GitToolError):
    """The dispatcher received a tool name with no registered operation."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ErrorSeverity(Enum):
    """Classification of error severity levels."""

    CRITICAL = "critical"  # Server must terminate
    HIGH = "high"  # Operation cannot proceed as requested
    MEDIUM = "medium"  # Git refused the operation
    LOW = "low"  # Caller mistake, safe to ignore


class ErrorContext:
    """Context information about an error for reporting."""

    def __init__(
        self,
        error: Exception,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        operation: str = "",
        recoverable: bool = True,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.error = error
        self.severity = severity
        self.operation = operation
        self.recoverable = recoverable
        self.metadata = metadata or {}
        self.error_time = time.time()


def classify_error(error: Exception, operation: str = "") -> ErrorContext:
    """
    Classify an error and create an appropriate ErrorContext.

    Args:
        error: The exception that occurred
        operation: The operation during which the error occurred

    Returns:
        ErrorContext with severity and recoverability settings
    """
    if isinstance(error, (SystemExit, KeyboardInterrupt, MemoryError)):
        return ErrorContext(
            error=error,
            severity=ErrorSeverity.CRITICAL,
            operation=operation,
            recoverable=False,
        )

    if isinstance(error, (NotAGitRepositoryError, PermissionError, FileNotFoundError)):
        return ErrorContext(
            error=error,
            severity=ErrorSeverity.HIGH,
            operation=operation,
            recoverable=False,
        )

    if isinstance(error, GitProviderError):
        return ErrorContext(
            error=error,
            severity=ErrorSeverity.MEDIUM,
            operation=operation,
            recoverable=True,
            metadata={"command": error.command},
        )

    if isinstance(error, (UnknownToolError, ValueError)):
        return ErrorContext(
            error=error,
            severity=ErrorSeverity.LOW,
            operation=operation,
            recoverable=True,
        )

    return ErrorContext(
        error=error,
        severity=ErrorSeverity.MEDIUM,
        operation=operation,
        recoverable=True,
    )


# Fault counts across all operations, keyed by exception type, severity and tool
_error_stats: Dict[str, Counter] = {}


def _empty_stats() -> Dict[str, Counter]:
    return {
        "by_type": Counter(),
        "by_severity": Counter({severity.value: 0 for severity in ErrorSeverity}),
        "by_tool": Counter(),
    }


def record_error_metric(context: ErrorContext) -> None:
    """Count one classified fault."""
    _error_stats["by_type"][type(context.error).__name__] += 1
    _error_stats["by_severity"][context.severity.value] += 1
    if context.operation:
        _error_stats["by_tool"][context.operation] += 1


def get_error_stats() -> Dict[str, Any]:
    """Snapshot of the fault counts; the returned dicts are copies."""
    return {
        "total_errors": sum(_error_stats["by_type"].values()),
        "errors_by_type": dict(_error_stats["by_type"]),
        "errors_by_severity": dict(_error_stats["by_severity"]),
        "errors_by_tool": dict(_error_stats["by_tool"]),
    }


def reset_error_stats() -> None:
    """Clear all fault counts."""
    _error_stats.clear()
    _error_stats.update(_empty_stats())


reset_error_stats()


def operation_boundary(action: str) -> Callable[[F], F]:
    """Convert any fault raised by an operation into a failure envelope.

    ``action`` completes the sentence "Failed to ..." and may reference the
    operation's arguments by name, e.g. ``"abort {operation}"``. Faults are
    logged and counted but never re-raised and never retried.
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> OperationResponse:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                bound = signature.bind_partial(*args, **kwargs)
                bound.apply_defaults()
                label = action.format(**bound.arguments)

                context = classify_error(e, operation=func.__name__)
                record_error_metric(context)
                logger.warning(
                    f"{func.__name__} failed ({context.severity.value}): {e}"
                )
                return OperationResponse.failure(f"Failed to {label}: {e}")

        return wrapper  # type: ignore[return-value]

    return decorator
