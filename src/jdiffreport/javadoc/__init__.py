"""Javadoc executable lookup and invocation."""

from jdiffreport.javadoc.executor import (
    ExecutionResult,
    JavadocExecutor,
    ToolInvocation,
    quote_and_escape,
    run_invocation,
)
from jdiffreport.javadoc.locator import OsFamily, detect_os_family, locate_javadoc

__all__ = [
    "ExecutionResult",
    "JavadocExecutor",
    "OsFamily",
    "ToolInvocation",
    "detect_os_family",
    "locate_javadoc",
    "quote_and_escape",
    "run_invocation",
]
