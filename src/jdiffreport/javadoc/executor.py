"""Build and run javadoc invocations.

Arguments are positional for javadoc: flags and their values are kept in the
exact order they were appended. The tokens are handed to javadoc through an
argument file (``javadoc @file``), which is where javadoc honours quoting, so
values with spaces survive as single tokens.
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from jdiffreport.core.errors import ProcessExecutionError

log = structlog.get_logger(__name__)

ARGFILE_NAME = "javadoc.args"

# Characters that force a value to be quoted
_QUOTING_TRIGGERS = frozenset(" \t\n\r")


def quote_and_escape(value: str, quote: str = "'") -> str:
    """Quote ``value`` when it holds whitespace or the quote character.

    Already-quoted values are returned unchanged. Embedded quote characters
    and backslashes are escaped with a backslash.
    """
    if len(value) >= 2 and value[0] == quote and value[-1] == quote:
        return value
    if not any(c in _QUOTING_TRIGGERS or c == quote for c in value):
        return value
    escaped = value.replace("\\", "\\\\").replace(quote, "\\" + quote)
    return f"{quote}{escaped}{quote}"


@dataclass(frozen=True, slots=True)
class ToolInvocation:
    """One child-process run: executable, ordered tokens, working directory."""

    executable: str
    arguments: tuple[str, ...]
    working_dir: Path

    @property
    def command(self) -> list[str]:
        return [self.executable, *self.arguments]


@dataclass
class ExecutionResult:
    """Outcome of a successful javadoc run."""

    invocation: ToolInvocation
    exit_code: int
    stdout: str
    stderr: str


@dataclass
class JavadocExecutor:
    """Accumulates javadoc arguments in order and runs them."""

    executable: str | Path
    _arguments: list[str] = field(default_factory=list)

    @property
    def arguments(self) -> list[str]:
        return list(self._arguments)

    def add_argument(self, token: str) -> JavadocExecutor:
        """Append a single token (a flag or a package name)."""
        self._arguments.append(token)
        return self

    def add_argument_pair(self, key: str, value: str) -> JavadocExecutor:
        """Append a flag followed by its value, as two tokens."""
        self._arguments.append(key)
        self._arguments.append(value)
        return self

    def add_arguments(self, tokens: Iterable[str]) -> JavadocExecutor:
        self._arguments.extend(tokens)
        return self

    def build(self, working_dir: Path) -> ToolInvocation:
        return ToolInvocation(str(self.executable), tuple(self._arguments), working_dir)

    def execute(self, working_dir: Path) -> ExecutionResult:
        """Run javadoc in ``working_dir``.

        Raises:
            ProcessExecutionError: If javadoc cannot be started or exits non-zero.
        """
        invocation = self.build(working_dir)
        return run_invocation(invocation)


def write_argfile(path: Path, arguments: Sequence[str]) -> Path:
    """Write one argument per line."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(arguments) + "\n", encoding="utf-8")
    return path


def run_invocation(invocation: ToolInvocation) -> ExecutionResult:
    """Run an invocation through an argument file and forward its output to the log."""
    try:
        argfile = write_argfile(invocation.working_dir / ARGFILE_NAME, invocation.arguments)
    except OSError as e:
        raise ProcessExecutionError.launch_failed(
            invocation.executable, f"cannot write argument file: {e}"
        ) from e
    cmd = [invocation.executable, f"@{argfile}"]

    log.debug(
        "javadoc_execute",
        command=cmd,
        arguments=list(invocation.arguments),
        cwd=str(invocation.working_dir),
    )

    try:
        result = subprocess.run(
            cmd,
            cwd=str(invocation.working_dir),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise ProcessExecutionError.launch_failed(invocation.executable, str(e)) from e

    for line in result.stdout.splitlines():
        log.info("javadoc_output", line=line)
    for line in result.stderr.splitlines():
        log.warning("javadoc_output", line=line, stream="stderr")

    if result.returncode != 0:
        raise ProcessExecutionError.non_zero_exit(
            invocation.executable, result.returncode, result.stderr.strip()
        )

    return ExecutionResult(invocation, result.returncode, result.stdout, result.stderr)
