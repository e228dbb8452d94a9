"""Locate the javadoc executable.

Resolution order:
1. Explicit override (or a toolchain-provided path when no override is set)
2. Platform-specific offset from the Java runtime installation root
3. ``bin/`` under the directory named by the JAVA_HOME-style environment variable
"""

from __future__ import annotations

import os
import platform
import shutil
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path

import structlog

from jdiffreport.core.errors import ExecutableNotFoundError

log = structlog.get_logger(__name__)

JAVADOC = "javadoc"


class OsFamily(StrEnum):
    """Operating systems with distinct JDK layouts."""

    AIX = "aix"
    MACOS = "macos"
    WINDOWS = "windows"
    OTHER = "other"


def detect_os_family() -> OsFamily:
    """Detect the current operating system family."""
    system = platform.system().lower()
    if system == "aix":
        return OsFamily.AIX
    if system == "darwin":
        return OsFamily.MACOS
    if system == "windows":
        return OsFamily.WINDOWS
    return OsFamily.OTHER


def javadoc_command(os_family: OsFamily) -> str:
    return JAVADOC + (".exe" if os_family is OsFamily.WINDOWS else "")


def detect_java_home() -> Path | None:
    """Installation root of the ``java`` runtime found on PATH, if any."""
    java = shutil.which("java")
    if not java:
        return None
    return Path(java).resolve().parent.parent


def runtime_candidates(java_home: Path, os_family: OsFamily) -> list[Path]:
    """Candidate javadoc paths relative to a runtime installation root.

    java.home traditionally points at the JRE inside a JDK, so the tools live
    one level up. IBM's AIX JDK keeps them in ``sh``; macOS JDKs keep them
    directly in ``bin``. JDK 9+ has no nested JRE, so ``bin`` is tried last.
    """
    command = javadoc_command(os_family)
    if os_family is OsFamily.AIX:
        return [java_home / ".." / "sh" / command]
    if os_family is OsFamily.MACOS:
        return [java_home / "bin" / command]
    return [java_home / ".." / "bin" / command, java_home / "bin" / command]


def _resolve_override(path: str, os_family: OsFamily) -> Path:
    exe = Path(path).expanduser()
    if exe.is_dir():
        exe = exe / javadoc_command(os_family)
    if os_family is OsFamily.WINDOWS and "." not in exe.name:
        exe = exe.with_name(exe.name + ".exe")
    if not exe.is_file():
        raise ExecutableNotFoundError.invalid_override(str(exe))
    return exe.resolve()


def locate_javadoc(
    explicit: str | None = None,
    *,
    toolchain_path: str | None = None,
    java_home: str | Path | None = None,
    java_home_env: str = "JAVA_HOME",
    environ: Mapping[str, str] | None = None,
    os_family: OsFamily | None = None,
) -> Path:
    """Return the absolute path of the javadoc executable.

    Args:
        explicit: User-supplied executable path or JDK ``bin`` directory.
        toolchain_path: Javadoc path provided by a JDK toolchain.
        java_home: Runtime installation root. Detected from ``java`` on PATH if None.
        java_home_env: Environment variable naming the JDK root.
        environ: Environment mapping (defaults to ``os.environ``).
        os_family: Platform override (defaults to the running platform).

    Raises:
        ExecutableNotFoundError: With a code telling which strategy failed last.
    """
    os_family = os_family or detect_os_family()
    environ = os.environ if environ is None else environ

    if toolchain_path:
        log.info("javadoc_toolchain", path=toolchain_path)
        if explicit:
            log.warning("javadoc_toolchain_ignored", executable=explicit)
        else:
            explicit = toolchain_path

    if explicit:
        exe = _resolve_override(explicit, os_family)
        log.debug("javadoc_located", path=str(exe), strategy="override")
        return exe

    home = Path(java_home) if java_home is not None else detect_java_home()
    if home is not None:
        for candidate in runtime_candidates(home, os_family):
            if candidate.is_file():
                exe = candidate.resolve()
                log.debug("javadoc_located", path=str(exe), strategy="java_home")
                return exe

    env_home = environ.get(java_home_env, "")
    if not env_home:
        raise ExecutableNotFoundError.env_not_set(java_home_env)
    if not Path(env_home).is_dir():
        raise ExecutableNotFoundError.env_invalid(java_home_env, env_home)

    exe = Path(env_home) / "bin" / javadoc_command(os_family)
    if not exe.is_file():
        raise ExecutableNotFoundError.not_found_under_env(str(exe), java_home_env)

    exe = exe.resolve()
    log.debug("javadoc_located", path=str(exe), strategy="env")
    return exe
