"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI options)
2. Environment variables (JDIFF__SECTION__KEY)
3. Project YAML (<project>/.jdiff/config.yaml)
4. Global YAML (~/.config/jdiff-report/config.yaml)
5. Built-in defaults (this file)

Examples:
    JDIFF__LOGGING__LEVEL=DEBUG
    JDIFF__JAVADOC__EXECUTABLE=/opt/jdk-17/bin/javadoc
    JDIFF__REPORT__FORCE_CHECKOUT=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_REMOTE_REPOSITORY = "https://repo.maven.apache.org/maven2"


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        JDIFF__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG also logs every javadoc argument.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class JavadocConfig(BaseModel):
    """Javadoc executable and JDiff doclet settings.

    Env vars:
        JDIFF__JAVADOC__EXECUTABLE: Explicit javadoc path (file or JDK bin directory)
        JDIFF__JAVADOC__JAVA_HOME_ENV: Env var naming the JDK root (default JAVA_HOME)
        JDIFF__JAVADOC__DOCLET_PATH: JSON list of doclet jars
    """

    executable: str | None = Field(
        default=None,
        description="Explicit javadoc executable. A directory gets 'javadoc' appended.",
    )
    toolchain_path: str | None = Field(
        default=None,
        description="Javadoc provided by a JDK toolchain. Ignored when 'executable' is set.",
    )
    java_home: str | None = Field(
        default=None,
        description="Runtime installation root used for the platform default lookup.",
    )
    java_home_env: str = Field(
        default="JAVA_HOME",
        description="Environment variable naming the JDK installation root.",
    )
    doclet: str = Field(default="jdiff.JDiff", description="Doclet class name.")
    doclet_path: list[str] = Field(
        default_factory=list,
        description="Jars holding the doclet (jdiff.jar, xercesImpl.jar).",
    )
    extra_classpath: list[str] = Field(
        default_factory=list,
        description="Classpath entries appended after the build output directory.",
    )


class ReportConfig(BaseModel):
    """Report generation settings.

    Env vars:
        JDIFF__REPORT__COMPARISON_VERSION: Version range to compare against
        JDIFF__REPORT__BASE_VERSION: Right-hand side version
        JDIFF__REPORT__FORCE_CHECKOUT: Re-clone instead of updating
    """

    comparison_version: str | None = Field(
        default=None,
        description="Left-hand side version constraint. Default: (,<project version>).",
    )
    base_version: str | None = Field(
        default=None,
        description="Right-hand side version. Default: the project version.",
    )
    force_checkout: bool = Field(
        default=False,
        description="Delete and re-checkout sources fetched by a previous run.",
    )
    output_directory: str | None = Field(
        default=None,
        description="Report directory. Default: <project>/target/site/<dest_dir>.",
    )
    dest_dir: str = Field(default="apidocs", description="Report destination directory name.")
    working_directory: str | None = Field(
        default=None,
        description="Checkouts and descriptors. Default: <project>/target/jdiff.",
    )
    include_packages: list[str] | None = Field(
        default=None,
        description="Packages to document. Overrides source tree discovery.",
    )
    execution_root: str | None = Field(
        default=None,
        description="Root of a multi-module checkout. Default: the project directory.",
    )
    name: str = Field(default="JDiff", description="Report name.")
    description: str = Field(
        default="Generates an API difference report between two versions of the sources.",
        description="Report description.",
    )

    @field_validator("include_packages", mode="before")
    @classmethod
    def split_packages(cls, v: object) -> object:
        if isinstance(v, str):
            return v.split() or None
        return v


class RepositoryConfig(BaseModel):
    """Maven repositories queried for published versions and POMs.

    Env vars:
        JDIFF__REPOSITORY__LOCAL: Local repository root
        JDIFF__REPOSITORY__REMOTES: JSON list of remote repository URLs
    """

    local: str = Field(default="~/.m2/repository", description="Local repository root.")
    remotes: list[str] = Field(
        default_factory=lambda: [DEFAULT_REMOTE_REPOSITORY],
        description="Remote repository base URLs, queried in order.",
    )
    timeout_sec: float = Field(default=30.0, description="HTTP timeout per request.")

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class JDiffConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    javadoc: JavadocConfig = Field(default_factory=JavadocConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
