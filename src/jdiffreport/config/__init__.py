"""Config module exports."""

from jdiffreport.config.loader import JDiffSettings, load_config
from jdiffreport.config.models import (
    JavadocConfig,
    JDiffConfig,
    LoggingConfig,
    ReportConfig,
    RepositoryConfig,
)

__all__ = [
    "load_config",
    "JDiffConfig",
    "JDiffSettings",
    "JavadocConfig",
    "LoggingConfig",
    "ReportConfig",
    "RepositoryConfig",
]
