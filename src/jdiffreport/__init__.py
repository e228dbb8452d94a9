"""jdiff-report - API difference reports between two versions of a Maven project."""

__version__ = "0.1.0"
