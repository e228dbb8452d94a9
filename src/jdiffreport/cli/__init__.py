"""jdiff-report command-line interface."""
