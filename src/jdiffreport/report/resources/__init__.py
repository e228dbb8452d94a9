"""Static files copied next to generated reports."""
