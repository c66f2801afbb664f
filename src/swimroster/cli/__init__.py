"""Command-line interface for swimroster."""
