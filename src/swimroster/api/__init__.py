"""HTTP API for swimroster."""
