"""Meet roster management for high school swim coaches."""

__version__ = "0.1.0"

from swimroster.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
