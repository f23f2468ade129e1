"""Utils module -- config, logging."""

from htmlmd.utils.config import settings
from htmlmd.utils.logger import configure_logging, get_logger

__all__ = ["settings", "configure_logging", "get_logger"]
