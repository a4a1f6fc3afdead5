"""
Utilities module for Android Toolbox Manager.
"""
from .analytics import log_event, get_summary, clear_analytics
from .log import configure_logging, get_logger

__all__ = ["log_event", "get_summary", "clear_analytics", "configure_logging", "get_logger"]
