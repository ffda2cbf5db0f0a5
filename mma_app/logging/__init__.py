"""
Logging configuration and utilities for the market microstructure analytics package.
"""
from .config import configure_logging, get_analytics_logger, get_logger

__all__ = ["configure_logging", "get_logger", "get_analytics_logger"]
