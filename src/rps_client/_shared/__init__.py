# Area: Shared
"""
Shared utilities.

This package contains:
- Logging configuration
"""

from .logging_config import setup_logging, TerminalFormatter, JSONFormatter

__all__ = ["setup_logging", "TerminalFormatter", "JSONFormatter"]
