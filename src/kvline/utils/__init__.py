"""Utility modules for kvline.

Provides:
- logger: get_logger for logging
"""

from kvline.utils.logger import get_logger

__all__ = ["get_logger"]
