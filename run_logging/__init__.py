"""Structured event logging for boarding sequence runs."""

from .run_logger import RunLogger, create_logger

__all__ = ["RunLogger", "create_logger"]
