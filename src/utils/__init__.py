"""Utility modules for logging and showcase storage."""

from .logger import setup_logger
from .showcase_store import ShowcaseStore

__all__ = ["setup_logger", "ShowcaseStore"]
