"""Utilities: logging factory and environment configuration."""

from src.utils.config import Settings, load_settings
from src.utils.logging_utils import get_logger

__all__ = ["Settings", "load_settings", "get_logger"]
