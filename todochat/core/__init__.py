"""
Core module - Configuration and cross-cutting concerns.

This module provides:
- config.py         : Environment-based configuration management
- logging_config.py : Centralized logging setup
- exceptions.py     : Application exception hierarchy
"""
from todochat.core.config import get_settings, reset_settings, Settings
from todochat.core.logging_config import setup_logging, get_logger

__all__ = [
    "get_settings",
    "reset_settings",
    "Settings",
    "setup_logging",
    "get_logger",
]
