"""
Core Module - Foundation components for ELIZA Responder
=======================================================

This module provides the foundational components including:
- Configuration management
- Logging setup
- Exception handling
"""

from .config import Config, load_config
from .exceptions import (
    ElizaError,
    ConfigError,
    RuleSetError,
    EmptyTemplateListError,
    PatternError,
)
from .logging import setup_logging, get_logger

__all__ = [
    "Config",
    "load_config",
    "ElizaError",
    "ConfigError",
    "RuleSetError",
    "EmptyTemplateListError",
    "PatternError",
    "setup_logging",
    "get_logger",
]
