"""
Terminal UI Module - Textual-based TUI
=====================================

This module provides a terminal chat interface using Textual.
"""

from .app import ElizaChatApp, run_tui

__all__ = [
    "ElizaChatApp",
    "run_tui",
]
