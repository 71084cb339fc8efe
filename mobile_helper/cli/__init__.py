"""
mobile-helper CLI Module.

This module provides the command-line interface for managing Android devices.
"""

from .main import cli, main

__all__ = ["cli", "main"]
