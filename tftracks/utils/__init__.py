#!/usr/bin/env python3
"""
tftracks Utilities
==================

This module contains the shared helpers of the tftracks project:
logging setup, input validation and configuration loading.

Functions:
    LogManager: Singleton class to manage logging configuration.
    log_tag: Build a standardized log prefix.
    ensure_dir_exists: Function to ensure a directory exists.
    ValidationError: Exception raised for invalid inputs.
    TrackConfig: Default parameters read from config.ini.
    load_track_config: Read a TrackConfig from an .ini file.

Variables:
    __all__: List of public functions and variables.
"""

from .common import LogManager, log_tag, ensure_dir_exists
from .validation import ValidationError
from .config import TrackConfig, load_track_config


__all__ = [
    "LogManager",
    "log_tag",
    "ensure_dir_exists",
    "ValidationError",
    "TrackConfig",
    "load_track_config",
]
