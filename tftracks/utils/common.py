#!/usr/bin/env python3
"""
Common Utilities
================

This module contains the logging setup shared by every tftracks module.
It includes the "LogManager" singleton that configures the root logger once
per session, the "CustomFormatter" used by its handlers, and the "log_tag"
helper that builds grep-friendly message prefixes.

Classes:
    LogManager: A Singleton class to manage logging configuration.
    CustomFormatter: A class for formatting log messages.

Functions:
    log_tag: Return a standardized tag like "[TRACK-LINK ]" with 5-char codes.
    ensure_dir_exists: Ensure a directory exists, creating it if necessary.
"""

import os
import sys
import logging
import atexit
from pathlib import Path
from datetime import datetime

_VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _resolve_level(level, default=logging.WARNING) -> int:
    if isinstance(level, str) and level.upper() in _VALID_LEVELS:
        return getattr(logging, level.upper())
    return default


class LogManager:
    """
    A Singleton class to manage logging configuration for the application.
    It ensures that logging is configured only once per session.

    The root logger receives two handlers: a console handler at the requested
    level and a DEBUG file handler writing to ``<log_dir>/<date>_<script>.log``.
    The log directory defaults to ``logs`` and can be moved with the
    ``TFTRACKS_LOG_DIR`` environment variable. Setting it to an empty string
    disables the file handler.

    Args:
        level(str): The console log level to configure.

    Attributes:
        _instance(cls): The singleton instance of the LogManager class.
        _configured(bool): A flag to indicate if the logging has been configured.
        _current_level(str): The current console log level.
        log_file(Path | None): The file receiving DEBUG output, if any.

    Examples:
        ```python
        from tftracks.utils.common import LogManager

        LogManager(level="INFO")     # Configure logging on first call
        LogManager()                 # Later calls return the same instance

        logger = LogManager().get_logger("tftracks.analysis", "DEBUG")
        ```
    """

    _instance = None

    def __new__(cls, *args, **kwargs):
        if not cls._instance:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, level=None):
        # __init__ runs on every call; setup is guarded by '_configured'.
        # Calls without a level leave the current level untouched.
        if getattr(self, "_configured", False):
            if level is not None and self._current_level != level:
                self._update_log_level(level)
            return

        level = level or "WARNING"

        self.log_file = None
        self._setup_logging(level)
        self._configured = True
        self._current_level = level

    def _log_shutdown(self):
        """Function registered with atexit to log a shutdown message."""
        logging.info(f"{log_tag('LOGS','SHUTD')} Logging ended")

    def _setup_logging(self, level):
        """
        Configures the root logger. This method is called only once.

        Args:
            level(str): The console log level to configure.
        """
        log_level = _resolve_level(level)

        try:
            if hasattr(sys.modules["__main__"], "__file__"):
                script_name = Path(sys.modules["__main__"].__file__).stem
            else:
                script_name = "interactive"

            root_logger = logging.getLogger()
            root_logger.setLevel(logging.DEBUG)

            if root_logger.hasHandlers():
                root_logger.handlers.clear()

            log_dir_name = os.getenv("TFTRACKS_LOG_DIR", "logs")
            if log_dir_name:
                log_dir = ensure_dir_exists(log_dir_name)
                date_str = datetime.now().strftime("%y%m%d_%H%M%S")
                self.log_file = log_dir / f"{date_str}_{script_name}.log"

                file_handler = logging.FileHandler(
                    self.log_file, mode="a", encoding="utf-8"
                )
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(
                    CustomFormatter("%(asctime)s | %(name)s | %(levelname)s | %(message)s")
                )
                root_logger.addHandler(file_handler)

            console_handler = logging.StreamHandler()
            console_handler.setLevel(log_level)
            console_handler.setFormatter(CustomFormatter("%(levelname)s | %(message)s"))
            root_logger.addHandler(console_handler)

            logging.info(f"{log_tag('LOGS','START')} Logging started")
            if self.log_file is not None:
                logging.info(
                    f"{log_tag('LOGS','START')} Logs for this execution are saved to: {self.log_file}"
                )

            atexit.register(self._log_shutdown)

        except OSError:
            logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
            logging.error(
                f"{log_tag('LOGS','INIT')} Failed to configure file logging",
                exc_info=True,
            )

    def _update_log_level(self, new_level):
        """
        Update the console handler level after the initial setup.

        Args:
            new_level(str): The new log level to set.
        """
        log_level = _resolve_level(new_level)

        for handler in logging.getLogger().handlers:
            if (
                isinstance(handler, logging.StreamHandler)
                and not isinstance(handler, logging.FileHandler)
                and isinstance(handler.formatter, CustomFormatter)
            ):
                handler.setLevel(log_level)
                break

        self._current_level = new_level
        logging.debug(f"{log_tag('LOGS','UPDAT')} Log level updated to: {new_level}")

    def get_logger(self, name: str = None, level: str = None) -> logging.Logger:
        """
        Get a logger with a specific name and, optionally, its own level.

        Args:
            name(str): Logger name (e.g., 'tftracks.analysis.tracks')
            level(str): Log level for this specific logger

        Returns:
            Logger instance
        """
        if name is None:
            return logging.getLogger()

        logger = logging.getLogger(name)
        if level is not None:
            logger.setLevel(_resolve_level(level))
        return logger


class CustomFormatter(logging.Formatter):
    """
    Log formatter that left-aligns the logger name to a fixed width,
    truncating with an ellipsis when it is longer and padding with
    ``fill_char`` when it is shorter.

    Args:
        fmt(str): The format of the log message.
        datefmt(str): The format of the date and time.
        style(str): The style of the log message.
        limit(int): Width reserved for the logger name.
        ellipsis(str): Marker appended to truncated names.
        fill_char(str): Padding character for short names.
        none_char(str): Filler used when the name is not a string.
    """

    def __init__(
        self,
        fmt=None,
        datefmt=None,
        style="%",
        limit=20,
        ellipsis="*",
        fill_char="#",
        none_char=".",
    ):
        super().__init__(fmt, datefmt, style)
        self.datefmt = "%Y-%m-%d %H:%M:%S"
        self.limit = limit
        self.ellipsis = ellipsis
        self.fill_char = fill_char
        self.none_char = none_char
        self.level_limit = len("CRITICAL")

    def format(self, record):
        name_original = record.name
        level_original = record.levelname
        if isinstance(record.name, str):
            if len(record.name) > self.limit:
                record.name = record.name[: self.limit - len(self.ellipsis)] + self.ellipsis
            elif len(record.name) < self.limit:
                record.name = record.name.ljust(self.limit, self.fill_char)
        else:
            record.name = self.none_char * self.limit

        if isinstance(record.levelname, str):
            record.levelname = record.levelname.ljust(self.level_limit, " ")

        record_formatted = super().format(record)
        record.name = name_original
        record.levelname = level_original

        return record_formatted


def log_tag(major: str, minor: str) -> str:
    """Return a standardized tag like "[TRACK-LINK ]" with 5-char codes.

    Both codes are upper-cased and padded or truncated to exactly 5
    characters so that log prefixes line up, e.g.:

        logger.debug(f"{log_tag('track','link')} Kept {n} tracks")

    Args:
        major: Major subsystem (e.g., 'track', 'specr').
        minor: Subcomponent/action (e.g., 'link', 'thres').

    Returns:
        Bracketed tag string: "[MAJOR-MINOR]" with each part 5 chars wide.
    """
    def _fmt(code) -> str:
        s = (str(code) if code is not None else "").upper()
        return s[:5].ljust(5, " ")

    return f"[{_fmt(major)}-{_fmt(minor)}]"


def ensure_dir_exists(path) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path(str | Path): Directory path

    Returns:
        Path object for the directory
    """
    path_obj = Path(path)
    path_obj.mkdir(parents=True, exist_ok=True)
    return path_obj
