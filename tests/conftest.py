#!/usr/bin/env python3
"""
Pytest configuration and shared fixtures for the tftracks test suite.

This module contains pytest hooks that are automatically discovered and executed:
- pytest_addoption: Registers custom command-line options
- pytest_configure: Configures pytest behavior based on options

File logging is disabled for the test session so that LogManager does not
create a ``logs`` directory in the working tree.
"""

import os

os.environ.setdefault("TFTRACKS_LOG_DIR", "")


def pytest_addoption(parser):
    """Add custom command-line options for pytest.

    Registers the --run-heavy option that enables the large-matrix tests.

    Args:
        parser: pytest's argument parser instance (automatically provided by pytest)
    """
    parser.addoption(
        "--run-heavy",
        action="store_true",
        default=False,
        help="run heavy performance tests"
    )


def pytest_configure(config):
    """Configure pytest with custom options.

    Test modules check the environment flag at import time.

    Args:
        config: pytest's Config object (automatically provided by pytest)
    """
    if config.getoption("--run-heavy", default=False):
        os.environ["_PYTEST_RUN_HEAVY"] = "1"
