#!/usr/bin/env python3
"""
Track Configuration
===================

This module provides helpers for loading the default parameters of the
track extraction pipeline. Configuration is read with :mod:`configparser`
from the first file found among:

1. the path given explicitly to :func:`load_track_config`,
2. the ``TFTRACKS_CONFIG`` environment variable,
3. ``tftracks.ini`` at the project root,
4. the ``config.ini`` shipped inside the package.

Missing files, sections or keys fall back to the dataclass defaults.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .common import LogManager, log_tag
from .validation import (
    PERCENTILE_METHODS,
    ValidationError,
    validate_delta_limit,
    validate_method,
    validate_min_length,
    validate_percentile,
)

logger = LogManager().get_logger(__name__)

PACKAGE_CONFIG = Path(__file__).resolve().parent.parent / "config.ini"


@dataclass
class TrackConfig:
    """
    Default parameters for track extraction and the spectrogram driver.

    Attributes:
        delta_limit: Search-kernel half width; offsets reach delta_limit + 1.
        min_length: Tracks must be strictly longer than this. ``None`` keeps all.
        lower_prctile_limit: Energy below this percentile of the positive
            entries is discarded.
        percentile_method: ``numpy.percentile`` interpolation method.
        nperseg: STFT segment length used by :func:`compute_tfd`.
        noverlap: STFT overlap; ``None`` means half of ``nperseg``.
        window: STFT window name.
        log_level: Console log level for the command line driver.
    """

    delta_limit: int = 4
    min_length: Optional[int] = None
    lower_prctile_limit: float = 95.0
    percentile_method: str = "hazen"
    nperseg: int = 256
    noverlap: Optional[int] = None
    window: str = "hann"
    log_level: str = "WARNING"

    def as_kwargs(self) -> dict:
        """Return the extraction parameters as keyword arguments."""
        return {
            "delta_limit": self.delta_limit,
            "min_length": self.min_length,
            "lower_prctile_limit": self.lower_prctile_limit,
            "percentile_method": self.percentile_method,
        }


def _get_optional_int(section: configparser.SectionProxy, key: str, default):
    raw = section.get(key, fallback="").strip()
    if not raw or raw.lower() == "none":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError(f"'{key}' must be an integer, got '{raw}'") from e


def _resolve_config_path(config_path) -> Optional[Path]:
    if config_path is not None:
        return Path(config_path)

    env_path = os.getenv("TFTRACKS_CONFIG")
    if env_path:
        return Path(env_path).expanduser()

    from .. import get_project_root

    root = get_project_root()
    if root is not None and (root / "tftracks.ini").exists():
        return root / "tftracks.ini"

    return PACKAGE_CONFIG


def load_track_config(config_path: Union[str, Path, None] = None) -> TrackConfig:
    """
    Load the track extraction defaults.

    Args:
        config_path: Path to an ``.ini`` file. When ``None`` the lookup
            order described in the module docstring applies.

    Returns:
        TrackConfig: The resolved configuration. Defaults are used for
        anything the file does not define.

    Raises:
        ValidationError: If a configured value is malformed.
    """
    config = TrackConfig()
    path = _resolve_config_path(config_path)

    if path is None or not path.exists():
        logger.debug(f"{log_tag('CONFG','LOAD')} No config file at {path}; using defaults")
        return config

    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")
    logger.debug(f"{log_tag('CONFG','LOAD')} Reading configuration from {path}")

    if "tracks" in parser:
        tracks = parser["tracks"]
        config.delta_limit = validate_delta_limit(
            _get_optional_int(tracks, "delta_limit", config.delta_limit)
        )
        config.min_length = _get_optional_int(tracks, "min_length", config.min_length)
        if config.min_length is not None:
            config.min_length = validate_min_length(config.min_length)
        try:
            config.lower_prctile_limit = validate_percentile(
                tracks.getfloat("lower_prctile_limit", fallback=config.lower_prctile_limit),
                name="lower_prctile_limit",
            )
        except ValueError as e:
            raise ValidationError(f"'lower_prctile_limit' must be a number: {e}") from e
        config.percentile_method = validate_method(
            tracks.get("percentile_method", fallback=config.percentile_method).strip(),
            PERCENTILE_METHODS,
            name="percentile_method",
        )

    if "spectrum" in parser:
        spectrum = parser["spectrum"]
        config.nperseg = _get_optional_int(spectrum, "nperseg", config.nperseg)
        config.noverlap = _get_optional_int(spectrum, "noverlap", config.noverlap)
        config.window = spectrum.get("window", fallback=config.window).strip()

    if "logging" in parser:
        config.log_level = parser["logging"].get("level", fallback=config.log_level).strip()

    return config
