#!/usr/bin/env python3
"""
    tftracks package initialization.
    ================================

    This file initializes the 'tftracks' package and exposes the
    track extraction entry point.

    Functions:
        - get_project_root: Get the project root directory.
        - extract_tracks: Extract time-frequency tracks from an energy matrix.

    Variables:
        - TFTRACKS_ROOT: The project root directory.
        - __all__: List of public functions and variables.
"""

from __future__ import annotations
import os
from pathlib import Path


def get_project_root(package_name: str = 'tftracks',
                     markers: tuple[str, ...] = ('.git', 'pyproject.toml', 'setup.cfg')) -> Path | None:
    # Priority 1: Environment variable
    envname = os.getenv(f'{package_name.upper()}_ROOT')
    if envname:
        p = Path(envname).expanduser().resolve()
        if p.exists():
            return p

    # Priority 2: Using markers
    current_path = Path(__file__).resolve()
    current_dir = current_path if current_path.is_dir() else current_path.parent
    dir_chain = [current_dir, *current_dir.parents]
    for p in dir_chain:
        if any((p / m).exists() for m in markers):
            return p

    return None


# Calculate the project root once at module import time
TFTRACKS_ROOT: Path = get_project_root('tftracks') or Path(__file__).expanduser().resolve().parent.parent

from .analysis.tracks import TrackExtractor, extract_tracks  # noqa: E402

__all__ = ['TFTRACKS_ROOT', 'get_project_root', 'TrackExtractor', 'extract_tracks']
