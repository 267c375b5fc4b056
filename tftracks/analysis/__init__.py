#!/usr/bin/env python3
"""
tftracks Analysis
=================

Track extraction from time-frequency distributions, the spectrogram used
by the command line driver, and track plotting.
"""

from .tracks import TrackExtractor, extract_tracks, scale_tracks

__all__ = ["TrackExtractor", "extract_tracks", "scale_tracks"]
