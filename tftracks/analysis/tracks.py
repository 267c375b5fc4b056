#!/usr/bin/env python3
"""
Time-Frequency Track Extraction
===============================

This module extracts tracks, sequences of time-frequency points following
instantaneous-frequency laws, from a time-frequency distribution (TFD).

The pipeline is:

1. remove all energy below a percentile of the positive entries,
2. mark the local maxima of every time slice in a binary image,
3. link the maxima into tracks with a sequential edge search,
4. keep the tracks longer than a minimum length.

Classes:
    TrackExtractor: Track extraction with configurable default parameters.

Functions:
    extract_tracks: Extract tracks from a TFD.
    scale_tracks: Convert track indices to seconds and hertz.
"""

from functools import lru_cache
from typing import List, Optional, Tuple

import numpy as np

from .functions.thresholding import threshold_energy
from .functions.local_maxima import local_maxima_image
from .functions.edge_linking import build_search_kernel, edge_link
from ..utils.common import LogManager, log_tag
from ..utils.config import TrackConfig, load_track_config
from ..utils.validation import (
    PERCENTILE_METHODS,
    ValidationError,
    validate_delta_limit,
    validate_method,
    validate_min_length,
    validate_percentile,
    validate_sampling_frequency,
    validate_tfd,
)

logger = LogManager().get_logger(__name__)


@lru_cache(maxsize=16)
def _cached_kernel(delta_limit: int) -> np.ndarray:
    kernel = build_search_kernel(delta_limit)
    kernel.setflags(write=False)
    return kernel


def extract_tracks(
    tf,
    fs: Optional[float] = None,
    delta_limit: int = 4,
    min_length: Optional[int] = None,
    lower_prctile_limit: float = 95,
    percentile_method: str = "hazen",
) -> Tuple[List[np.ndarray], np.ndarray]:
    """
    Extract time-frequency tracks from a TFD.

    Args:
        tf(array-like): Energy matrix, time x frequency (``T x F``).
        fs(float, optional): Sampling frequency. Only validated here; use
            :func:`scale_tracks` to convert the result to physical units.
        delta_limit(int): Search limit; the next point of a track may be up
            to ``delta_limit + 1`` frequency bins away.
        min_length(int, optional): Tracks must have strictly more points
            than this. ``None`` keeps every track.
        lower_prctile_limit(float): Energy below this percentile of the
            positive entries is ignored.
        percentile_method(str): ``numpy.percentile`` method for the threshold.

    Returns:
        Tuple[List[np.ndarray], np.ndarray]:
            - individual_tracks: one ``(n, 2)`` int array per track, holding
              1-based ``(time_index, frequency_index)`` points in time order.
            - tf_tracks: uint8 ``T x F`` matrix set to 1 on every track point.

    Raises:
        ValidationError: If any input is malformed.

    Examples:
        ```python
        import numpy as np
        from tftracks import extract_tracks

        tf = np.zeros((64, 32))
        tf[:, 10] = 1.0
        tf[:, 9] = tf[:, 11] = 0.5
        tracks, tf_tracks = extract_tracks(tf, lower_prctile_limit=0, min_length=5)
        # one track: time 1..64 at frequency 11
        ```
    """
    tf = validate_tfd(tf)
    if fs is not None:
        validate_sampling_frequency(fs, name="fs")
    delta_limit = validate_delta_limit(delta_limit)
    min_length = validate_min_length(min_length)
    lower_prctile_limit = validate_percentile(lower_prctile_limit, name="lower_prctile_limit")
    percentile_method = validate_method(
        percentile_method, PERCENTILE_METHODS, name="percentile_method"
    )

    logger.debug(
        f"{log_tag('TRACK','START')} TFD {tf.shape}, delta_limit={delta_limit}, "
        f"min_length={min_length}, percentile={lower_prctile_limit:g}"
    )

    tf_thresholded, _ = threshold_energy(tf, lower_prctile_limit, method=percentile_method)
    image = local_maxima_image(tf_thresholded)
    individual_tracks, tf_tracks = edge_link(image, min_length, _cached_kernel(delta_limit))

    logger.info(f"{log_tag('TRACK','DONE')} Extracted {len(individual_tracks)} tracks")
    return individual_tracks, tf_tracks


def scale_tracks(
    tracks: List[np.ndarray],
    fs: float,
    n_samples: int,
    n_freq: int,
    n_time: Optional[int] = None,
) -> List[np.ndarray]:
    """
    Convert 1-based track indices to seconds and hertz.

    The time step is ``n_samples / fs / n_time`` and the frequency step is
    ``(fs / 2) / n_freq``, i.e. the TFD is assumed to cover the whole signal
    and the band from 0 to Nyquist.

    Args:
        tracks(List[np.ndarray]): Output of :func:`extract_tracks`.
        fs(float): Sampling frequency in Hz.
        n_samples(int): Length of the analysed signal.
        n_freq(int): Number of frequency bins of the TFD.
        n_time(int, optional): Number of time bins; defaults to ``n_samples``.

    Returns:
        List[np.ndarray]: ``(n, 2)`` float arrays of ``(time_s, frequency_hz)``.
    """
    fs = validate_sampling_frequency(fs, name="fs")
    if n_time is None:
        n_time = n_samples
    t_scale = n_samples / fs / n_time
    f_scale = (fs / 2) / n_freq
    scale = np.array([t_scale, f_scale])
    return [np.asarray(track, dtype=np.float64) * scale for track in tracks]


class TrackExtractor:
    """Track Extractor Class

    Wraps :func:`extract_tracks` with defaults taken from a
    :class:`TrackConfig`. Keyword arguments passed to :meth:`extract` win
    over constructor overrides, which win over the configuration.

    Attributes:
        config: The configuration providing the defaults.
        kwargs_fallback: Default keyword arguments for :func:`extract_tracks`.

    Examples:
        ```python
        from tftracks import TrackExtractor

        extractor = TrackExtractor(min_length=20)
        tracks, tf_tracks = extractor.extract(tf, fs=256)
        tracks, tf_tracks = extractor.extract(tf, delta_limit=2)
        ```
    """

    def __init__(self, config: Optional[TrackConfig] = None, **overrides):
        self.config = config if config is not None else load_track_config()
        self.kwargs_fallback = self.config.as_kwargs()

        unknown = set(overrides) - set(self.kwargs_fallback)
        if unknown:
            raise ValidationError(f"Unknown track parameters: {sorted(unknown)}")
        self.kwargs_fallback.update(overrides)

    def extract(self, tf, fs: Optional[float] = None, **kwargs):
        """
        Extract tracks with the configured defaults.

        Args:
            tf(array-like): Energy matrix, time x frequency.
            fs(float, optional): Sampling frequency.
            **kwargs: Any :func:`extract_tracks` parameter.

        Returns:
            Tuple[List[np.ndarray], np.ndarray]: ``(individual_tracks, tf_tracks)``.
        """
        params = dict(self.kwargs_fallback)
        for key, value in kwargs.items():
            if key not in params:
                raise ValidationError(f"Unknown track parameter '{key}'")
            params[key] = value
        return extract_tracks(tf, fs=fs, **params)
