#!/usr/bin/env python3
"""
Energy Thresholding
===================

This module removes low-energy entries from a time-frequency distribution
before local maxima are searched.

Functions:
    positive_percentile: Percentile of a non-empty set of values.
    threshold_energy: Zero every entry below a percentile of the positive energy.
    apply_threshold: Zero every entry below a fixed level.
"""

from typing import Optional, Tuple

import numpy as np

from ...utils.common import LogManager, log_tag

logger = LogManager().get_logger(__name__)


def positive_percentile(values: np.ndarray, percentile: float, method: str = "hazen") -> float:
    """
    Return the value below which ``percentile`` percent of ``values`` fall.

    The default ``hazen`` method interpolates linearly between order
    statistics placed at ``(k - 0.5) / n``, clamping at both ends.

    Args:
        values(np.ndarray): Values to rank; must not be empty.
        percentile(float): Percentile in [0, 100].
        method(str): ``numpy.percentile`` interpolation method.

    Returns:
        float: The interpolated order statistic.

    Raises:
        ValueError: If ``values`` is empty.
    """
    values = np.asarray(values, dtype=np.float64).ravel()
    if values.size == 0:
        raise ValueError("Cannot compute a percentile of an empty set")
    return float(np.percentile(values, percentile, method=method))


def apply_threshold(tf: np.ndarray, level: float) -> np.ndarray:
    """Return a copy of ``tf`` with every entry strictly below ``level`` set to 0."""
    out = np.array(tf, dtype=np.float64, copy=True)
    out[out < level] = 0.0
    return out


def threshold_energy(
    tf: np.ndarray, percentile: float = 95.0, method: str = "hazen"
) -> Tuple[np.ndarray, Optional[float]]:
    """
    Remove all energy below a percentile of the strictly positive entries.

    Args:
        tf(np.ndarray): Energy matrix, time x frequency.
        percentile(float): Percentile in [0, 100].
        method(str): ``numpy.percentile`` interpolation method.

    Returns:
        Tuple[np.ndarray, Optional[float]]:
            - Thresholded copy of ``tf``.
            - The threshold level, or ``None`` when no entry was positive
              (the returned matrix is then all zeros).
    """
    tf = np.asarray(tf, dtype=np.float64)
    positive = tf[tf > 0]

    if positive.size == 0:
        logger.warning(
            f"{log_tag('TRACK','THRES')} No positive energy in {tf.shape} matrix; nothing to track"
        )
        return np.zeros_like(tf), None

    level = positive_percentile(positive, percentile, method=method)
    logger.debug(
        f"{log_tag('TRACK','THRES')} {percentile:g}th percentile of {positive.size} positive entries: {level:.6g}"
    )
    return apply_threshold(tf, level), level
