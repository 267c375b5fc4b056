#!/usr/bin/env python3
"""
Local Maxima Detection
======================

Converts a thresholded time-frequency distribution into a binary image
marking the peaks of every time slice.

Functions:
    slice_maxima: Binary peak mask of a single time slice.
    local_maxima_image: Binary peak image of a whole time x frequency matrix.
"""

import numpy as np

from ...utils.common import LogManager, log_tag

logger = LogManager().get_logger(__name__)


def slice_maxima(q: np.ndarray) -> np.ndarray:
    """
    Mark the local maxima of one time slice.

    With ``u = diff(q)``, index ``k + 1`` is a peak when ``u[k] >= 0`` and
    ``u[k + 1] < 0``. Only ``k < len(u) - 2`` is scanned, so the last two
    samples of a slice are never marked; slices shorter than 4 samples
    have no peaks.

    Args:
        q(np.ndarray): 1-D energy profile.

    Returns:
        np.ndarray: uint8 mask with the same length as ``q``.

    Examples:
        >>> slice_maxima(np.array([1, 3, 2, 4, 1]))
        array([0, 1, 0, 0, 0], dtype=uint8)
    """
    q = np.asarray(q, dtype=np.float64)
    peaks = np.zeros(q.shape[0], dtype=np.uint8)
    n_scan = q.shape[0] - 3
    if n_scan <= 0:
        return peaks

    u = np.diff(q)
    rising = u[:n_scan] >= 0
    falling = u[1:n_scan + 1] < 0
    peaks[1:n_scan + 1] = rising & falling
    return peaks


def local_maxima_image(tf: np.ndarray) -> np.ndarray:
    """
    Build the binary activity image, one time slice (row) at a time.

    Args:
        tf(np.ndarray): Thresholded energy, time x frequency.

    Returns:
        np.ndarray: uint8 image of the same shape; rows keep the input order.
    """
    tf = np.asarray(tf, dtype=np.float64)
    image = np.zeros(tf.shape, dtype=np.uint8)
    for idx_time in range(tf.shape[0]):
        image[idx_time, :] = slice_maxima(tf[idx_time, :])

    logger.debug(
        f"{log_tag('TRACK','PEAKS')} {int(image.sum())} local maxima in {tf.shape[0]} time slices"
    )
    return image
