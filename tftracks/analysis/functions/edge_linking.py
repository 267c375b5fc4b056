#!/usr/bin/env python3
"""
Edge Linking
============
This module links the active pixels of a binary image into tracks by
sequential search.

Functions:
    build_search_kernel: Ordered neighbour offsets used to extend a track.
    trace_path: Greedy walk from a seed pixel, consuming the pixels it uses.
    edge_link: Raster scan of a binary image, tracing and filtering tracks.

A track advances one row (link axis) per step and picks its next column
(search axis) from the kernel offsets, nearest first, the higher column
winning a tie. Pixels are cleared as soon as a track uses them, so every
active pixel ends up in at most one track and the scan order fully
determines the result.

References:
    A Farag, E Delp. "Edge linking by sequential search." Pattern
    Recognition 28.5 (1995): 611-633.
    L Rankine, M Mesbah, B Boashash. "IF estimation for multicomponent
    signals using image processing techniques in the time-frequency
    domain." Signal Processing 87.6 (2007): 1234-1250.
"""

from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from ...utils.common import LogManager, log_tag

logger = LogManager().get_logger(__name__)


class TraceState(Enum):
    WALKING = "walking"
    STOPPED = "stopped"


def build_search_kernel(delta_limit: int = 4) -> np.ndarray:
    """
    Build the search kernel for a given delta limit.

    Search offsets span ``-(delta_limit + 1) .. delta_limit + 1``. The raw
    sequence ``[0, 1, ..., reach, -1, ..., -reach]`` is stable-sorted by
    magnitude, so the positive offset comes first within each magnitude:
    ``[0, 1, -1, 2, -2, ...]``. The link offset is always ``+1``.

    Args:
        delta_limit(int): Non-negative half width of the search region.

    Returns:
        np.ndarray: ``(2 * delta_limit + 3, 2)`` int array of
        ``(d_link, d_search)`` rows in search order.
    """
    reach = delta_limit + 1
    offsets = np.concatenate([np.arange(0, reach + 1), -np.arange(1, reach + 1)])
    order = np.argsort(np.abs(offsets), kind="stable")
    d_search = offsets[order]
    return np.column_stack([np.ones_like(d_search), d_search]).astype(np.intp)


def trace_path(image: np.ndarray, seed: Tuple[int, int], kernel: np.ndarray) -> np.ndarray:
    """
    Follow a track from ``seed`` through the (padded) binary image.

    The seed is cleared and becomes the first point. While WALKING, the
    kernel offsets are tried in order from the last point and the walk
    moves to the first active pixel found, clearing it. The walk STOPS
    when no offset hits an active pixel.

    The image must be padded so that every kernel offset from an active
    pixel stays inside it. It is modified in place.

    Args:
        image(np.ndarray): Padded binary image, consumed in place.
        seed(Tuple[int, int]): ``(row, col)`` of an active pixel.
        kernel(np.ndarray): Output of :func:`build_search_kernel`.

    Returns:
        np.ndarray: ``(n, 2)`` int array of padded ``(row, col)`` points, ``n >= 1``.
    """
    row, col = int(seed[0]), int(seed[1])
    image[row, col] = 0
    path = [(row, col)]

    offsets = np.asarray(kernel).tolist()
    state = TraceState.WALKING
    while state is TraceState.WALKING:
        state = TraceState.STOPPED
        for d_link, d_search in offsets:
            next_row, next_col = row + d_link, col + d_search
            if image[next_row, next_col] == 1:
                image[next_row, next_col] = 0
                row, col = next_row, next_col
                path.append((row, col))
                state = TraceState.WALKING
                break

    return np.asarray(path, dtype=np.intp)


def edge_link(
    image: np.ndarray,
    min_length: Optional[int] = None,
    kernel: Optional[np.ndarray] = None,
) -> Tuple[List[np.ndarray], np.ndarray]:
    """
    Link the active pixels of a binary image into tracks.

    The image is padded with zeros (``max|d_link|`` rows, ``max|d_search|``
    columns on each side) and scanned row by row, columns inner. Each pixel
    still active when the scan reaches it seeds :func:`trace_path`. A
    traced path is kept only if it has strictly more than ``min_length``
    points; shorter ones are discarded but their pixels stay consumed.

    Args:
        image(np.ndarray): Binary image, link axis x search axis. Not modified.
        min_length(Optional[int]): Minimum length to exceed. ``None`` means 0.
        kernel(Optional[np.ndarray]): Search kernel; defaults to
            ``build_search_kernel(4)``.

    Returns:
        Tuple[List[np.ndarray], np.ndarray]:
            - tracks: ``(n, 2)`` int arrays of 1-based ``(row, col)`` points in
              the unpadded image, in the order they were found.
            - overlay: uint8 image, same shape as ``image``, set at every
              point of every kept track.
    """
    if kernel is None:
        kernel = build_search_kernel()
    if min_length is None:
        min_length = 0

    image = np.asarray(image)
    n_rows, n_cols = image.shape
    pad_search = int(np.max(np.abs(kernel[:, 1])))
    pad_link = int(np.max(np.abs(kernel[:, 0])))

    padded = np.zeros((n_rows + 2 * pad_link, n_cols + 2 * pad_search), dtype=np.uint8)
    padded[pad_link:pad_link + n_rows, pad_search:pad_search + n_cols] = image != 0

    # Pixels are only ever cleared, so visiting the initially active ones in
    # row-major order is the same as a full raster scan.
    tracks = []
    n_traced = 0
    for idx_row, idx_col in np.argwhere(padded == 1):
        if padded[idx_row, idx_col] != 1:
            continue
        path = trace_path(padded, (idx_row, idx_col), kernel)
        n_traced += 1
        if len(path) > min_length:
            tracks.append(path)

    offset = np.array([pad_link - 1, pad_search - 1], dtype=np.intp)
    tracks = [path - offset for path in tracks]

    overlay = np.zeros((n_rows, n_cols), dtype=np.uint8)
    for track in tracks:
        overlay[track[:, 0] - 1, track[:, 1] - 1] = 1

    logger.debug(
        f"{log_tag('TRACK','LINK')} Traced {n_traced} paths, kept {len(tracks)} longer than {min_length}"
    )
    return tracks, overlay
