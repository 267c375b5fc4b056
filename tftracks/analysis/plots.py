#!/usr/bin/env python3
"""
Plotting Functions
==================

This module contains plotting functions for extracted tracks.

Functions:
    plot_tracks: Scatter the tracks, in bins or in physical units.
    plot_track_overlay: Show the binary track overlay as an image.
"""

from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .tracks import scale_tracks
from ..utils.common import LogManager, ensure_dir_exists, log_tag

logger = LogManager().get_logger(__name__)


def _save_figure(fig: Figure, save_path: Union[str, Path, None], dpi: int = 300):
    if save_path is None:
        return
    save_path = Path(save_path)
    ensure_dir_exists(save_path.parent)
    fig.savefig(save_path, dpi=dpi, bbox_inches="tight")
    logger.info(f"{log_tag('PLOTS','SAVE')} Figure saved to {save_path}")


def plot_tracks(
    tracks: List[np.ndarray],
    fs: Optional[float] = None,
    n_samples: Optional[int] = None,
    n_freq: Optional[int] = None,
    n_time: Optional[int] = None,
    ax: Optional[plt.Axes] = None,
    title: Optional[str] = None,
    save_path: Union[str, Path, None] = None,
) -> Figure:
    """
    Plot every track as a sequence of markers.

    When ``fs``, ``n_samples`` and ``n_freq`` are all given the axes are in
    seconds and hertz (see :func:`scale_tracks`); otherwise they show the
    1-based time and frequency bin indices.

    Args:
        tracks(List[np.ndarray]): Output of ``extract_tracks``.
        fs(float, optional): Sampling frequency in Hz.
        n_samples(int, optional): Length of the analysed signal.
        n_freq(int, optional): Number of frequency bins of the TFD.
        n_time(int, optional): Number of time bins of the TFD.
        ax(plt.Axes, optional): Axes to draw into; a new figure otherwise.
        title(str, optional): Axes title.
        save_path(str | Path, optional): Save the figure there.

    Returns:
        Figure: The figure holding the plot.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))
    else:
        fig = ax.figure

    physical = fs is not None and n_samples is not None and n_freq is not None
    points = scale_tracks(tracks, fs, n_samples, n_freq, n_time) if physical else tracks

    for track in points:
        ax.plot(track[:, 0], track[:, 1], "k+", markersize=4)

    if physical:
        ax.set_xlabel("time (seconds)")
        ax.set_ylabel("frequency (Hz)")
        ax.set_xlim(0, n_samples / fs)
    else:
        ax.set_xlabel("time bin")
        ax.set_ylabel("frequency bin")
    ax.set_title(title if title is not None else f"{len(tracks)} tracks")

    _save_figure(fig, save_path)
    return fig


def plot_track_overlay(
    tf_tracks: np.ndarray,
    ax: Optional[plt.Axes] = None,
    save_path: Union[str, Path, None] = None,
) -> Figure:
    """Show the binary track overlay with time on the horizontal axis."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))
    else:
        fig = ax.figure

    ax.imshow(
        np.asarray(tf_tracks).T,
        origin="lower",
        aspect="auto",
        cmap="gray_r",
        interpolation="nearest",
    )
    ax.set_xlabel("time bin")
    ax.set_ylabel("frequency bin")

    _save_figure(fig, save_path)
    return fig
