#!/usr/bin/env python3
"""
Synthetic TFD fixtures for track extraction tests.

Provides deterministic energy matrices and signals.
"""

from __future__ import annotations

import numpy as np


def ridge_tfd(
    n_time: int, n_freq: int, ridge_bins, amplitude: float = 1.0, noise: float = 0.0, seed: int = 0
) -> np.ndarray:
    """Energy matrix (time x frequency) with one peaked ridge per time slice.

    Args:
        n_time(int): Number of time bins.
        n_freq(int): Number of frequency bins.
        ridge_bins(array-like): 0-based frequency bin of the ridge per time bin.
        amplitude(float): Ridge peak energy; neighbours get half of it.
        noise(float): Scale of the uniform background energy.
        seed(int): Random seed for the background.

    Returns:
        np.ndarray: ``(n_time, n_freq)`` energy matrix.
    """
    rng = np.random.default_rng(seed)
    tf = noise * rng.random((n_time, n_freq))
    for idx_time, idx_freq in enumerate(ridge_bins):
        tf[idx_time, idx_freq] += amplitude
        if idx_freq > 0:
            tf[idx_time, idx_freq - 1] += amplitude / 2
        if idx_freq < n_freq - 1:
            tf[idx_time, idx_freq + 1] += amplitude / 2
    return tf


def linear_chirp(fs: float, f0: float, f1: float, duration: float) -> tuple[np.ndarray, np.ndarray]:
    """Generate a linear chirp sweeping from f0 to f1 Hz.

    Returns:
        (t(np.ndarray), x(np.ndarray)): time vector and signal.
    """
    n = int(fs * duration)
    t = np.arange(n) / fs
    phase = 2 * np.pi * (f0 * t + 0.5 * (f1 - f0) / duration * t**2)
    return t, np.cos(phase)
