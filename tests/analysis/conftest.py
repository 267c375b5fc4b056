#!/usr/bin/env python3
"""
Pytest configuration and shared fixtures for analysis module tests.

Provides deterministic binary images, energy matrices and signals used
across the track extraction tests.
"""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from tests.analysis.fixtures.synthetic_tfd import ridge_tfd  # noqa: E402


@pytest.fixture
def straight_run_image():
    """
    Binary image with a single run of 10 active pixels, one per time bin,
    all in frequency bin 7 (0-based), starting at time bin 3.

    Returns:
        tuple: (image, rows, cols) with 0-based coordinates of the run.
    """
    image = np.zeros((20, 16), dtype=np.uint8)
    rows = np.arange(3, 13)
    cols = np.full(10, 7)
    image[rows, cols] = 1
    return image, rows, cols


@pytest.fixture
def two_ridge_tfd():
    """
    Energy matrix with a rising and a flat ridge, well separated in frequency.

    Returns:
        tuple: (tf, rising_bins, flat_bins)
    """
    n_time, n_freq = 40, 64
    rising = 10 + np.arange(n_time) // 4
    flat = np.full(n_time, 45)
    tf = ridge_tfd(n_time, n_freq, rising, amplitude=2.0) + ridge_tfd(
        n_time, n_freq, flat, amplitude=1.0
    )
    return tf, rising, flat


@pytest.fixture
def noisy_tfd():
    """Random energy with a weak ridge, for property tests."""
    n_time, n_freq = 60, 48
    bins = (24 + 8 * np.sin(np.linspace(0, 2 * np.pi, n_time))).astype(int)
    return ridge_tfd(n_time, n_freq, bins, amplitude=3.0, noise=1.0, seed=42)
