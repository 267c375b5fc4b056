#!/usr/bin/env python3
"""
Unit tests for local maxima detection.
"""

import pytest
import numpy as np

from tftracks.analysis.functions.local_maxima import local_maxima_image, slice_maxima


class TestSliceMaxima:
    """Test peak detection on a single time slice."""

    def test_reference_slice(self):
        """u = [2, -1, 2, -3]: only index 1 is scanned as a peak."""
        np.testing.assert_array_equal(slice_maxima(np.array([1, 3, 2, 4, 1])), [0, 1, 0, 0, 0])

    def test_last_two_samples_never_flagged(self):
        q = np.array([0.0, 0.0, 0.0, 1.0, 5.0, 0.0])
        assert not np.any(slice_maxima(q))

    def test_plateau_marks_right_edge(self):
        """With u >= 0 on a plateau, the last plateau sample is the peak."""
        q = np.array([0.0, 2.0, 2.0, 1.0, 0.0, 0.0])
        np.testing.assert_array_equal(slice_maxima(q), [0, 0, 1, 0, 0, 0])

    def test_multiple_peaks(self):
        q = np.array([0, 5, 0, 0, 7, 1, 0, 0, 0])
        np.testing.assert_array_equal(slice_maxima(q), [0, 1, 0, 0, 1, 0, 0, 0, 0])

    @pytest.mark.parametrize("length", [0, 1, 2, 3])
    def test_short_slices_have_no_peaks(self, length):
        q = np.array([0.0, 3.0, 1.0])[:length]
        peaks = slice_maxima(q)
        assert peaks.shape == (length,)
        assert not np.any(peaks)

    def test_flat_slice_has_no_peaks(self):
        assert not np.any(slice_maxima(np.zeros(16)))


class TestLocalMaximaImage:
    """Test the binary image built from all time slices."""

    def test_rows_are_processed_independently(self, noisy_tfd):
        image = local_maxima_image(noisy_tfd)

        assert image.shape == noisy_tfd.shape
        assert image.dtype == np.uint8
        for idx_time in range(noisy_tfd.shape[0]):
            np.testing.assert_array_equal(image[idx_time], slice_maxima(noisy_tfd[idx_time]))

    def test_ridge_peaks_are_marked(self, two_ridge_tfd):
        tf, rising, flat = two_ridge_tfd
        image = local_maxima_image(tf)

        expected = np.zeros(tf.shape, dtype=np.uint8)
        expected[np.arange(tf.shape[0]), rising] = 1
        expected[np.arange(tf.shape[0]), flat] = 1
        np.testing.assert_array_equal(image, expected)

    def test_empty_matrix(self):
        assert local_maxima_image(np.zeros((0, 8))).shape == (0, 8)
