#!/usr/bin/env python3
"""
Integration tests: signal -> spectrogram TFD -> tracks, and the command line.
"""

from __future__ import annotations

import os
import time

import numpy as np
import pandas as pd
import pytest

from tftracks import extract_tracks
from tftracks.analysis.spectrum import compute_tfd
from tftracks.main import build_parser, main, run

from tests.analysis.fixtures.synthetic_tfd import linear_chirp


def _heavy_enabled() -> bool:
    """Check if heavy tests should run via environment variable or pytest config."""
    env_enabled = os.environ.get("TFTRACKS_RUN_HEAVY", "0") == "1"
    pytest_enabled = os.environ.get("_PYTEST_RUN_HEAVY", "0") == "1"
    return env_enabled or pytest_enabled


@pytest.fixture
def chirp_signal():
    fs = 1000.0
    _, x = linear_chirp(fs=fs, f0=50.0, f1=200.0, duration=4.0)
    return x, fs


class TestChirpTracking:
    """A linear chirp yields one long, rising track."""

    def test_chirp_track(self, chirp_signal):
        x, fs = chirp_signal
        tf, times, freqs = compute_tfd(x, fs, nperseg=128, noverlap=96)

        tracks, tf_tracks = extract_tracks(tf, fs=fs, min_length=10)

        assert len(tracks) >= 1
        longest = max(tracks, key=len)
        assert len(longest) > tf.shape[0] // 2

        track_freqs = freqs[longest[:, 1] - 1]
        assert np.all((track_freqs >= 30.0) & (track_freqs <= 220.0))
        assert track_freqs[-1] - track_freqs[0] > 75.0
        assert tf_tracks.shape == tf.shape


class TestCommandLine:
    """Test the command line driver end to end."""

    def test_parser_defaults(self):
        args = build_parser().parse_args(["signal.csv", "--fs", "256"])
        assert args.fs == 256.0
        assert args.delta_limit is None
        assert not args.plot

    def test_csv_signal(self, chirp_signal, tmp_path, capsys):
        x, fs = chirp_signal
        path = tmp_path / "chirp.csv"
        pd.DataFrame({"time": np.arange(x.size) / fs, "ch1": x}).to_csv(path, index=False)

        code = main([str(path), "--fs", str(fs), "--column", "ch1", "--nperseg", "128", "--min_length", "10"])

        assert code == 0
        assert "tracks extracted" in capsys.readouterr().out

    def test_npy_signal_with_saved_plot(self, chirp_signal, tmp_path):
        x, fs = chirp_signal
        path = tmp_path / "chirp.npy"
        np.save(path, x)
        plot_path = tmp_path / "out" / "tracks.png"

        args = build_parser().parse_args(
            [str(path), "--fs", str(fs), "--nperseg", "128", "--save_plot", str(plot_path)]
        )
        tracks, tf_tracks = run(args)

        assert len(tracks) >= 1
        assert tf_tracks.ndim == 2
        assert plot_path.exists()

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.csv"), "--fs", "100"]) == 1

    def test_invalid_parameter(self, chirp_signal, tmp_path):
        x, fs = chirp_signal
        path = tmp_path / "chirp.npy"
        np.save(path, x)
        assert main([str(path), "--fs", str(fs), "--delta_limit", "-3"]) == 1

    def test_unsupported_file_type(self, tmp_path):
        path = tmp_path / "signal.wav"
        path.write_bytes(b"RIFF")
        assert main([str(path), "--fs", "100"]) == 1


@pytest.mark.parametrize(
    "mode",
    [
        pytest.param("light", id="light"),
        pytest.param(
            "heavy",
            id="heavy",
            marks=pytest.mark.skipif(not _heavy_enabled(), reason="set TFTRACKS_RUN_HEAVY=1 or use --run-heavy"),
        ),
    ],
)
def test_extraction_performance(mode):
    n_time, n_freq = (256, 128) if mode == "light" else (2048, 512)
    tf = np.random.default_rng(3).random((n_time, n_freq))

    t0 = time.time()
    tracks, _ = extract_tracks(tf, lower_prctile_limit=50)
    elapsed = time.time() - t0

    assert len(tracks) > 0
    # Loose upper bound to catch regressions
    assert elapsed < (5.0 if mode == "light" else 60.0)
