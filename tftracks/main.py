#!/usr/bin/env python3
"""
Command Line Entry Point
========================

Extracts time-frequency tracks from a recorded signal:

1. load a 1-D signal from ``.npy`` or ``.csv``,
2. compute its spectrogram TFD,
3. extract the tracks,
4. log a summary and, optionally, plot the tracks.

Usage:
    tftracks signal.csv --fs 256 --min_length 20
    tftracks signal.npy --fs 1000 --delta_limit 2 --save_plot results/tracks.png
"""

import argparse
from pathlib import Path
from typing import List, Optional

import numpy as np
import pandas as pd

from tftracks.analysis.tracks import TrackExtractor, scale_tracks
from tftracks.analysis.spectrum import compute_tfd
from tftracks.utils.common import LogManager, log_tag
from tftracks.utils.config import load_track_config
from tftracks.utils.validation import ValidationError

logger = LogManager().get_logger(__name__)


def load_signal(path, column: Optional[str] = None) -> np.ndarray:
    """
    Load a 1-D signal.

    Args:
        path(str | Path): ``.npy`` array or ``.csv`` table.
        column(str, optional): CSV column to read; defaults to the last one.

    Returns:
        np.ndarray: The signal.

    Raises:
        ValidationError: If the file type or column is not supported.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Signal file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".npy":
        return np.load(path)
    if suffix in (".csv", ".txt", ".dat"):
        df = pd.read_csv(path)
        if column is None:
            return df.iloc[:, -1].to_numpy()
        if column not in df.columns:
            raise ValidationError(f"Column '{column}' not in {list(df.columns)}")
        return df[column].to_numpy()

    raise ValidationError(f"Unsupported signal file type '{suffix}'")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Time-frequency track extraction",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("signal", type=str, help="Signal file (.npy or .csv).")
    parser.add_argument("--fs", type=float, required=True, help="Sampling frequency in Hz.")
    parser.add_argument(
        "--column", type=str, default=None, help="CSV column holding the signal (default: last)."
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Configuration .ini file overriding the defaults."
    )
    parser.add_argument(
        "--delta_limit", type=int, default=None, help="Search limit for the next track point."
    )
    parser.add_argument(
        "--min_length", type=int, default=None, help="Tracks must be longer than this."
    )
    parser.add_argument(
        "--lower_prctile_limit",
        type=float,
        default=None,
        help="Ignore energy below this percentile of the positive energy.",
    )
    parser.add_argument("--nperseg", type=int, default=None, help="STFT window length.")
    parser.add_argument("--noverlap", type=int, default=None, help="STFT window overlap.")
    parser.add_argument("--plot", action="store_true", help="Show the tracks.")
    parser.add_argument("--save_plot", type=str, default=None, help="Save the track plot there.")
    parser.add_argument(
        "--log_level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level.",
    )
    return parser


def run(args: argparse.Namespace):
    """
    Run the extraction described by parsed arguments.

    Returns:
        tuple: (individual_tracks, tf_tracks)
    """
    config = load_track_config(args.config)
    LogManager(level=args.log_level or config.log_level)

    overrides = {
        key: getattr(args, key)
        for key in ("delta_limit", "min_length", "lower_prctile_limit")
        if getattr(args, key) is not None
    }
    extractor = TrackExtractor(config, **overrides)

    signal = load_signal(args.signal, args.column)
    tf, times, freqs = compute_tfd(
        signal,
        args.fs,
        nperseg=args.nperseg or config.nperseg,
        noverlap=args.noverlap if args.noverlap is not None else config.noverlap,
        window=config.window,
    )
    tracks, tf_tracks = extractor.extract(tf, fs=args.fs)

    logger.info(
        f"{log_tag('MAIN','RUN')} {Path(args.signal).name}: {len(tracks)} tracks in TFD {tf.shape}"
    )
    for idx, track in enumerate(scale_tracks(tracks, args.fs, signal.size, tf.shape[1], tf.shape[0])):
        logger.debug(
            f"{log_tag('MAIN','TRACK')} #{idx + 1}: {len(track)} points, "
            f"{track[0, 0]:.3f}-{track[-1, 0]:.3f} s, mean {track[:, 1].mean():.2f} Hz"
        )

    if args.plot or args.save_plot:
        from tftracks.analysis.plots import plot_tracks
        import matplotlib.pyplot as plt

        fig = plot_tracks(
            tracks,
            fs=args.fs,
            n_samples=signal.size,
            n_freq=tf.shape[1],
            n_time=tf.shape[0],
            title=Path(args.signal).name,
            save_path=args.save_plot,
        )
        if args.plot:
            plt.show()
        plt.close(fig)

    return tracks, tf_tracks


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run the track extraction from the command line."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        tracks, _ = run(args)
    except (ValidationError, FileNotFoundError) as e:
        logger.error(f"{log_tag('MAIN','ERROR')} {e}")
        return 1

    print(f"{len(tracks)} tracks extracted from {args.signal}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
