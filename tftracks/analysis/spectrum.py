#!/usr/bin/env python3
"""
Spectrogram TFD
===============

This module computes the time-frequency distribution fed to the track
extractor by the command line driver: the squared magnitude of a
short-time Fourier transform, laid out time x frequency.

Functions:
    compute_tfd: Spectrogram of a real signal as a time x frequency matrix.
"""

from typing import Optional, Tuple

import numpy as np
from scipy import signal as spsig

from ..utils.common import LogManager, log_tag
from ..utils.validation import ValidationError, validate_sampling_frequency, validate_signal

logger = LogManager().get_logger(__name__)


def compute_tfd(
    signal: np.ndarray,
    fs: float,
    nperseg: int = 256,
    noverlap: Optional[int] = None,
    window: str = "hann",
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Compute a spectrogram TFD with ``scipy.signal.ShortTimeFFT``.

    Args:
        signal (np.ndarray): Real 1-D signal.
        fs (float): Sampling frequency in Hz.
        nperseg (int): Window length; clamped to the signal length.
        noverlap (int, optional): Overlap between windows; defaults to
            ``nperseg // 2``.
        window (str): Window name understood by ``scipy.signal.get_window``.

    Returns:
        Tuple[np.ndarray, np.ndarray, np.ndarray]:
            - tf (np.ndarray): Energy, shape ``(n_times, n_freqs)``.
            - times (np.ndarray): Window centre times in seconds.
            - frequencies (np.ndarray): Frequencies in Hz, 0 to Nyquist.

    Raises:
        ValidationError: If the signal or the window parameters are invalid.
    """
    signal = validate_signal(signal, min_length=2)
    if np.iscomplexobj(signal):
        raise ValidationError("signal must be real-valued")
    signal = np.nan_to_num(signal.astype(np.float64))
    fs = validate_sampling_frequency(fs, name="fs")

    if nperseg > signal.size:
        logger.warning(
            f"{log_tag('SPECR','STFT')} nperseg={nperseg} exceeds signal length {signal.size}; clamping"
        )
        nperseg = signal.size
    if noverlap is None:
        noverlap = nperseg // 2
    if not 0 <= noverlap < nperseg:
        raise ValidationError(f"noverlap must be within [0, {nperseg}), got {noverlap}")

    win = spsig.get_window(window, nperseg)
    SFT = spsig.ShortTimeFFT(win, hop=nperseg - noverlap, fs=fs, fft_mode="onesided")
    Zxx = SFT.stft(signal)
    times = SFT.t(signal.size)

    tf = np.square(np.abs(Zxx)).T
    logger.debug(
        f"{log_tag('SPECR','STFT')} TFD shape {tf.shape} (nperseg={nperseg}, noverlap={noverlap})"
    )
    return tf, times, SFT.f
