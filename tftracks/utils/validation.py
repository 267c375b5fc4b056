#!/usr/bin/env python3
"""
Input Validation Utilities
==========================

This module provides standardized input validation functions for the
tftracks package. Every validator returns the normalized value or raises
ValidationError before any processing starts.

Functions:
    validate_tfd: Validate a 2-D time-frequency energy matrix.
    validate_delta_limit: Validate the search-kernel half width.
    validate_min_length: Validate the minimum track length.
    validate_percentile: Validate a percentile in [0, 100].
    validate_method: Validate a method name against the allowed ones.
    validate_sampling_frequency: Validate sampling frequency parameter.
    validate_signal: Validate 1-D signal data.
"""

import numbers

import numpy as np
import pandas as pd
from typing import Optional, Union

from .common import LogManager, log_tag

logger = LogManager().get_logger(__name__)

# Methods accepted by numpy.percentile
PERCENTILE_METHODS = (
    "inverted_cdf",
    "averaged_inverted_cdf",
    "closest_observation",
    "interpolated_inverted_cdf",
    "hazen",
    "weibull",
    "linear",
    "median_unbiased",
    "normal_unbiased",
    "lower",
    "higher",
    "midpoint",
    "nearest",
)


class ValidationError(Exception):
    """Custom exception for validation errors."""

    pass


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


def validate_tfd(tf, name: str = "tf") -> np.ndarray:
    """
    Validate a time-frequency distribution.

    Accepts any rectangular 2-D array-like of real numbers (including an
    empty one). NaN entries are reported and replaced by zero energy.

    Args:
        tf(array-like): Energy matrix, time x frequency
        name(str): Parameter name for error messages

    Returns:
        np.ndarray: Validated float64 copy of the matrix

    Raises:
        ValidationError: If the input is missing, ragged, complex or not 2-D.
    """
    if tf is None:
        raise ValidationError(f"{name} cannot be None")

    if isinstance(tf, pd.DataFrame):
        tf = tf.to_numpy()

    try:
        arr = np.asarray(tf)
        if np.iscomplexobj(arr):
            raise ValidationError(f"{name} must be real-valued, got complex data")
        arr = arr.astype(np.float64)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name} must be a rectangular numeric matrix: {e}") from e

    if arr.ndim != 2:
        raise ValidationError(f"{name} must be 2-D (time x frequency), got {arr.ndim}-D")

    nan_mask = np.isnan(arr)
    if np.any(nan_mask):
        logger.warning(
            f"{log_tag('VALID','TFD')} {name} contains {int(nan_mask.sum())} NaN values; treated as zero energy"
        )
        arr[nan_mask] = 0.0

    if np.any(np.isinf(arr)):
        logger.warning(f"{log_tag('VALID','TFD')} {name} contains infinite values")

    return arr


def validate_delta_limit(delta_limit, name: str = "delta_limit") -> int:
    """
    Validate the search-kernel half width.

    Args:
        delta_limit(int): Largest search offset is delta_limit + 1
        name(str): Parameter name for error messages

    Returns:
        int: Validated delta limit

    Raises:
        ValidationError: If the value is not a non-negative integer.
    """
    if delta_limit is None:
        raise ValidationError(f"{name} cannot be None")

    if not _is_integer(delta_limit):
        raise ValidationError(f"{name} must be an integer, got {type(delta_limit)}")

    if delta_limit < 0:
        raise ValidationError(f"{name} must be non-negative, got {delta_limit}")

    return int(delta_limit)


def validate_min_length(min_length: Optional[int], name: str = "min_length") -> int:
    """
    Validate the minimum track length. ``None`` means no minimum.

    Args:
        min_length(int | None): Tracks must be strictly longer than this
        name(str): Parameter name for error messages

    Returns:
        int: Validated minimum length

    Raises:
        ValidationError: If the value is not a non-negative integer.
    """
    if min_length is None:
        return 0

    if not _is_integer(min_length):
        raise ValidationError(f"{name} must be an integer, got {type(min_length)}")

    if min_length < 0:
        raise ValidationError(f"{name} must be non-negative, got {min_length}")

    return int(min_length)


def validate_percentile(value: Union[int, float], name: str = "percentile") -> float:
    """
    Validate a percentile given in percent.

    Args:
        value(Union[int, float]): Percentile, 0 to 100
        name(str): Parameter name for error messages

    Returns:
        float: Validated percentile

    Raises:
        ValidationError: If validation fails.
    """
    if value is None:
        raise ValidationError(f"{name} cannot be None")

    if not isinstance(value, numbers.Real) or isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"{name} must be a number, got {type(value)}")

    if not np.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")

    if not 0 <= value <= 100:
        raise ValidationError(f"{name} must be within [0, 100], got {value}")

    return float(value)


def validate_method(method: str, valid_methods, name: str = "method") -> str:
    """
    Validate method parameter.

    Args:
        method(str): Method name
        valid_methods(Sequence[str]): Valid method names
        name(str): Parameter name for error messages

    Returns:
        str: Validated method name

    Raises:
        ValidationError: If validation fails.
    """
    if method is None:
        raise ValidationError(f"{name} cannot be None")

    if not isinstance(method, str):
        raise ValidationError(f"{name} must be a string, got {type(method)}")

    if method not in valid_methods:
        raise ValidationError(f"{name} must be one of {list(valid_methods)}, got '{method}'")

    return method


def validate_sampling_frequency(fs: float, name: str = "sampling_frequency") -> float:
    """
    Validate sampling frequency parameter.

    Args:
        fs(float): Sampling frequency value
        name(str): Parameter name for error messages

    Returns:
        float: Validated sampling frequency

    Raises:
        ValidationError: If validation fails.
    """
    if fs is None:
        raise ValidationError(f"{name} cannot be None")

    if not isinstance(fs, numbers.Real) or isinstance(fs, (bool, np.bool_)):
        raise ValidationError(f"{name} must be a number, got {type(fs)}")

    if not np.isfinite(fs):
        raise ValidationError(f"{name} must be finite, got {fs}")

    if fs <= 0:
        raise ValidationError(f"{name} must be positive, got {fs}")

    return float(fs)


def validate_signal(
    signal: Union[np.ndarray, pd.Series, list],
    name: str = "signal",
    min_length: int = 1,
) -> np.ndarray:
    """
    Validate signal data.

    Args:
        signal(Union[np.ndarray, pd.Series, list]): Signal data
        name(str): Parameter name for error messages
        min_length(int): Minimum required length

    Returns:
        np.ndarray: Validated 1-D signal as numpy array

    Raises:
        ValidationError: If validation fails.
    """
    if signal is None:
        raise ValidationError(f"{name} cannot be None")

    if isinstance(signal, (list, tuple, pd.Series)):
        signal = np.asarray(signal)
    elif not isinstance(signal, np.ndarray):
        raise ValidationError(f"{name} must be array-like, got {type(signal)}")

    signal = np.squeeze(signal)
    if signal.ndim != 1:
        raise ValidationError(f"{name} must be 1-D, got shape {signal.shape}")

    if signal.size < min_length:
        raise ValidationError(
            f"{name} must have at least {min_length} samples, got {signal.size}"
        )

    if np.any(np.isnan(signal)):
        logger.warning(f"{log_tag('VALID','SIGNL')} {name} contains NaN values")

    return signal
