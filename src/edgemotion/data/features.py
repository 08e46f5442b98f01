"""39-feature statistical summary of an accelerometer window.

Feature layout (index order):
    0-2     mean of X, Y, Z
    3-5     population std of X, Y, Z
    6-8     min of X, Y, Z
    9-11    max of X, Y, Z
    12-14   RMS of X, Y, Z
    15-17   skewness of X, Y, Z
    18-20   kurtosis of X, Y, Z (fourth standardized moment, not excess)
    21-27   mean, std, min, max, RMS, skewness, kurtosis of the magnitude
    28-30   Pearson correlation XY, YZ, XZ
    31-34   energy (sum of squares) of X, Y, Z, magnitude
    35-38   range of X, Y, Z, magnitude

All statistics are accumulated in float64 and narrowed to float32 at the end.
Terms that would divide by a zero standard deviation are defined as 0, so a
constant window always yields a finite vector.
"""

from __future__ import annotations

from typing import List

import numpy as np
from numpy.typing import ArrayLike, NDArray

from edgemotion.exceptions import EmptyWindowError, InvalidWindowError

NUM_FEATURES = 39

FEATURE_NAMES: List[str] = [
    "acc_x_mean", "acc_y_mean", "acc_z_mean",
    "acc_x_std", "acc_y_std", "acc_z_std",
    "acc_x_min", "acc_y_min", "acc_z_min",
    "acc_x_max", "acc_y_max", "acc_z_max",
    "acc_x_rms", "acc_y_rms", "acc_z_rms",
    "acc_x_skewness", "acc_y_skewness", "acc_z_skewness",
    "acc_x_kurtosis", "acc_y_kurtosis", "acc_z_kurtosis",
    "magnitude_mean", "magnitude_std", "magnitude_min", "magnitude_max",
    "magnitude_rms", "magnitude_skewness", "magnitude_kurtosis",
    "correlation_xy", "correlation_yz", "correlation_xz",
    "acc_x_energy", "acc_y_energy", "acc_z_energy", "magnitude_energy",
    "acc_x_range", "acc_y_range", "acc_z_range", "magnitude_range",
]

# Column pairs for correlation, in output order: XY, YZ, XZ.
_CORRELATION_PAIRS = ((0, 1), (1, 2), (0, 2))


def get_feature_names() -> List[str]:
    """Return the 39 feature names in vector order."""
    return list(FEATURE_NAMES)


def compute_magnitude(data: ArrayLike) -> NDArray[np.float64]:
    """Compute per-sample acceleration magnitude in float64.

    Args:
        data: Accelerometer data of shape (..., 3).

    Returns:
        Magnitude array of shape (...,).
    """
    data = np.asarray(data, dtype=np.float64)
    return np.sqrt(np.sum(data**2, axis=-1))


def _as_window(window: ArrayLike) -> NDArray[np.float64]:
    data = np.asarray(window, dtype=np.float64)
    if data.ndim == 1 and data.size == 0:
        return data.reshape(0, 3)
    if data.ndim != 2 or data.shape[1] != 3:
        raise InvalidWindowError(
            f"Expected window of shape (n_samples, 3), got {data.shape}"
        )
    return data


def _safe_divide(num: NDArray[np.float64], den: NDArray[np.float64]) -> NDArray[np.float64]:
    """Element-wise num / den with 0 wherever den is 0."""
    out = np.zeros(np.broadcast(num, den).shape, dtype=np.float64)
    np.divide(num, den, out=out, where=den != 0)
    return out


def _empty_vector() -> NDArray[np.float32]:
    vector = np.zeros(NUM_FEATURES, dtype=np.float32)
    vector.flags.writeable = False
    return vector


def extract_features(window: ArrayLike, strict: bool = False) -> NDArray[np.float32]:
    """Extract the 39-feature vector from one window.

    Args:
        window: Accelerometer window of shape (n_samples, 3). Not modified.
        strict: Raise :class:`EmptyWindowError` for an empty window instead of
            returning the all-zero vector.

    Returns:
        Read-only float32 array of shape (39,).

    Raises:
        InvalidWindowError: If the window is not shaped (n_samples, 3).
        EmptyWindowError: If the window is empty and ``strict`` is set.
    """
    data = _as_window(window)
    n = data.shape[0]
    if n == 0:
        if strict:
            raise EmptyWindowError("Cannot extract features from an empty window")
        return _empty_vector()

    # Columns: x, y, z, magnitude
    cols = np.column_stack([data, compute_magnitude(data)])

    col_min = cols.min(axis=0)
    col_max = cols.max(axis=0)
    # Identical samples are resolved exactly rather than through summation.
    constant = col_min == col_max

    mean = np.where(constant, col_min, cols.sum(axis=0) / n)
    dev = np.where(constant, 0.0, cols - mean)

    var = np.sum(dev**2, axis=0) / n
    std = np.sqrt(var)
    skewness = _safe_divide(np.sum(dev**3, axis=0) / n, std**3)
    kurtosis = _safe_divide(np.sum(dev**4, axis=0) / n, var**2)

    energy = np.sum(cols**2, axis=0)
    rms = np.where(constant, np.abs(col_min), np.sqrt(energy / n))

    covariance = np.array([np.sum(dev[:, a] * dev[:, b]) / n for a, b in _CORRELATION_PAIRS])
    std_product = np.array([std[a] * std[b] for a, b in _CORRELATION_PAIRS])
    correlation = _safe_divide(covariance, std_product)

    axes = slice(0, 3)
    features = np.concatenate(
        [
            mean[axes],
            std[axes],
            col_min[axes],
            col_max[axes],
            rms[axes],
            skewness[axes],
            kurtosis[axes],
            [mean[3], std[3], col_min[3], col_max[3], rms[3], skewness[3], kurtosis[3]],
            correlation,
            energy,
            col_max - col_min,
        ]
    )

    vector = features.astype(np.float32)
    vector.flags.writeable = False
    return vector


def extract_features_batch(windows: ArrayLike) -> NDArray[np.float32]:
    """Extract features from a stack of equal-length windows.

    Args:
        windows: Array of shape (n_windows, n_samples, 3).

    Returns:
        Feature matrix of shape (n_windows, 39).
    """
    windows = np.asarray(windows, dtype=np.float64)
    if windows.ndim != 3:
        raise InvalidWindowError(
            f"Expected windows of shape (n_windows, n_samples, 3), got {windows.shape}"
        )

    feature_matrix = np.zeros((windows.shape[0], NUM_FEATURES), dtype=np.float32)
    for i in range(windows.shape[0]):
        feature_matrix[i] = extract_features(windows[i])
    return feature_matrix
