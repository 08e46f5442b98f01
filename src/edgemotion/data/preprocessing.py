"""Recording loading and windowing utilities.

A recording is a CSV file of accelerometer samples with one column per
axis. It is sliced into fixed-length, possibly overlapping windows that the
inference adapter classifies one at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from edgemotion.exceptions import InvalidWindowError

AXIS_COLUMNS = ("acc_x", "acc_y", "acc_z")


@dataclass(frozen=True)
class WindowConfig:
    """Configuration for signal windowing.

    Attributes:
        window_size: Window duration in seconds.
        overlap: Overlap ratio between consecutive windows (0-1).
        sampling_rate: Signal sampling rate in Hz.
    """

    window_size: float = 1.5
    overlap: float = 0.5
    sampling_rate: int = 50

    def __post_init__(self) -> None:
        if not 0 <= self.overlap < 1:
            raise ValueError(f"overlap must be in [0, 1), got {self.overlap}")
        if self.window_samples < 1:
            raise ValueError("window must contain at least one sample")

    @property
    def window_samples(self) -> int:
        """Number of samples per window."""
        return int(self.window_size * self.sampling_rate)

    @property
    def step_samples(self) -> int:
        """Number of samples between window starts."""
        return max(1, int(self.window_samples * (1 - self.overlap)))


def load_recording(
    path: str | Path,
    columns: Sequence[str] = AXIS_COLUMNS,
) -> tuple[NDArray[np.float32], NDArray[np.float64] | None]:
    """Load accelerometer samples from a CSV file.

    Args:
        path: CSV file path.
        columns: Names of the x, y and z columns.

    Returns:
        Tuple of (data, timestamps). ``data`` has shape (n_samples, 3);
        ``timestamps`` is None when the file has no ``timestamp`` column.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidWindowError: If any axis column is missing.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Recording not found: {path}")

    df = pd.read_csv(path)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise InvalidWindowError(f"Recording {path} is missing columns: {missing}")

    data = df[list(columns)].to_numpy(dtype=np.float32)
    timestamps = df["timestamp"].to_numpy(dtype=np.float64) if "timestamp" in df else None
    return data, timestamps


def create_windows(
    data: NDArray[np.floating],
    config: WindowConfig,
    timestamps: NDArray[np.float64] | None = None,
) -> tuple[NDArray[np.float32], NDArray[np.float64] | None]:
    """Slice continuous data into complete, overlapping windows.

    Trailing samples that do not fill a whole window are dropped.

    Args:
        data: Continuous data of shape (n_samples, 3).
        config: Windowing configuration.
        timestamps: Optional per-sample timestamps.

    Returns:
        Tuple of (windows, window_timestamps). ``windows`` has shape
        (n_windows, window_samples, 3); ``window_timestamps`` holds the
        timestamp of each window's first sample, or None.
    """
    n_samples = data.shape[0]
    window_size = config.window_samples
    step_size = config.step_samples

    n_windows = max(0, (n_samples - window_size) // step_size + 1)

    windows = np.zeros((n_windows, window_size, data.shape[1]), dtype=np.float32)
    window_timestamps = np.zeros(n_windows, dtype=np.float64) if timestamps is not None else None

    for i in range(n_windows):
        start = i * step_size
        windows[i] = data[start : start + window_size]
        if window_timestamps is not None:
            window_timestamps[i] = timestamps[start]

    return windows, window_timestamps
