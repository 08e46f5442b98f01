"""Tests for recording loading and windowing."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from edgemotion.data.preprocessing import WindowConfig, create_windows, load_recording
from edgemotion.exceptions import InvalidWindowError


class TestWindowConfig:
    """Tests for WindowConfig dataclass."""

    def test_default_values(self):
        config = WindowConfig()
        assert config.window_size == 1.5
        assert config.overlap == 0.5
        assert config.sampling_rate == 50

    def test_window_samples(self):
        assert WindowConfig(window_size=1.5, sampling_rate=50).window_samples == 75

    def test_step_samples(self):
        # 75 samples * 0.5 = 37.5, int() = 37
        assert WindowConfig(window_size=1.5, overlap=0.5, sampling_rate=50).step_samples == 37

    def test_no_overlap(self):
        config = WindowConfig(window_size=2.0, overlap=0.0, sampling_rate=100)
        assert config.window_samples == 200
        assert config.step_samples == 200

    @pytest.mark.parametrize("overlap", [-0.1, 1.0, 1.5])
    def test_invalid_overlap(self, overlap):
        with pytest.raises(ValueError):
            WindowConfig(overlap=overlap)

    def test_empty_window_rejected(self):
        with pytest.raises(ValueError):
            WindowConfig(window_size=0.01, sampling_rate=50)


class TestCreateWindows:
    """Tests for create_windows function."""

    def test_window_count(self):
        data = np.random.randn(500, 3).astype(np.float32)
        windows, timestamps = create_windows(data, WindowConfig())
        # (500 - 75) // 37 + 1 = 12
        assert windows.shape == (12, 75, 3)
        assert timestamps is None

    def test_window_content(self):
        data = np.arange(30, dtype=np.float32).reshape(10, 3)
        config = WindowConfig(window_size=0.4, overlap=0.5, sampling_rate=10)
        windows, _ = create_windows(data, config)
        assert windows.shape == (4, 4, 3)
        np.testing.assert_array_equal(windows[1], data[2:6])

    def test_timestamps(self):
        data = np.zeros((100, 3), dtype=np.float32)
        ts = np.arange(100, dtype=np.float64) / 50
        windows, window_ts = create_windows(data, WindowConfig(window_size=1.0, overlap=0.0), ts)
        assert len(windows) == 2
        np.testing.assert_allclose(window_ts, [0.0, 1.0])

    def test_short_recording(self):
        windows, _ = create_windows(np.zeros((10, 3)), WindowConfig())
        assert windows.shape == (0, 75, 3)


class TestLoadRecording:
    """Tests for load_recording function."""

    def test_load_with_timestamps(self, tmp_path):
        path = tmp_path / "rec.csv"
        pd.DataFrame(
            {
                "timestamp": [0.0, 0.02, 0.04],
                "acc_x": [1.0, 2.0, 3.0],
                "acc_y": [0.0, 0.0, 0.0],
                "acc_z": [9.8, 9.8, 9.8],
            }
        ).to_csv(path, index=False)

        data, timestamps = load_recording(path)
        assert data.shape == (3, 3)
        assert data.dtype == np.float32
        np.testing.assert_allclose(data[:, 0], [1.0, 2.0, 3.0])
        np.testing.assert_allclose(timestamps, [0.0, 0.02, 0.04])

    def test_load_without_timestamps(self, tmp_path):
        path = tmp_path / "rec.csv"
        pd.DataFrame({"acc_x": [1.0], "acc_y": [2.0], "acc_z": [3.0]}).to_csv(path, index=False)
        data, timestamps = load_recording(path)
        np.testing.assert_allclose(data, [[1.0, 2.0, 3.0]])
        assert timestamps is None

    def test_missing_column(self, tmp_path):
        path = tmp_path / "rec.csv"
        pd.DataFrame({"acc_x": [1.0], "acc_y": [2.0]}).to_csv(path, index=False)
        with pytest.raises(InvalidWindowError, match="acc_z"):
            load_recording(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_recording(tmp_path / "absent.csv")
