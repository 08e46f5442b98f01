"""Data module for edgemotion.

This module provides recording loading, windowing and the 39-feature
statistical extractor.
"""

from edgemotion.data.features import (
    FEATURE_NAMES,
    NUM_FEATURES,
    compute_magnitude,
    extract_features,
    extract_features_batch,
    get_feature_names,
)
from edgemotion.data.preprocessing import (
    AXIS_COLUMNS,
    WindowConfig,
    create_windows,
    load_recording,
)

__all__ = [
    # features
    "FEATURE_NAMES",
    "NUM_FEATURES",
    "compute_magnitude",
    "extract_features",
    "extract_features_batch",
    "get_feature_names",
    # preprocessing
    "AXIS_COLUMNS",
    "WindowConfig",
    "create_windows",
    "load_recording",
]
