"""Inference module for edgemotion.

This module provides the engine interface, the TFLite engine and the
adapter that classifies windows with them.
"""

from edgemotion.models.adapter import (
    DEFAULT_LABELS,
    ClassificationResult,
    InferenceAdapter,
    resolve_label,
    select_top_class,
)
from edgemotion.models.base import InferenceEngine
from edgemotion.models.factory import create_adapter_from_config, create_engine

__all__ = [
    # Interface
    "InferenceEngine",
    # Adapter
    "DEFAULT_LABELS",
    "ClassificationResult",
    "InferenceAdapter",
    "resolve_label",
    "select_top_class",
    # Factory
    "create_adapter_from_config",
    "create_engine",
]
