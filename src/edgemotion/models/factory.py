"""Factory functions for configuration-based adapter construction."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf

from edgemotion.models.adapter import InferenceAdapter
from edgemotion.models.base import InferenceEngine
from edgemotion.utils.config import get_nested, validate_config
from edgemotion.utils.logging import get_logger

logger = get_logger("models.factory")


def create_engine(model_path: str | Path, num_threads: int | None = None) -> InferenceEngine:
    """Open a model file with the engine matching its extension.

    Args:
        model_path: Path to the model file.
        num_threads: Optional interpreter thread count.

    Returns:
        Loaded inference engine.

    Raises:
        ValueError: If the file type is not supported.
    """
    model_path = Path(model_path)
    suffix = model_path.suffix.lower()

    if suffix == ".tflite":
        from edgemotion.models.tflite import TFLiteEngine

        return TFLiteEngine(model_path, num_threads=num_threads)

    raise ValueError(f"Unsupported model type: {suffix or model_path.name}. Supported types: .tflite")


def create_adapter_from_config(
    config: DictConfig | dict[str, Any],
    engine: InferenceEngine | None = None,
) -> InferenceAdapter:
    """Create an inference adapter from a configuration object.

    Args:
        config: Adapter configuration (see ``configs/adapter.yaml``).
        engine: Already-loaded engine. When None, the engine is opened from
            ``model.path``.

    Returns:
        Ready-to-use adapter.

    Raises:
        ConfigurationError: If a required key is missing.

    Example:
        >>> config = load_adapter_config("configs/adapter.yaml")
        >>> with create_adapter_from_config(config) as adapter:
        ...     result = adapter.classify(window)
    """
    if not isinstance(config, DictConfig):
        config = OmegaConf.create(config)

    if engine is None:
        validate_config(config)
        engine = create_engine(config.model.path, num_threads=get_nested(config, "model.num_threads"))
    else:
        validate_config(config, ["labels"])

    labels = list(config.labels)
    byte_order = get_nested(config, "codec.byte_order", "native")
    logger.info(f"Creating adapter for {len(labels)} classes ({byte_order} byte order)")
    return InferenceAdapter(engine, labels=labels, byte_order=byte_order)
