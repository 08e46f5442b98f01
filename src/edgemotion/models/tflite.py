"""TensorFlow Lite inference engine.

Requires the ``tflite`` extra (TensorFlow). The import is deferred until an
engine is created so the rest of the package works without it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np

from edgemotion.models.base import InferenceEngine
from edgemotion.quantization.descriptor import ElementKind, QuantizationDescriptor
from edgemotion.utils.logging import ContextLogger, get_logger, log_dict


def descriptor_from_details(details: dict[str, Any]) -> QuantizationDescriptor:
    """Build a descriptor from a TFLite tensor-details dictionary.

    Args:
        details: One entry of ``get_input_details()`` or ``get_output_details()``.

    Returns:
        Descriptor with the tensor's shape, type and quantization.
    """
    kind = ElementKind.from_dtype(details["dtype"])
    scale, zero_point = details.get("quantization", (0.0, 0))
    if not kind.is_quantized:
        scale, zero_point = 1.0, 0
    return QuantizationDescriptor(
        kind=kind,
        scale=scale,
        zero_point=zero_point,
        shape=tuple(details["shape"]),
    )


class TFLiteEngine(InferenceEngine):
    """Run a ``.tflite`` model through ``tf.lite.Interpreter``.

    Only tensor 0 of the input and output is used. Buffers are exchanged in
    native byte order.
    """

    def __init__(self, model_path: str | Path, num_threads: int | None = None):
        """Load the model and allocate its tensors.

        Args:
            model_path: Path to the ``.tflite`` file.
            num_threads: Interpreter threads; None lets TFLite decide.

        Raises:
            FileNotFoundError: If the model file does not exist.
        """
        import tensorflow as tf

        model_path = Path(model_path)
        if not model_path.exists():
            raise FileNotFoundError(f"Model file not found: {model_path}")

        self.model_path = model_path
        self.logger = ContextLogger(get_logger("models.tflite"), {"model": model_path.name})

        self._interpreter = tf.lite.Interpreter(model_path=str(model_path), num_threads=num_threads)
        self._interpreter.allocate_tensors()
        self._input = self._interpreter.get_input_details()[0]
        self._output = self._interpreter.get_output_details()[0]

        log_dict(self.logger, {
            "input_shape": list(self._input["shape"]),
            "input_dtype": np.dtype(self._input["dtype"]).name,
            "input_quantization": self._input["quantization"],
            "output_shape": list(self._output["shape"]),
            "output_dtype": np.dtype(self._output["dtype"]).name,
            "output_quantization": self._output["quantization"],
        }, title="Loaded TFLite model")

    def get_input_descriptor(self) -> QuantizationDescriptor:
        return descriptor_from_details(self._input)

    def get_output_descriptor(self) -> QuantizationDescriptor:
        return descriptor_from_details(self._output)

    def run(self, input_buffer: bytes) -> bytes:
        tensor = np.frombuffer(input_buffer, dtype=self._input["dtype"]).reshape(self._input["shape"])
        self._interpreter.set_tensor(self._input["index"], tensor)
        self._interpreter.invoke()
        return np.ascontiguousarray(self._interpreter.get_tensor(self._output["index"])).tobytes()

    def close(self) -> None:
        # The interpreter frees its arena once unreferenced.
        self._interpreter = None
        self.logger.info("Released TFLite interpreter")
