"""Window classification on top of an inference engine.

:class:`InferenceAdapter` turns an accelerometer window into a labelled
result: extract features, encode them for the model input tensor, run the
engine, decode the output tensor and pick the top-scoring class.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Sequence, get_args

import numpy as np
from numpy.typing import ArrayLike

from edgemotion.data.features import extract_features
from edgemotion.exceptions import AdapterClosedError, ConfigurationError, FeatureShapeMismatchError
from edgemotion.models.base import InferenceEngine
from edgemotion.quantization.codec import ByteOrder, decode, encode
from edgemotion.utils.logging import get_logger, log_dict

logger = get_logger("models.adapter")

DEFAULT_LABELS: tuple[str, ...] = ("stationary", "pick_up")


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of one classification.

    Attributes:
        label: Name of the winning class.
        index: Index of the winning class in the output tensor.
        confidence: Score of the winning class.
        scores: Dequantized score of every class, in output order.
    """

    label: str
    index: int
    confidence: float
    scores: tuple[float, ...]

    def summary(self, labels: Sequence[str] | None = None) -> str:
        """Human-readable summary, e.g. ``"pick_up (0.871)"``.

        When ``labels`` matches the score count, a second line lists every
        class score.
        """
        head = f"{self.label} ({self.confidence:.3f})"
        if not labels or len(labels) != len(self.scores):
            return head
        detail = "  ".join(f"{name}={score:.3f}" for name, score in zip(labels, self.scores))
        return f"{head}\n{detail}"


def select_top_class(scores: ArrayLike) -> int:
    """Index of the highest score; ties go to the lowest index."""
    return int(np.argmax(np.asarray(scores)))


def resolve_label(labels: Sequence[str], index: int) -> str:
    """Label at ``index``, or ``class_<index>`` past the end of the table."""
    if 0 <= index < len(labels):
        return labels[index]
    return f"class_{index}"


class InferenceAdapter:
    """Classify accelerometer windows with an injected inference engine.

    Tensor descriptors are read from the engine once, at construction.
    Feature extraction and the codec run without locking; only the engine
    call is serialized. The adapter owns the engine and closes it on
    :meth:`close` or when leaving a ``with`` block.

    Attributes:
        labels: Class names, index-aligned with the output tensor.
        byte_order: Byte order used for float32 tensor buffers.
        input_descriptor: Cached descriptor of the model input.
        output_descriptor: Cached descriptor of the model output.
    """

    def __init__(
        self,
        engine: InferenceEngine,
        labels: Sequence[str] = DEFAULT_LABELS,
        byte_order: ByteOrder = "native",
    ):
        """Initialize the adapter.

        Args:
            engine: Loaded inference engine. Ownership passes to the adapter.
            labels: Class names in output order.
            byte_order: "native", "little" or "big".

        Raises:
            ConfigurationError: If ``byte_order`` is not recognised.
        """
        if byte_order not in get_args(ByteOrder):
            raise ConfigurationError(f"Unknown byte order: {byte_order!r}")

        self._engine = engine
        self._lock = threading.Lock()
        self._closed = False
        self.labels = tuple(labels)
        self.byte_order = byte_order
        self.input_descriptor = engine.get_input_descriptor()
        self.output_descriptor = engine.get_output_descriptor()

        log_dict(logger, self.input_descriptor.as_dict(), title="Input tensor", level=logging.DEBUG)
        log_dict(logger, self.output_descriptor.as_dict(), title="Output tensor", level=logging.DEBUG)
        if len(self.labels) != self.output_descriptor.last_dim:
            logger.warning(
                f"{len(self.labels)} labels configured for "
                f"{self.output_descriptor.last_dim} output classes"
            )

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def num_features(self) -> int:
        """Number of features the model input expects."""
        return self.input_descriptor.last_dim

    def classify(self, window: ArrayLike) -> ClassificationResult:
        """Classify one accelerometer window.

        Args:
            window: Samples of shape (n_samples, 3).

        Returns:
            Classification result.

        Raises:
            AdapterClosedError: If the adapter has been closed.
            FeatureShapeMismatchError: If the model does not take 39 features.
        """
        self._ensure_open()
        return self.classify_features(extract_features(window))

    def classify_features(self, features: ArrayLike) -> ClassificationResult:
        """Classify a precomputed feature vector.

        Args:
            features: Flat vector of ``num_features`` values.

        Returns:
            Classification result.

        Raises:
            AdapterClosedError: If the adapter has been closed.
            FeatureShapeMismatchError: If the vector length is wrong.
            BufferSizeError: If the engine returns a buffer of the wrong size.
        """
        self._ensure_open()
        vector = np.asarray(features, dtype=np.float32).ravel()
        if vector.size != self.num_features:
            raise FeatureShapeMismatchError(
                f"Expected {self.num_features} features, got {vector.size}"
            )

        input_buffer = encode(vector, self.input_descriptor, self.byte_order)
        with self._lock:
            self._ensure_open()
            output_buffer = self._engine.run(input_buffer)

        decoded = decode(output_buffer, self.output_descriptor, self.byte_order)
        scores = decoded.reshape(-1, self.output_descriptor.last_dim)[0]

        index = select_top_class(scores)
        result = ClassificationResult(
            label=resolve_label(self.labels, index),
            index=index,
            confidence=float(scores[index]),
            scores=tuple(float(s) for s in scores),
        )
        logger.debug(f"Classified as {result.label} ({result.confidence:.3f})")
        return result

    def close(self) -> None:
        """Release the engine. Waits for an in-flight run; safe to call twice."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._engine.close()
        logger.debug("Inference adapter closed")

    def _ensure_open(self) -> None:
        if self._closed:
            raise AdapterClosedError("Inference adapter has been closed")

    def __enter__(self) -> "InferenceAdapter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
