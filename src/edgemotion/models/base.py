"""Abstract interface of an inference engine.

An engine wraps a loaded model. It reports the layout and quantization of
its input and output tensors and runs the model on raw tensor buffers. The
adapter never looks inside the model.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from edgemotion.quantization.descriptor import QuantizationDescriptor


class InferenceEngine(ABC):
    """Abstract base class for model execution engines.

    Implementations need not be reentrant: :class:`InferenceAdapter`
    serializes calls to :meth:`run`.
    """

    @abstractmethod
    def get_input_descriptor(self) -> QuantizationDescriptor:
        """Describe the model's input tensor.

        Returns:
            Descriptor of input tensor 0.
        """
        pass

    @abstractmethod
    def get_output_descriptor(self) -> QuantizationDescriptor:
        """Describe the model's output tensor.

        Returns:
            Descriptor of output tensor 0.
        """
        pass

    @abstractmethod
    def run(self, input_buffer: bytes) -> bytes:
        """Run the model once.

        Args:
            input_buffer: Encoded input tensor.

        Returns:
            Raw output tensor bytes.
        """
        pass

    def close(self) -> None:
        """Release the underlying model. The default does nothing."""
