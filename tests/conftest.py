"""Pytest fixtures for edgemotion tests."""

from __future__ import annotations

import numpy as np
import pytest

from edgemotion.models.base import InferenceEngine
from edgemotion.quantization import ElementKind, QuantizationDescriptor, encode


class FakeEngine(InferenceEngine):
    """Deterministic engine double that returns fixed scores."""

    def __init__(
        self,
        input_descriptor: QuantizationDescriptor,
        output_descriptor: QuantizationDescriptor,
        scores=None,
        output_buffer: bytes | None = None,
    ):
        self.input_descriptor = input_descriptor
        self.output_descriptor = output_descriptor
        self.scores = scores if scores is not None else [0.0] * output_descriptor.element_count
        self.output_buffer = output_buffer
        self.calls: list[bytes] = []
        self.close_count = 0

    def get_input_descriptor(self) -> QuantizationDescriptor:
        return self.input_descriptor

    def get_output_descriptor(self) -> QuantizationDescriptor:
        return self.output_descriptor

    def run(self, input_buffer: bytes) -> bytes:
        self.calls.append(input_buffer)
        if self.output_buffer is not None:
            return self.output_buffer
        return encode(self.scores, self.output_descriptor)

    def close(self) -> None:
        self.close_count += 1


@pytest.fixture
def sample_window():
    """Generate synthetic accelerometer window (1.5s @ 50Hz)."""
    np.random.seed(42)
    return np.random.randn(75, 3).astype(np.float32)


@pytest.fixture
def constant_window():
    """Generate constant signal for testing."""
    return np.tile(np.array([0.1, -0.2, 9.81], dtype=np.float32), (75, 1))


@pytest.fixture
def int8_input_descriptor():
    """Input tensor of a typical int8 motion model."""
    return QuantizationDescriptor(ElementKind.INT8, scale=0.05, zero_point=-3, shape=(1, 39))


@pytest.fixture
def int8_output_descriptor():
    """Softmax output quantized to int8 (scale 1/256, zero point -128)."""
    return QuantizationDescriptor(ElementKind.INT8, scale=1 / 256, zero_point=-128, shape=(1, 2))


@pytest.fixture
def make_engine(int8_input_descriptor, int8_output_descriptor):
    """Factory for fake engines; defaults to the int8 descriptors."""

    def _make(scores=None, input_descriptor=None, output_descriptor=None, output_buffer=None):
        return FakeEngine(
            input_descriptor or int8_input_descriptor,
            output_descriptor or int8_output_descriptor,
            scores=scores,
            output_buffer=output_buffer,
        )

    return _make
