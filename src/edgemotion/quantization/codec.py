"""Conversion between float vectors and model-native tensor buffers.

Integer tensors use affine quantization::

    q = round(v / scale) + zero_point      (saturated to the type's range)
    v = (q - zero_point) * scale

so a round trip loses at most ``scale / 2`` per element inside the
representable range. NaN encodes as the zero point. Decoded values are
float64. Float32 tensors are copied verbatim. Both functions are pure and
safe to call from several threads.
"""

from __future__ import annotations

from typing import Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from edgemotion.exceptions import BufferSizeError, ConfigurationError, FeatureShapeMismatchError
from edgemotion.quantization.descriptor import QuantizationDescriptor

ByteOrder = Literal["native", "little", "big"]

_BYTE_ORDER_CHARS = {"native": "=", "little": "<", "big": ">"}


def _element_dtype(descriptor: QuantizationDescriptor, byte_order: ByteOrder) -> np.dtype:
    try:
        order = _BYTE_ORDER_CHARS[byte_order]
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown byte order {byte_order!r}; expected one of {sorted(_BYTE_ORDER_CHARS)}"
        ) from e
    return descriptor.kind.dtype.newbyteorder(order)


def quantize(values: ArrayLike, descriptor: QuantizationDescriptor) -> NDArray[np.integer]:
    """Map real values to saturated integer codes of ``descriptor.kind``."""
    kind = descriptor.kind
    scaled = np.asarray(values, dtype=np.float64) / descriptor.scale
    scaled = np.where(np.isnan(scaled), 0.0, scaled)
    # Ties round half up.
    q = np.floor(scaled + 0.5) + descriptor.zero_point
    return np.clip(q, kind.qmin, kind.qmax).astype(kind.dtype)


def dequantize(codes: ArrayLike, descriptor: QuantizationDescriptor) -> NDArray[np.float64]:
    """Map integer codes back to real values."""
    q = np.asarray(codes).astype(np.float64)
    return (q - descriptor.zero_point) * descriptor.scale


def encode(
    values: ArrayLike,
    descriptor: QuantizationDescriptor,
    byte_order: ByteOrder = "native",
) -> bytes:
    """Encode a float vector into the tensor buffer described by ``descriptor``.

    Input shorter than the tensor is zero-padded at the end. Out-of-range
    values saturate silently for integer tensors.

    Args:
        values: Flat sequence of at most ``descriptor.element_count`` floats.
        descriptor: Target tensor descriptor.
        byte_order: Byte order of multi-byte elements (float32 only).

    Returns:
        Buffer of exactly ``descriptor.byte_size`` bytes.

    Raises:
        FeatureShapeMismatchError: If there are more values than elements.
    """
    flat = np.asarray(values, dtype=np.float64).ravel()
    count = descriptor.element_count
    if flat.size > count:
        raise FeatureShapeMismatchError(
            f"{flat.size} values do not fit a tensor of {count} elements"
        )

    padded = np.zeros(count, dtype=np.float64)
    padded[: flat.size] = flat

    dtype = _element_dtype(descriptor, byte_order)
    if descriptor.kind.is_quantized:
        return quantize(padded, descriptor).astype(dtype).tobytes()
    return padded.astype(np.float32).astype(dtype).tobytes()


def decode(
    buffer: bytes | bytearray | memoryview,
    descriptor: QuantizationDescriptor,
    byte_order: ByteOrder = "native",
) -> NDArray[np.float64]:
    """Decode a tensor buffer into float values.

    Args:
        buffer: Raw tensor bytes.
        descriptor: Descriptor of the tensor the buffer came from.
        byte_order: Byte order of multi-byte elements (float32 only).

    Returns:
        Float64 array of ``descriptor.element_count`` values.

    Raises:
        BufferSizeError: If the buffer length does not match the descriptor.
    """
    nbytes = memoryview(buffer).nbytes
    if nbytes != descriptor.byte_size:
        raise BufferSizeError(
            f"Buffer holds {nbytes} bytes, expected "
            f"{descriptor.byte_size} for {descriptor.element_count} x {descriptor.kind.value}"
        )

    raw = np.frombuffer(buffer, dtype=_element_dtype(descriptor, byte_order))
    if descriptor.kind.is_quantized:
        return dequantize(raw, descriptor)
    return raw.astype(np.float64)
