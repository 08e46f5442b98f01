"""Quantization module for edgemotion.

This module converts float feature and score vectors to and from the byte
buffers a quantized model consumes and produces.
"""

from edgemotion.quantization.codec import (
    ByteOrder,
    decode,
    dequantize,
    encode,
    quantize,
)
from edgemotion.quantization.descriptor import ElementKind, QuantizationDescriptor

__all__ = [
    "ByteOrder",
    "ElementKind",
    "QuantizationDescriptor",
    "decode",
    "dequantize",
    "encode",
    "quantize",
]
