"""Tensor element kinds and per-tensor quantization descriptors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from edgemotion.exceptions import InvalidDescriptorError, UnsupportedTensorTypeError


class ElementKind(str, Enum):
    """Element type of a model tensor."""

    INT8 = "int8"
    UINT8 = "uint8"
    FLOAT32 = "float32"

    @property
    def byte_width(self) -> int:
        return 4 if self is ElementKind.FLOAT32 else 1

    @property
    def is_quantized(self) -> bool:
        return self is not ElementKind.FLOAT32

    @property
    def dtype(self) -> np.dtype:
        """NumPy dtype in native byte order."""
        return np.dtype(self.value)

    @property
    def qmin(self) -> int:
        return int(np.iinfo(self.dtype).min)

    @property
    def qmax(self) -> int:
        return int(np.iinfo(self.dtype).max)

    @classmethod
    def from_dtype(cls, dtype: Any) -> "ElementKind":
        """Map a NumPy dtype (or anything ``np.dtype`` accepts) to a kind.

        Raises:
            UnsupportedTensorTypeError: For any type other than int8, uint8
                or float32.
        """
        try:
            name = np.dtype(dtype).name
        except TypeError as e:
            raise UnsupportedTensorTypeError(f"Unsupported tensor type: {dtype!r}") from e
        try:
            return cls(name)
        except ValueError as e:
            raise UnsupportedTensorTypeError(f"Unsupported tensor type: {name}") from e


@dataclass(frozen=True)
class QuantizationDescriptor:
    """Affine quantization parameters and layout of one model tensor.

    Attributes:
        kind: Element type stored in the tensor buffer.
        scale: Real value of one quantization step. Ignored for float32.
        zero_point: Integer code that represents real 0. Ignored for float32.
        shape: Tensor shape as reported by the engine, e.g. ``(1, 39)``.
    """

    kind: ElementKind
    scale: float = 1.0
    zero_point: int = 0
    shape: tuple[int, ...] = (1,)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ElementKind(self.kind))
        object.__setattr__(self, "scale", float(self.scale))
        object.__setattr__(self, "zero_point", int(self.zero_point))
        object.__setattr__(self, "shape", tuple(int(d) for d in self.shape))

        if not self.shape or any(d < 1 for d in self.shape):
            raise InvalidDescriptorError(f"Tensor shape must be non-empty and positive: {self.shape}")
        if self.kind.is_quantized:
            if not (math.isfinite(self.scale) and self.scale > 0):
                raise InvalidDescriptorError(f"Quantization scale must be positive, got {self.scale}")
            if not self.kind.qmin <= self.zero_point <= self.kind.qmax:
                raise InvalidDescriptorError(
                    f"Zero point {self.zero_point} outside {self.kind.value} range "
                    f"[{self.kind.qmin}, {self.kind.qmax}]"
                )

    @classmethod
    def for_count(
        cls,
        kind: ElementKind | str,
        element_count: int,
        scale: float = 1.0,
        zero_point: int = 0,
    ) -> "QuantizationDescriptor":
        """Build a descriptor for a flat tensor of ``element_count`` values."""
        return cls(ElementKind(kind), scale, zero_point, (element_count,))

    @property
    def element_count(self) -> int:
        return math.prod(self.shape)

    @property
    def last_dim(self) -> int:
        """Size of the innermost dimension (features in, classes out)."""
        return self.shape[-1]

    @property
    def byte_size(self) -> int:
        return self.element_count * self.kind.byte_width

    def as_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "shape": list(self.shape),
            "scale": self.scale,
            "zero_point": self.zero_point,
        }
