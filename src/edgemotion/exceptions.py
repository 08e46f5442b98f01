"""Custom exceptions for edgemotion.

All errors raised by the feature extractor, the quantization codec and the
inference adapter derive from :class:`EdgeMotionError`. Shape and buffer
errors also subclass :class:`ValueError`.
"""


class EdgeMotionError(Exception):
    """Base exception for all edgemotion errors."""


class ConfigurationError(EdgeMotionError):
    """Raised when a configuration file is missing or incomplete."""


class InvalidWindowError(EdgeMotionError, ValueError):
    """Raised when a window is not shaped (n_samples, 3)."""


class EmptyWindowError(InvalidWindowError):
    """Raised for a zero-sample window when strict extraction is requested."""


class FeatureShapeMismatchError(EdgeMotionError, ValueError):
    """Raised when a feature vector does not fit the model input tensor."""


class BufferSizeError(EdgeMotionError, ValueError):
    """Raised when a tensor buffer has the wrong byte length."""


class InvalidDescriptorError(EdgeMotionError, ValueError):
    """Raised when quantization parameters violate their invariants."""


class UnsupportedTensorTypeError(InvalidDescriptorError):
    """Raised when a tensor element type is not int8, uint8 or float32."""


class AdapterClosedError(EdgeMotionError):
    """Raised when the inference adapter is used after close()."""
