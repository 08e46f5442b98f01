"""edgemotion: motion classification with quantized on-device models.

This package provides tools for:
- Extracting a fixed 39-feature statistical summary from accelerometer windows
- Encoding features for, and decoding scores from, int8/uint8/float32 tensors
- Classifying windows through a pluggable inference engine (TFLite included)
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("edgemotion")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = ["__version__"]
