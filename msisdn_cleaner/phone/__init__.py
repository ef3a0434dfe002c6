"""Phone number engine: normalize, validate, classify and autofix +254 numbers.

Pure functions only; nothing in this package performs I/O or raises on bad input.
"""

from .autofix import autofix, was_fixed
from .classifier import classify_carrier, local_prefix
from .normalizer import normalize
from .validator import ERR_LENGTH, ERR_MOBILE, ERR_PREFIX, validate

__all__ = [
    "normalize",
    "validate",
    "classify_carrier",
    "local_prefix",
    "autofix",
    "was_fixed",
    "ERR_PREFIX",
    "ERR_LENGTH",
    "ERR_MOBILE",
]
