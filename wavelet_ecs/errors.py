"""Errors raised by the wavelet transform engine.

All of them derive from ValueError so callers that already catch ValueError
for bad arguments keep working. Each is raised by a precondition check before
any filter kernel runs for the level being processed.
"""

from __future__ import annotations


class WaveletError(ValueError):
    """Base class for wavelet transform precondition failures."""


class ShapeMismatchError(WaveletError):
    """Input and output dimensions do not match the transform relationship."""


class BufferTooSmallError(WaveletError):
    """The wavelet support is larger than the image it is applied to."""


class StorageSizeMismatchError(WaveletError):
    """A caller supplied scratch image has the wrong dimensions."""
