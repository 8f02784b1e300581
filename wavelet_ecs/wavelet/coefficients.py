"""Wavelet coefficient sets.

A coefficient set holds the scaling (low-pass) and wavelet (high-pass) taps of
one direction of a transform, plus the offset of each sequence. The offset is
the position, relative to ``2k``, of the first tap used to produce pair ``k``:

    s[k] = sum_i scaling[i] * x[2k + offset_scaling + i]
    d[k] = sum_i wavelet[i] * x[2k + offset_wavelet + i]

Inverse sets use the same fields but are read as "scatter" taps: scaling
coefficient ``a[k]`` contributes ``a[k] * scaling[i]`` to sample
``2k + offset_scaling + i``.
"""

from __future__ import annotations

import math
from typing import Any, ClassVar

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


def round_div(total: Any, denominator: int) -> Any:
    """Integer division rounding half up. Works on ints and int numpy arrays."""
    if denominator == 1:
        return total
    return (total + denominator // 2) // denominator


class WaveletCoefficients(BaseModel):
    """Floating point wavelet taps.

    Sums are accumulated in double precision and stored in the sample kind of
    the destination image.

    Attributes:
        scaling: Scaling (low-pass) taps
        wavelet: Wavelet (high-pass) taps
        offset_scaling: Alignment of the first scaling tap relative to 2k
        offset_wavelet: Alignment of the first wavelet tap relative to 2k
    """

    model_config = ConfigDict(frozen=True)

    sample_type: ClassVar[type] = float
    accumulator_dtype: ClassVar[Any] = np.float64

    scaling: tuple[float, ...]
    wavelet: tuple[float, ...]
    offset_scaling: int = 0
    offset_wavelet: int = 0

    @field_validator("scaling", "wavelet")
    @classmethod
    def _not_empty(cls, taps: tuple[Any, ...]) -> tuple[Any, ...]:
        if len(taps) == 0:
            raise ValueError("tap sequence must not be empty")
        return taps

    @property
    def scaling_length(self) -> int:
        return len(self.scaling)

    @property
    def wavelet_length(self) -> int:
        return len(self.wavelet)

    @property
    def max_length(self) -> int:
        """Length of the longest tap sequence."""
        return max(len(self.scaling), len(self.wavelet))

    @property
    def min_offset(self) -> int:
        """Smallest position, relative to 2k, touched by either sequence."""
        return min(self.offset_scaling, self.offset_wavelet)

    @property
    def max_extent(self) -> int:
        """Largest position, relative to 2k, touched by either sequence."""
        return max(
            self.offset_scaling + len(self.scaling) - 1,
            self.offset_wavelet + len(self.wavelet) - 1,
        )

    def finish_scaling(self, total: Any) -> Any:
        return total

    def finish_wavelet(self, total: Any) -> Any:
        return total

    def combine(self, scaling: Any, wavelet: Any) -> Any:
        """Reconstructed sample from the raw scaling and wavelet band sums."""
        return self.finish_scaling(scaling) + self.finish_wavelet(wavelet)


class IntWaveletCoefficients(WaveletCoefficients):
    """Integer wavelet taps with a denominator per sequence.

    Each band sum is computed exactly with integers and then divided by its
    denominator, rounding half up. Inverse sets add the two band sums first and
    round once.

    Attributes:
        denominator_scaling: Divisor applied to scaling sums
        denominator_wavelet: Divisor applied to wavelet sums
    """

    sample_type: ClassVar[type] = int
    accumulator_dtype: ClassVar[Any] = np.int64

    scaling: tuple[int, ...]
    wavelet: tuple[int, ...]
    denominator_scaling: int = Field(default=1, ge=1)
    denominator_wavelet: int = Field(default=1, ge=1)

    def finish_scaling(self, total: Any) -> Any:
        return round_div(total, self.denominator_scaling)

    def finish_wavelet(self, total: Any) -> Any:
        return round_div(total, self.denominator_wavelet)

    def combine(self, scaling: Any, wavelet: Any) -> Any:
        # single rounding over the common denominator
        common = math.lcm(self.denominator_scaling, self.denominator_wavelet)
        total = (
            scaling * (common // self.denominator_scaling)
            + wavelet * (common // self.denominator_wavelet)
        )
        return round_div(total, common)
