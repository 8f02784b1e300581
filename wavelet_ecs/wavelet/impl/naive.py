"""Reference wavelet kernels.

Every output sample is computed from scratch with border synthesis, so these
kernels are correct for any image size. They are slow and serve as the ground
truth for the Inner and Border kernels.

All kernels take numpy 2D arrays and filter along the last axis; the vertical
variants run the horizontal code on transposed views.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from wavelet_ecs.wavelet.border import BorderRule
from wavelet_ecs.wavelet.coefficients import WaveletCoefficients


def forward_pair(
    border: BorderRule,
    coef: WaveletCoefficients,
    row: np.ndarray,
    k: int,
) -> tuple[Any, Any]:
    """Scaling and wavelet output of pair ``k`` of one row.

    Positions are extended over the padded (even) length; the padding sample
    of an odd row reads as zero.
    """
    length = row.shape[0]
    padded = length + length % 2
    to_sample = coef.sample_type

    scaling: Any = 0
    for i, tap in enumerate(coef.scaling):
        index = border.index(2 * k + coef.offset_scaling + i, padded)
        if index < length:
            scaling += tap * to_sample(row[index])

    wavelet: Any = 0
    for i, tap in enumerate(coef.wavelet):
        index = border.index(2 * k + coef.offset_wavelet + i, padded)
        if index < length:
            wavelet += tap * to_sample(row[index])

    return coef.finish_scaling(scaling), coef.finish_wavelet(wavelet)


def inverse_sample(
    border: BorderRule,
    coef: WaveletCoefficients,
    scaling_band: np.ndarray,
    wavelet_band: np.ndarray,
    j: int,
) -> Any:
    """Reconstructed sample ``j`` gathered from the scaling and wavelet bands."""
    half = scaling_band.shape[0]
    to_sample = coef.sample_type

    scaling: Any = 0
    for i, tap in enumerate(coef.scaling):
        position = j - coef.offset_scaling - i
        if position % 2 == 0:
            scaling += tap * to_sample(scaling_band[border.index(position // 2, half)])

    wavelet: Any = 0
    for i, tap in enumerate(coef.wavelet):
        position = j - coef.offset_wavelet - i
        if position % 2 == 0:
            wavelet += tap * to_sample(wavelet_band[border.index(position // 2, half)])

    return coef.combine(scaling, wavelet)


def horizontal(
    border: BorderRule, coef: WaveletCoefficients, input: np.ndarray, output: np.ndarray
) -> None:
    """Forward transform of every row: scaling into the left half, wavelet into the right."""
    half = output.shape[1] // 2
    for y in range(input.shape[0]):
        row = input[y]
        for k in range(half):
            output[y, k], output[y, half + k] = forward_pair(border, coef, row, k)


def vertical(
    border: BorderRule, coef: WaveletCoefficients, input: np.ndarray, output: np.ndarray
) -> None:
    """Forward transform of every column: scaling into the top half, wavelet into the bottom."""
    horizontal(border, coef, input.T, output.T)


def horizontal_inverse(
    border: BorderRule, coef: WaveletCoefficients, input: np.ndarray, output: np.ndarray
) -> None:
    """Rebuild every row of ``output`` from the two halves of the matching ``input`` row."""
    half = input.shape[1] // 2
    for y in range(output.shape[0]):
        scaling_band = input[y, :half]
        wavelet_band = input[y, half:]
        for j in range(output.shape[1]):
            output[y, j] = inverse_sample(border, coef, scaling_band, wavelet_band, j)


def vertical_inverse(
    border: BorderRule, coef: WaveletCoefficients, input: np.ndarray, output: np.ndarray
) -> None:
    horizontal_inverse(border, coef, input.T, output.T)
