"""Wavelet kernels for the border bands of an image.

These fill exactly the outputs that the Inner kernels skip: the lower and
upper bands whose widths come from the BorderRule. Samples outside the image
are synthesised with the rule, as in the Naive kernels.
"""

from __future__ import annotations

from itertools import chain

import numpy as np

from wavelet_ecs.wavelet.border import BorderRule
from wavelet_ecs.wavelet.coefficients import WaveletCoefficients
from wavelet_ecs.wavelet.impl.naive import forward_pair, inverse_sample


def _bands(lower: int, upper_start: int, end: int) -> chain[int]:
    lower = min(lower, end)
    return chain(range(0, lower), range(max(upper_start, lower), end))


def horizontal(
    border: BorderRule, coef: WaveletCoefficients, input: np.ndarray, output: np.ndarray
) -> None:
    length = input.shape[1]
    padded = output.shape[1]
    half = padded // 2

    k_lo = border.forward_lower(coef) // 2
    k_hi = (padded - border.forward_upper(coef, length)) // 2

    for y in range(input.shape[0]):
        row = input[y]
        for k in _bands(k_lo, k_hi, half):
            output[y, k], output[y, half + k] = forward_pair(border, coef, row, k)


def vertical(
    border: BorderRule, coef: WaveletCoefficients, input: np.ndarray, output: np.ndarray
) -> None:
    horizontal(border, coef, input.T, output.T)


def horizontal_inverse(
    border: BorderRule, coef: WaveletCoefficients, input: np.ndarray, output: np.ndarray
) -> None:
    length = output.shape[1]
    half = input.shape[1] // 2

    j_lo = border.inverse_lower(coef)
    j_hi = length - border.inverse_upper(coef, length)

    for y in range(output.shape[0]):
        scaling_band = input[y, :half]
        wavelet_band = input[y, half:]
        for j in _bands(j_lo, j_hi, length):
            output[y, j] = inverse_sample(border, coef, scaling_band, wavelet_band, j)


def vertical_inverse(
    border: BorderRule, coef: WaveletCoefficients, input: np.ndarray, output: np.ndarray
) -> None:
    horizontal_inverse(border, coef, input.T, output.T)
