"""Wavelet kernels for the interior of an image.

Only outputs whose whole filter support lies inside the input are written; the
bands left at either end (see BorderRule) must be filled by the Border kernels.
Input is read directly with numpy slicing, one tap at a time, in the same tap
order as the Naive kernels so that the sums agree.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from wavelet_ecs.wavelet.border import BorderRule
from wavelet_ecs.wavelet.coefficients import WaveletCoefficients


def _correlate(data: np.ndarray, taps: tuple[Any, ...], start: int, count: int) -> Any:
    """Sum of taps times every second column, starting at column ``start``."""
    total: Any = 0
    for i, tap in enumerate(taps):
        first = start + i
        total = total + tap * data[:, first : first + 2 * count - 1 : 2]
    return total


def _gather(
    band: np.ndarray,
    taps: tuple[Any, ...],
    offset: int,
    parity: int,
    m_lo: int,
    m_hi: int,
) -> Any:
    """Contribution of one band to samples 2m + parity for m in [m_lo, m_hi)."""
    total: Any = 0
    for i, tap in enumerate(taps):
        if (offset + i - parity) % 2 != 0:
            continue
        shift = (offset + i - parity) // 2
        total = total + tap * band[:, m_lo - shift : m_hi - shift]
    return total


def horizontal(
    border: BorderRule, coef: WaveletCoefficients, input: np.ndarray, output: np.ndarray
) -> None:
    length = input.shape[1]
    padded = output.shape[1]
    half = padded // 2

    k_lo = border.forward_lower(coef) // 2
    k_hi = (padded - border.forward_upper(coef, length)) // 2
    count = k_hi - k_lo
    if count <= 0:
        return

    data = input.astype(coef.accumulator_dtype)
    scaling = _correlate(data, coef.scaling, 2 * k_lo + coef.offset_scaling, count)
    wavelet = _correlate(data, coef.wavelet, 2 * k_lo + coef.offset_wavelet, count)

    output[:, k_lo:k_hi] = coef.finish_scaling(scaling)
    output[:, half + k_lo : half + k_hi] = coef.finish_wavelet(wavelet)


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
    if j_hi <= j_lo:
        return

    data = input.astype(coef.accumulator_dtype)
    scaling_band = data[:, :half]
    wavelet_band = data[:, half:]

    # even and odd samples draw on different taps
    for parity in (0, 1):
        m_lo = (j_lo - parity + 1) // 2
        m_hi = (j_hi - parity + 1) // 2
        if m_hi <= m_lo:
            continue
        scaling = _gather(scaling_band, coef.scaling, coef.offset_scaling, parity, m_lo, m_hi)
        wavelet = _gather(wavelet_band, coef.wavelet, coef.offset_wavelet, parity, m_lo, m_hi)
        first = 2 * m_lo + parity
        output[:, first : first + 2 * (m_hi - m_lo) - 1 : 2] = coef.combine(scaling, wavelet)


def vertical_inverse(
    border: BorderRule, coef: WaveletCoefficients, input: np.ndarray, output: np.ndarray
) -> None:
    horizontal_inverse(border, coef, input.T, output.T)
