"""Wavelet families.

Orthogonal families take their scaling taps from PyWavelets. For an orthogonal
filter bank the wavelet taps are the quadrature mirror of the scaling taps and
the inverse is the transpose of the forward transform, so the inverse scatter
taps equal the forward taps.

The CDF 5/3 (LeGall) filters are written out here. Their inverse taps are the
scatter form of the lifting steps

    x[2k]   = s[k] - (d[k-1] + d[k]) / 4
    x[2k+1] = d[k] + (x[2k] + x[2k+2]) / 2
"""

from __future__ import annotations

import re
from typing import Callable

import pywt

from wavelet_ecs.wavelet.border import BorderRule, border_rule
from wavelet_ecs.wavelet.coefficients import IntWaveletCoefficients, WaveletCoefficients
from wavelet_ecs.wavelet.description import WaveletDescription


def _quadrature_mirror(scaling: tuple[float, ...]) -> tuple[float, ...]:
    n = len(scaling)
    return tuple((-1) ** i * scaling[n - 1 - i] for i in range(n))


def _orthogonal_description(
    name: str, scaling: tuple[float, ...], border: str | BorderRule
) -> WaveletDescription:
    coef = WaveletCoefficients(
        scaling=scaling,
        wavelet=_quadrature_mirror(scaling),
        offset_scaling=0,
        offset_wavelet=0,
    )
    return WaveletDescription(
        forward=coef, inverse=coef, border=border_rule(border), name=name
    )


def haar(border: str | BorderRule = "wrap") -> WaveletDescription:
    """Orthonormal Haar wavelet."""
    r = 2.0 ** -0.5
    return _orthogonal_description("haar", (r, r), border)


def haar_int(border: str | BorderRule = "wrap") -> WaveletDescription:
    """Unnormalized integer Haar: sums and differences of neighbouring pixels."""
    forward = IntWaveletCoefficients(scaling=(1, 1), wavelet=(1, -1))
    inverse = IntWaveletCoefficients(
        scaling=(1, 1), wavelet=(1, -1), denominator_scaling=2, denominator_wavelet=2
    )
    return WaveletDescription(
        forward=forward, inverse=inverse, border=border_rule(border), name="haar-int"
    )


def daubechies(size: int = 4, border: str | BorderRule = "wrap") -> WaveletDescription:
    """Daubechies wavelet with ``size`` taps (daub4 is PyWavelets' db2).

    Raises:
        ValueError: If size is odd or outside the range PyWavelets provides
    """
    if size < 2 or size % 2 != 0:
        raise ValueError(f"Daubechies size must be even and at least 2, got {size}")
    pywt_name = f"db{size // 2}"
    if pywt_name not in pywt.wavelist("db"):
        raise ValueError(f"Daubechies size {size} is not available")
    scaling = tuple(float(v) for v in pywt.Wavelet(pywt_name).rec_lo)
    return _orthogonal_description(f"daub{size}", scaling, border)


def orthogonal(name: str, border: str | BorderRule = "wrap") -> WaveletDescription:
    """Any orthogonal discrete wavelet known to PyWavelets (sym4, coif1, ...).

    Raises:
        ValueError: If the name is unknown or the wavelet is not orthogonal
    """
    if name not in pywt.wavelist(kind="discrete"):
        raise ValueError(f"Wavelet '{name}' is not a PyWavelets discrete wavelet")
    wavelet = pywt.Wavelet(name)
    if not wavelet.orthogonal:
        raise ValueError(f"Wavelet '{name}' is not orthogonal")
    scaling = tuple(float(v) for v in wavelet.rec_lo)
    return _orthogonal_description(name, scaling, border)


def biorthogonal53(border: str | BorderRule = "wrap") -> WaveletDescription:
    """CDF 5/3 (LeGall) biorthogonal wavelet, floating point."""
    forward = WaveletCoefficients(
        scaling=(-1 / 8, 2 / 8, 6 / 8, 2 / 8, -1 / 8),
        wavelet=(-1 / 2, 1.0, -1 / 2),
        offset_scaling=-2,
        offset_wavelet=0,
    )
    inverse = WaveletCoefficients(
        scaling=(1 / 2, 1.0, 1 / 2),
        wavelet=(-1 / 8, -2 / 8, 6 / 8, -2 / 8, -1 / 8),
        offset_scaling=-1,
        offset_wavelet=-1,
    )
    return WaveletDescription(
        forward=forward, inverse=inverse, border=border_rule(border), name="bior53"
    )


def biorthogonal53_int(border: str | BorderRule = "wrap") -> WaveletDescription:
    """CDF 5/3 with integer taps and power of two denominators."""
    forward = IntWaveletCoefficients(
        scaling=(-1, 2, 6, 2, -1),
        wavelet=(-1, 2, -1),
        offset_scaling=-2,
        offset_wavelet=0,
        denominator_scaling=8,
        denominator_wavelet=2,
    )
    inverse = IntWaveletCoefficients(
        scaling=(1, 2, 1),
        wavelet=(-1, -2, 6, -2, -1),
        offset_scaling=-1,
        offset_wavelet=-1,
        denominator_scaling=2,
        denominator_wavelet=8,
    )
    return WaveletDescription(
        forward=forward, inverse=inverse, border=border_rule(border), name="bior53-int"
    )


FAMILIES: dict[str, Callable[..., WaveletDescription]] = {
    "haar": haar,
    "haar-int": haar_int,
    "bior53": biorthogonal53,
    "bior53-int": biorthogonal53_int,
}

_DAUB_PATTERN = re.compile(r"daub(\d+)$")


def get_description(name: str, border: str | BorderRule = "wrap") -> WaveletDescription:
    """Look up a wavelet family by name.

    Accepts the names in FAMILIES, ``daub<N>`` for Daubechies with N taps and
    any orthogonal PyWavelets name.

    Raises:
        ValueError: If the name does not match any family
    """
    if name in FAMILIES:
        return FAMILIES[name](border=border)
    match = _DAUB_PATTERN.match(name)
    if match:
        return daubechies(int(match.group(1)), border=border)
    if name in pywt.wavelist(kind="discrete"):
        return orthogonal(name, border=border)
    raise ValueError(
        f"Wavelet family '{name}' not supported. "
        f"Available: {list(FAMILIES)} + daub<N> + orthogonal PyWavelets names"
    )
