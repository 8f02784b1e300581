"""Wavelet description: everything needed to run one wavelet family."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from wavelet_ecs.wavelet.border import BorderRule
from wavelet_ecs.wavelet.coefficients import IntWaveletCoefficients, WaveletCoefficients


class WaveletDescription(BaseModel):
    """Immutable pairing of forward taps, inverse taps and a border rule.

    Built once per wavelet family (see ``wavelet_ecs.wavelet.families``) and
    shared by every transform call.

    Attributes:
        forward: Taps of the decomposition
        inverse: Scatter taps of the reconstruction
        border: Boundary extension policy
        name: Family name, e.g. 'haar' or 'daub4'
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    forward: WaveletCoefficients
    inverse: WaveletCoefficients
    border: BorderRule
    name: str = ""

    @model_validator(mode="after")
    def _same_kind(self) -> WaveletDescription:
        if isinstance(self.forward, IntWaveletCoefficients) != isinstance(
            self.inverse, IntWaveletCoefficients
        ):
            raise ValueError(
                "forward and inverse coefficients must both be integer or both be floating point"
            )
        return self

    @property
    def is_integer(self) -> bool:
        return isinstance(self.forward, IntWaveletCoefficients)
