"""Wavelet pyramid component."""

from pydantic import Field

from wavelet_ecs.components.image import Component
from wavelet_ecs.core.arena import GrayImage


class WaveletPyr(Component):
    """Multi level wavelet transform of a Gray image.

    Attributes:
        coef: float32 GrayImage holding the packed pyramid (scaling band of
            the coarsest level in the top-left corner)
        levels: Number of decomposition levels
        family: Wavelet family name (e.g. 'haar', 'daub4')
        original_width: Width of the image that was transformed
        original_height: Height of the image that was transformed
    """

    coef: GrayImage
    levels: int = Field(ge=1, le=10)
    family: str = Field(default="haar")
    original_width: int = Field(ge=1)
    original_height: int = Field(ge=1)
