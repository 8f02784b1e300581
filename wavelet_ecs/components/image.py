"""Image components: Gray, ReconGray."""

from pydantic import BaseModel

from wavelet_ecs.core.arena import GrayImage


class Component(BaseModel):
    """Base class for all ECS components.

    Components are data containers using Pydantic for validation. Pixel data
    is held as GrayImage handles into the world's arena, never as copies.
    """

    model_config = {"arbitrary_types_allowed": True}


class Gray(Component):
    """Original single band image.

    Attributes:
        pix: GrayImage with uint8 or float32 samples
    """

    pix: GrayImage


class ReconGray(Component):
    """Image rebuilt by an inverse transform.

    Attributes:
        pix: float32 GrayImage with the original image dimensions
    """

    pix: GrayImage
