"""Multiresolution discrete wavelet transforms for grayscale images.

This package provides:
- Single and multi level forward/inverse separable wavelet transforms
- Naive reference kernels and a fast Inner + Border path, selected by image size
- Zero-copy image views over an Arena allocator
- An Entity-Component-System layer to run transforms as pipeline stages

Quick Start:
    >>> import numpy as np
    >>> from wavelet_ecs import GrayImage, get_description, transform_n, inverse_n
    >>>
    >>> desc = get_description("daub4")
    >>> image = GrayImage.from_array(np.random.rand(64, 64).astype(np.float32))
    >>> pyramid = GrayImage.create(64, 64)
    >>> transform_n(desc, image.copy(), pyramid, None, 3)
    >>>
    >>> recon = GrayImage.create(64, 64)
    >>> inverse_n(desc, pyramid.copy(), recon, None, 3)

For pipelines over many images:
    >>> from wavelet_ecs import World
    >>> from wavelet_ecs.components.wavelet import WaveletPyr
    >>> from wavelet_ecs.systems.wavelet import WaveletTransform
    >>>
    >>> world = World()
    >>> entity = world.spawn_image(img)
    >>> pyr = world.pipe(entity).to(WaveletTransform("haar", levels=3)).out(WaveletPyr)
"""

import logging

from wavelet_ecs.core.arena import Arena, GrayImage
from wavelet_ecs.core.world import World
from wavelet_ecs.errors import (
    BufferTooSmallError,
    ShapeMismatchError,
    StorageSizeMismatchError,
    WaveletError,
)
from wavelet_ecs.wavelet.description import WaveletDescription
from wavelet_ecs.wavelet.families import get_description
from wavelet_ecs.wavelet.ops import inverse1, inverse_n, transform1, transform_n

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "Arena",
    "BufferTooSmallError",
    "GrayImage",
    "ShapeMismatchError",
    "StorageSizeMismatchError",
    "WaveletDescription",
    "WaveletError",
    "World",
    "get_description",
    "inverse1",
    "inverse_n",
    "transform1",
    "transform_n",
]
