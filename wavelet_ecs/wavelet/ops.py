"""Functional interface for applying wavelet and inverse wavelet transforms.

A single level transform breaks the image into four regions:

    +---+---+
    | a | h |
    +---+---+
    | v | d |
    +---+---+

Each region has half the rows and columns of the (even) transformed image.
Region 'a' is the scaling image, 'h' and 'v' mix scaling and wavelet, and 'd'
holds the wavelet of both rows and columns. A multi level transform feeds the
'a' region of one level into the next.

Two execution strategies produce the same result:

- Naive: every sample computed with border synthesis, used for small images
- Inner + Border: vectorised interior plus a separate pass over the borders

Multi level calls use the caller's ``input`` image as workspace to avoid an
extra allocation, so its contents are overwritten. Copy it first if it must be
kept.
"""

from __future__ import annotations

import logging

import numpy as np

from wavelet_ecs.config import DEFAULT_CONFIG, EngineConfig
from wavelet_ecs.core.arena import GrayImage
from wavelet_ecs.errors import StorageSizeMismatchError
from wavelet_ecs.wavelet import util
from wavelet_ecs.wavelet.coefficients import IntWaveletCoefficients, WaveletCoefficients
from wavelet_ecs.wavelet.description import WaveletDescription
from wavelet_ecs.wavelet.impl import border as border_kernel
from wavelet_ecs.wavelet.impl import inner, naive

logger = logging.getLogger(__name__)

_FLOAT = np.dtype(np.float32)
_UINT8 = np.dtype(np.uint8)
_INT16 = np.dtype(np.int16)


def transform1(
    desc: WaveletDescription,
    input: GrayImage,
    output: GrayImage,
    storage: GrayImage | None = None,
    *,
    config: EngineConfig | None = None,
) -> None:
    """Performs a single level wavelet transform.

    Floating point descriptions take float32 images throughout. Integer
    descriptions take a uint8 input and write int16 output and storage.
    Filtering the columns as well as the rows on the integer path is a
    design decision of this package, recorded in DESIGN.md.

    Args:
        desc: Description of the wavelet.
        input: Input image. Not modified.
        output: Where the wavelet transform is written to. Its sides are the
            input's rounded up to even. Modified.
        storage: Optional storage image. Must be the same size as output. If
            None then an image is declared internally.
        config: Strategy settings. Defaults are used if None.

    Raises:
        ShapeMismatchError: output has the wrong dimensions
        BufferTooSmallError: the wavelet does not fit in the image
        StorageSizeMismatchError: storage is not the size of output
        TypeError: the images do not have the sample kinds the wavelet needs
    """
    config = config or DEFAULT_CONFIG
    util.check_shape(input, output)
    coef = desc.forward
    util.check_fits(coef, output.width, output.height)

    if isinstance(coef, IntWaveletCoefficients):
        _check_kinds(input=(input, _UINT8), output=(output, _INT16))
        storage = _check_declare_storage(output.width, output.height, storage, _INT16, "storage")
        use_naive = _use_naive_int(coef, desc, input, config)
    else:
        _check_kinds(input=(input, _FLOAT), output=(output, _FLOAT))
        storage = _check_declare_storage(output.width, output.height, storage, _FLOAT, "storage")
        use_naive = _use_naive(coef, input.width, input.height, config)

    source = input.data
    # rows past input.height only exist in the padded transform
    scratch = storage.data[: input.height]
    target = output.data

    logger.debug(
        "transform1 %s %dx%d -> %dx%d using %s",
        desc.name, input.width, input.height, output.width, output.height,
        "naive" if use_naive else "inner+border",
    )

    if use_naive:
        naive.horizontal(desc.border, coef, source, scratch)
        naive.vertical(desc.border, coef, scratch, target)
    else:
        inner.horizontal(desc.border, coef, source, scratch)
        border_kernel.horizontal(desc.border, coef, source, scratch)
        inner.vertical(desc.border, coef, scratch, target)
        border_kernel.vertical(desc.border, coef, scratch, target)


def transform_n(
    desc: WaveletDescription,
    input: GrayImage,
    output: GrayImage,
    storage: GrayImage | None = None,
    num_levels: int = 1,
    *,
    config: EngineConfig | None = None,
) -> None:
    """Performs a level N wavelet transform using the fast wavelet transform (FWT).

    To save memory the input image is used to store intermediate results and
    is modified. Every level is validated before the first one runs.

    Args:
        desc: Description of the wavelet. Floating point only.
        input: Input image and is used as internal workspace. Modified.
        output: Where the multilevel wavelet transform is written to. Modified.
        storage: Optional storage image. Should be the same size as output. If
            None then an image is declared internally.
        num_levels: Number of levels which should be computed in the transform.
        config: Strategy settings. Defaults are used if None.
    """
    if num_levels < 1:
        raise ValueError(f"num_levels must be at least 1, got {num_levels}")
    if num_levels == 1:
        transform1(desc, input, output, storage, config=config)
        return

    _require_float(desc, "transform_n")
    shapes = util.check_shape_levels(desc.forward, input, output, num_levels)
    storage = _check_declare_storage(output.width, output.height, storage, _FLOAT, "storage")
    # modify the shape of a temporary view, not the caller's image
    storage = storage.subimage(0, 0, output.width, output.height)

    transform1(desc, input, output, storage, config=config)

    for level, (width, height) in enumerate(shapes[1:], start=2):
        logger.debug("transform_n level %d of %d: %dx%d", level, num_levels, width, height)
        input = input.subimage(0, 0, width, height)
        output = output.subimage(0, 0, width, height)
        input.set_to(output)

        # transform the scaling image and save the results in the output image
        storage.reshape(width, height)
        transform1(desc, input, output, storage, config=config)


def inverse1(
    desc: WaveletDescription,
    input: GrayImage,
    output: GrayImage,
    storage: GrayImage | None = None,
    *,
    config: EngineConfig | None = None,
) -> None:
    """Performs a single level inverse wavelet transform.

    Do not pass in a whole image which has been transformed by a multilevel
    transform, just the relevant sub-image.

    Args:
        desc: Description of the wavelet. Floating point only.
        input: Input wavelet transform. Not modified.
        output: Reconstruction of original image. Modified.
        storage: Optional storage image. Should be the same size as the input
            image. If None then an image is declared internally.
        config: Strategy settings. Defaults are used if None.
    """
    config = config or DEFAULT_CONFIG
    _require_float(desc, "inverse1")
    util.check_shape(output, input)
    util.check_fits(desc.forward, input.width, input.height)
    _check_kinds(input=(input, _FLOAT), output=(output, _FLOAT))
    storage = _check_declare_storage(input.width, input.height, storage, _FLOAT, "storage")

    coef = desc.inverse
    use_naive = _use_naive(desc.forward, output.width, output.height, config)

    source = input.data
    scratch = storage.data[: output.height]
    target = output.data

    logger.debug(
        "inverse1 %s %dx%d -> %dx%d using %s",
        desc.name, input.width, input.height, output.width, output.height,
        "naive" if use_naive else "inner+border",
    )

    if use_naive:
        naive.vertical_inverse(desc.border, coef, source, scratch)
        naive.horizontal_inverse(desc.border, coef, scratch, target)
    else:
        inner.vertical_inverse(desc.border, coef, source, scratch)
        border_kernel.vertical_inverse(desc.border, coef, source, scratch)
        inner.horizontal_inverse(desc.border, coef, scratch, target)
        border_kernel.horizontal_inverse(desc.border, coef, scratch, target)


def inverse_n(
    desc: WaveletDescription,
    input: GrayImage,
    output: GrayImage,
    storage: GrayImage | None = None,
    num_levels: int = 1,
    *,
    config: EngineConfig | None = None,
) -> None:
    """Performs a level N inverse fast wavelet transform (FWT).

    To save memory the input image is used to store intermediate results and
    is modified.

    Args:
        desc: Description of the wavelet. Floating point only.
        input: Input wavelet transform and is used as internal workspace. Modified.
        output: Reconstruction of original image. Modified.
        storage: Optional storage image. Should be the same size as the input
            image. If None then an image is declared internally.
        num_levels: Number of levels in the transform.
        config: Strategy settings. Defaults are used if None.
    """
    if num_levels < 1:
        raise ValueError(f"num_levels must be at least 1, got {num_levels}")
    if num_levels == 1:
        inverse1(desc, input, output, storage, config=config)
        return

    _require_float(desc, "inverse_n")
    shapes = util.check_shape_levels(desc.forward, output, input, num_levels)
    storage = _check_declare_storage(input.width, input.height, storage, _FLOAT, "storage")
    # modify the shape of a temporary view, not the caller's image
    storage = storage.subimage(0, 0, input.width, input.height)

    level_in: GrayImage | None = None
    level_out: GrayImage | None = None
    for level in range(num_levels, 0, -1):
        if level_in is not None and level_out is not None:
            # the decoded region is the scaling image of the next finer level
            level_in.set_to(level_out)

        if level == 1:
            level_in, level_out = input, output
        else:
            width, height = shapes[level - 1]
            level_in = input.subimage(0, 0, width, height)
            level_out = output.subimage(0, 0, width, height)

        logger.debug(
            "inverse_n level %d of %d: %dx%d", level, num_levels, level_in.width, level_in.height
        )
        storage.reshape(level_in.width, level_in.height)
        inverse1(desc, level_in, level_out, storage, config=config)


def _use_naive(coef: WaveletCoefficients, width: int, height: int, config: EngineConfig) -> bool:
    if config.strategy != "auto":
        return config.strategy == "naive"
    # the faster routines can only be run on images which are not too small
    min_size = coef.max_length * config.naive_size_factor
    return width <= min_size or height <= min_size


def _use_naive_int(
    coef: WaveletCoefficients,
    desc: WaveletDescription,
    input: GrayImage,
    config: EngineConfig,
) -> bool:
    if config.strategy != "auto":
        return config.strategy == "naive"
    lower = desc.border.forward_lower(coef)
    small_w = max(lower, desc.border.forward_upper(coef, input.width))
    small_h = max(lower, desc.border.forward_upper(coef, input.height))
    return input.width <= small_w * 2 or input.height <= small_h * 2


def _require_float(desc: WaveletDescription, operation: str) -> None:
    if desc.is_integer:
        raise TypeError(
            f"{operation} supports floating point wavelets only, "
            f"'{desc.name}' has integer coefficients"
        )


def _check_kinds(**images: tuple[GrayImage, np.dtype]) -> None:
    for name, (image, dtype) in images.items():
        if image.dtype != dtype:
            raise TypeError(f"'{name}' must have dtype {dtype}, not {image.dtype}")


def _check_declare_storage(
    width: int,
    height: int,
    storage: GrayImage | None,
    dtype: np.dtype,
    name: str,
) -> GrayImage:
    if storage is None:
        return GrayImage.create(width, height, dtype)
    if storage.width != width or storage.height != height:
        raise StorageSizeMismatchError(
            f"'{name}' needs to be {width}x{height} not {storage.width}x{storage.height}"
        )
    if storage.dtype != dtype:
        raise TypeError(f"'{name}' must have dtype {dtype}, not {storage.dtype}")
    return storage
