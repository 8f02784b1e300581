"""Shape rules shared by the forward and inverse transforms.

A single level transform of a W x H image is stored in an image whose sides are
W and H rounded up to even. The four quadrants are:

    +---+---+
    | a | h |     a: scaling of rows and columns
    +---+---+     h: row wavelet, column scaling
    | v | d |     v: row scaling, column wavelet
    +---+---+     d: wavelet of rows and columns

A multi level transform repeats the single level transform on region 'a' grown
to the next even size. Level 1 covers the whole transformed image; each further
level halves the previous region and rounds up to even.
"""

from __future__ import annotations

from wavelet_ecs.core.arena import GrayImage
from wavelet_ecs.errors import BufferTooSmallError, ShapeMismatchError
from wavelet_ecs.wavelet.coefficients import WaveletCoefficients


def round_up_even(value: int) -> int:
    return value + value % 2


def transform_dimension(width: int, height: int) -> tuple[int, int]:
    """(width, height) of the image holding the transform of a width x height image."""
    return round_up_even(width), round_up_even(height)


def next_level_dimension(length: int) -> int:
    """Side of the next level's region: half the current region, rounded up to even."""
    return round_up_even(length // 2)


def level_shapes(width: int, height: int, num_levels: int) -> list[tuple[int, int]]:
    """Regions, as (width, height), where levels 1..num_levels run.

    Args:
        width: Width of the transformed image
        height: Height of the transformed image
        num_levels: Number of levels in the pyramid
    """
    shapes = [(width, height)]
    for _ in range(1, num_levels):
        width = next_level_dimension(width)
        height = next_level_dimension(height)
        shapes.append((width, height))
    return shapes


def check_shape(original: GrayImage, transformed: GrayImage) -> None:
    """Check that ``transformed`` can hold the single level transform of ``original``.

    Raises:
        ShapeMismatchError: If the transformed image is odd or not the
            original's dimensions rounded up to even
    """
    if transformed.width % 2 == 1 or transformed.height % 2 == 1:
        raise ShapeMismatchError(
            f"Image containing the wavelet transform must have an even width and height, "
            f"got {transformed.width}x{transformed.height}"
        )
    width, height = transform_dimension(original.width, original.height)
    if transformed.width != width or transformed.height != height:
        raise ShapeMismatchError(
            f"Transformed image must be {width}x{height} for a "
            f"{original.width}x{original.height} image, got "
            f"{transformed.width}x{transformed.height}"
        )


def check_fits(coef: WaveletCoefficients, width: int, height: int) -> None:
    """Check that the taps fit inside a width x height image.

    Raises:
        BufferTooSmallError: If either side is shorter than the longest taps
    """
    if width < coef.max_length or height < coef.max_length:
        raise BufferTooSmallError(
            f"Wavelet is too large for provided image: needs at least "
            f"{coef.max_length}x{coef.max_length}, got {width}x{height}"
        )


def check_shape_levels(
    coef: WaveletCoefficients,
    original: GrayImage,
    transformed: GrayImage,
    num_levels: int,
) -> list[tuple[int, int]]:
    """Validate a multi level transform and return its level regions.

    Raises:
        ShapeMismatchError: If the transformed image has the wrong shape or
            the regions stop shrinking before num_levels is reached
        BufferTooSmallError: If the taps do not fit the coarsest region
    """
    check_shape(original, transformed)
    shapes = level_shapes(transformed.width, transformed.height, num_levels)
    for level in range(1, num_levels):
        (prev_w, prev_h), (w, h) = shapes[level - 1], shapes[level]
        if w >= prev_w or h >= prev_h:
            raise ShapeMismatchError(
                f"A {transformed.width}x{transformed.height} transform cannot be "
                f"reduced {num_levels} times: level {level + 1} would be {w}x{h}"
            )
    check_fits(coef, *shapes[-1])
    return shapes
