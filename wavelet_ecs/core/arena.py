"""Arena allocator and GrayImage views for zero-copy image buffers.

The Arena provides a contiguous memory buffer with a bump allocation strategy.
A GrayImage is a rectangular window (offset, width, height, stride) over the
arena buffer. Sub-images alias their parent, so writes through a view are
visible in the parent and in every overlapping view.

Key Features:
- Zero-copy: views share the arena buffer, nothing is duplicated
- Aligned allocation: Respects dtype alignment requirements
- Generation counter: Detects stale images after arena reset
- In-place reshape: views can be resized within their capacity

Example:
    >>> arena = Arena(size_bytes=1 << 16)
    >>> img = arena.alloc_image(64, 32, np.float32)
    >>> quad = img.subimage(0, 0, 32, 16)
    >>> quad.data[:] = 1.0  # Also visible through img.data
    >>> arena.reset()
    >>> # img.data  # Would raise ValueError: stale image
"""

from __future__ import annotations

from typing import Any

import numpy as np

SUPPORTED_DTYPES = (np.dtype(np.uint8), np.dtype(np.int16), np.dtype(np.float32))


def _normalize_dtype(dtype: np.dtype[Any] | type | str) -> np.dtype[Any]:
    dt = np.dtype(dtype)
    if dt not in SUPPORTED_DTYPES:
        raise TypeError(
            f"Unsupported image dtype {dt}, expected one of "
            f"{[str(d) for d in SUPPORTED_DTYPES]}"
        )
    return dt


class Arena:
    """Contiguous memory allocator with bump allocation strategy.

    The Arena manages a pre-allocated bytearray buffer and hands out images
    sequentially. All allocations are aligned to dtype requirements.

    Attributes:
        size: Total arena size in bytes
        offset: Current allocation offset (bump pointer)
        generation: Incremented on reset() to invalidate old images
    """

    def __init__(self, size_bytes: int):
        if size_bytes <= 0:
            raise ValueError(f"size_bytes must be positive, got {size_bytes}")

        self._buffer = bytearray(size_bytes)
        self._size = size_bytes
        self._offset = 0
        self._generation = 0

    @property
    def size(self) -> int:
        """Total arena size in bytes."""
        return self._size

    @property
    def offset(self) -> int:
        """Current allocation offset (bytes used)."""
        return self._offset

    @property
    def generation(self) -> int:
        """Current generation counter."""
        return self._generation

    @property
    def available(self) -> int:
        """Remaining bytes available for allocation."""
        return self._size - self._offset

    def reset(self) -> None:
        """Reset arena for reuse. Invalidates every image and view allocated so far."""
        self._offset = 0
        self._generation += 1

    def alloc_image(
        self,
        width: int,
        height: int,
        dtype: np.dtype[Any] | type | str = np.float32,
    ) -> GrayImage:
        """Allocate a zero-filled image in the arena.

        Args:
            width: Number of columns
            height: Number of rows
            dtype: Sample kind (uint8, int16 or float32)

        Returns:
            GrayImage backed by arena memory

        Raises:
            ValueError: If the allocation would exceed the arena size
            TypeError: If dtype is not a supported sample kind
        """
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")
        dt = _normalize_dtype(dtype)

        nbytes = width * height * dt.itemsize
        alignment = dt.alignment
        aligned_offset = (self._offset + alignment - 1) // alignment * alignment

        end_offset = aligned_offset + nbytes
        if end_offset > self._size:
            raise ValueError(
                f"Arena out of memory: need {nbytes} bytes at offset {aligned_offset}, "
                f"but arena size is {self._size} (available: {self.available})"
            )
        self._offset = end_offset

        image = GrayImage(
            arena=self,
            offset=aligned_offset,
            width=width,
            height=height,
            stride=width,
            dtype=dt,
            generation=self._generation,
        )
        # memory may hold data from a previous generation
        self.view(image)[...] = 0
        return image

    def view(self, image: GrayImage) -> np.ndarray:
        """Get a NumPy array view of an image.

        Args:
            image: Image or sub-image allocated from this arena

        Returns:
            (height, width) array backed by arena memory (zero-copy)

        Raises:
            ValueError: If the image is stale (from a previous generation)
        """
        if image.generation != self._generation:
            raise ValueError(
                f"Stale GrayImage: arena was reset (current generation {self._generation}, "
                f"image is from generation {image.generation})"
            )

        itemsize = image.dtype.itemsize
        if image.width > 0 and image.height > 0:
            end_offset = image.offset + (
                (image.height - 1) * image.stride + image.width
            ) * itemsize
            if end_offset > self._size:
                raise ValueError(
                    f"GrayImage out of bounds: offset={image.offset}, end={end_offset}, "
                    f"arena size={self._size}"
                )

        return np.ndarray(
            shape=(image.height, image.width),
            dtype=image.dtype,
            buffer=self._buffer,
            offset=image.offset,
            strides=(image.stride * itemsize, itemsize),
        )

    def __repr__(self) -> str:
        return (
            f"Arena(size={self._size}, offset={self._offset}, "
            f"generation={self._generation}, available={self.available})"
        )


class GrayImage:
    """Single band image stored in an Arena.

    An image either owns its region of the arena or is a sub-image that
    borrows a rectangle of a parent. Both kinds read and write the same
    arena bytes; ``data`` returns a fresh zero-copy numpy view on each call.

    Attributes:
        width: Number of columns in the logical extent
        height: Number of rows in the logical extent
        stride: Elements between the starts of consecutive rows
        dtype: Sample kind
        max_width: Widest extent reshape() may use without reallocating
        max_height: Tallest extent reshape() may use without reallocating
    """

    def __init__(
        self,
        arena: Arena,
        offset: int,
        width: int,
        height: int,
        stride: int,
        dtype: np.dtype[Any],
        generation: int,
        max_width: int | None = None,
        max_height: int | None = None,
        is_subimage: bool = False,
    ) -> None:
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        self._arena = arena
        self.offset = offset
        self.width = width
        self.height = height
        self.stride = stride
        self.dtype = np.dtype(dtype)
        self.generation = generation
        self.max_width = width if max_width is None else max_width
        self.max_height = height if max_height is None else max_height
        self._is_subimage = is_subimage

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        dtype: np.dtype[Any] | type | str = np.float32,
    ) -> GrayImage:
        """Allocate a standalone image with its own private arena."""
        dt = _normalize_dtype(dtype)
        arena = Arena(size_bytes=max(1, width * height * dt.itemsize))
        return arena.alloc_image(width, height, dt)

    @classmethod
    def from_array(cls, array: np.ndarray) -> GrayImage:
        """Create a standalone image holding a copy of a 2D array."""
        if array.ndim != 2:
            raise ValueError(f"Expected 2D array (H, W), got shape {array.shape}")
        image = cls.create(array.shape[1], array.shape[0], array.dtype)
        image.data[...] = array
        return image

    @property
    def arena(self) -> Arena:
        """Arena holding the pixel data."""
        return self._arena

    @property
    def data(self) -> np.ndarray:
        """Zero-copy (height, width) array over the image pixels."""
        return self._arena.view(self)

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width), matching the numpy view."""
        return (self.height, self.width)

    @property
    def is_subimage(self) -> bool:
        """True if this image borrows its pixels from a parent image."""
        return self._is_subimage

    def get(self, x: int, y: int) -> Any:
        return self.data[y, x]

    def set(self, x: int, y: int, value: Any) -> None:
        self.data[y, x] = value

    def subimage(self, x0: int, y0: int, x1: int, y1: int) -> GrayImage:
        """Create a view of the rectangle [x0, x1) x [y0, y1).

        The view shares the arena buffer with this image. Its reshape capacity
        extends to the edge of this image's own capacity.

        Raises:
            ValueError: If the rectangle is empty-inverted or outside the image
        """
        if x0 < 0 or y0 < 0 or x1 > self.width or y1 > self.height:
            raise ValueError(
                f"Sub-image ({x0},{y0})-({x1},{y1}) is outside the "
                f"{self.width}x{self.height} image"
            )
        if x1 < x0 or y1 < y0:
            raise ValueError(f"Sub-image corners are inverted: ({x0},{y0})-({x1},{y1})")

        return GrayImage(
            arena=self._arena,
            offset=self.offset + (y0 * self.stride + x0) * self.dtype.itemsize,
            width=x1 - x0,
            height=y1 - y0,
            stride=self.stride,
            dtype=self.dtype,
            generation=self.generation,
            max_width=self.max_width - x0,
            max_height=self.max_height - y0,
            is_subimage=True,
        )

    def reshape(self, width: int, height: int) -> None:
        """Change the logical extent in place.

        Shrinking, or growing back up to the capacity, never touches the pixel
        data. An owning image that must grow beyond its capacity is moved to a
        fresh private arena and its contents are discarded.

        Raises:
            ValueError: If a sub-image would grow beyond its parent's capacity
        """
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")
        if width == self.width and height == self.height:
            return

        if width <= self.max_width and height <= self.max_height:
            self.width = width
            self.height = height
            return

        if self._is_subimage:
            raise ValueError(
                f"Cannot reshape sub-image to {width}x{height}, capacity is "
                f"{self.max_width}x{self.max_height}"
            )

        fresh = GrayImage.create(width, height, self.dtype)
        self._arena = fresh.arena
        self.offset = fresh.offset
        self.width = self.max_width = self.stride = width
        self.height = self.max_height = height
        self.generation = fresh.generation

    def set_to(self, other: GrayImage) -> None:
        """Copy every sample of another image with the same shape into this one."""
        if other.width != self.width or other.height != self.height:
            raise ValueError(
                f"Shapes do not match: cannot copy {other.width}x{other.height} "
                f"into {self.width}x{self.height}"
            )
        # np.copyto handles overlapping views of the same buffer
        np.copyto(self.data, other.data, casting="unsafe")

    def copy(self) -> GrayImage:
        """Return an owning deep copy in a private arena."""
        return GrayImage.from_array(self.data)

    def __repr__(self) -> str:
        kind = "view" if self._is_subimage else "owner"
        return (
            f"GrayImage({self.width}x{self.height}, dtype={self.dtype}, "
            f"stride={self.stride}, {kind})"
        )
