"""Tests for the Naive, Inner and Border wavelet kernels."""

from __future__ import annotations

import numpy as np
import pytest

from wavelet_ecs.wavelet.families import get_description
from wavelet_ecs.wavelet.impl import border as border_kernel
from wavelet_ecs.wavelet.impl import inner, naive

FLOAT_FAMILIES = ["haar", "daub4", "daub8", "sym4", "bior53"]
INT_FAMILIES = ["haar-int", "bior53-int"]
BORDERS = ["wrap", "reflect"]
LENGTHS = [3, 4, 7, 16, 21, 33]


def _fast_forward(desc, source: np.ndarray, target: np.ndarray, vertical: bool) -> None:
    if vertical:
        inner.vertical(desc.border, desc.forward, source, target)
        border_kernel.vertical(desc.border, desc.forward, source, target)
    else:
        inner.horizontal(desc.border, desc.forward, source, target)
        border_kernel.horizontal(desc.border, desc.forward, source, target)


def _fast_inverse(desc, source: np.ndarray, target: np.ndarray, vertical: bool) -> None:
    if vertical:
        inner.vertical_inverse(desc.border, desc.inverse, source, target)
        border_kernel.vertical_inverse(desc.border, desc.inverse, source, target)
    else:
        inner.horizontal_inverse(desc.border, desc.inverse, source, target)
        border_kernel.horizontal_inverse(desc.border, desc.inverse, source, target)


class TestFloatKernels:
    """Inner + Border must produce exactly what Naive produces."""

    @pytest.mark.parametrize("family", FLOAT_FAMILIES)
    @pytest.mark.parametrize("border", BORDERS)
    @pytest.mark.parametrize("length", LENGTHS)
    def test_horizontal(self, family: str, border: str, length: int) -> None:
        desc = get_description(family, border=border)
        rng = np.random.default_rng(length)
        source = rng.random((3, length), dtype=np.float32)
        padded = length + length % 2

        expected = np.zeros((3, padded), dtype=np.float32)
        naive.horizontal(desc.border, desc.forward, source, expected)

        # NaN marks any sample neither fast kernel wrote
        actual = np.full((3, padded), np.nan, dtype=np.float32)
        _fast_forward(desc, source, actual, vertical=False)

        np.testing.assert_allclose(actual, expected, rtol=1e-6, atol=1e-6)

    @pytest.mark.parametrize("family", FLOAT_FAMILIES)
    @pytest.mark.parametrize("border", BORDERS)
    @pytest.mark.parametrize("length", LENGTHS)
    def test_vertical(self, family: str, border: str, length: int) -> None:
        desc = get_description(family, border=border)
        rng = np.random.default_rng(100 + length)
        source = rng.random((length, 5), dtype=np.float32)
        padded = length + length % 2

        expected = np.zeros((padded, 5), dtype=np.float32)
        naive.vertical(desc.border, desc.forward, source, expected)

        actual = np.full((padded, 5), np.nan, dtype=np.float32)
        _fast_forward(desc, source, actual, vertical=True)

        np.testing.assert_allclose(actual, expected, rtol=1e-6, atol=1e-6)

    @pytest.mark.parametrize("family", FLOAT_FAMILIES)
    @pytest.mark.parametrize("border", BORDERS)
    @pytest.mark.parametrize("length", LENGTHS)
    def test_horizontal_inverse(self, family: str, border: str, length: int) -> None:
        desc = get_description(family, border=border)
        rng = np.random.default_rng(200 + length)
        padded = length + length % 2
        source = rng.random((3, padded), dtype=np.float32)

        expected = np.zeros((3, length), dtype=np.float32)
        naive.horizontal_inverse(desc.border, desc.inverse, source, expected)

        actual = np.full((3, length), np.nan, dtype=np.float32)
        _fast_inverse(desc, source, actual, vertical=False)

        np.testing.assert_allclose(actual, expected, rtol=1e-6, atol=1e-6)

    @pytest.mark.parametrize("family", FLOAT_FAMILIES)
    @pytest.mark.parametrize("border", BORDERS)
    @pytest.mark.parametrize("length", LENGTHS)
    def test_vertical_inverse(self, family: str, border: str, length: int) -> None:
        desc = get_description(family, border=border)
        rng = np.random.default_rng(300 + length)
        padded = length + length % 2
        source = rng.random((padded, 4), dtype=np.float32)

        expected = np.zeros((length, 4), dtype=np.float32)
        naive.vertical_inverse(desc.border, desc.inverse, source, expected)

        actual = np.full((length, 4), np.nan, dtype=np.float32)
        _fast_inverse(desc, source, actual, vertical=True)

        np.testing.assert_allclose(actual, expected, rtol=1e-6, atol=1e-6)


class TestIntegerKernels:
    """Integer coefficients are summed exactly, so the paths agree bit for bit."""

    SENTINEL = np.iinfo(np.int16).min

    @pytest.mark.parametrize("family", INT_FAMILIES)
    @pytest.mark.parametrize("border", BORDERS)
    @pytest.mark.parametrize("length", LENGTHS)
    def test_horizontal(self, family: str, border: str, length: int) -> None:
        desc = get_description(family, border=border)
        rng = np.random.default_rng(length)
        source = rng.integers(0, 256, size=(4, length), dtype=np.uint8)
        padded = length + length % 2

        expected = np.zeros((4, padded), dtype=np.int16)
        naive.horizontal(desc.border, desc.forward, source, expected)

        actual = np.full((4, padded), self.SENTINEL, dtype=np.int16)
        _fast_forward(desc, source, actual, vertical=False)

        np.testing.assert_array_equal(actual, expected)

    @pytest.mark.parametrize("family", INT_FAMILIES)
    @pytest.mark.parametrize("border", BORDERS)
    @pytest.mark.parametrize("length", LENGTHS)
    def test_vertical(self, family: str, border: str, length: int) -> None:
        desc = get_description(family, border=border)
        rng = np.random.default_rng(50 + length)
        source = rng.integers(-255, 511, size=(length, 4)).astype(np.int16)
        padded = length + length % 2

        expected = np.zeros((padded, 4), dtype=np.int16)
        naive.vertical(desc.border, desc.forward, source, expected)

        actual = np.full((padded, 4), self.SENTINEL, dtype=np.int16)
        _fast_forward(desc, source, actual, vertical=True)

        np.testing.assert_array_equal(actual, expected)

    @pytest.mark.parametrize("family", INT_FAMILIES)
    @pytest.mark.parametrize("border", BORDERS)
    @pytest.mark.parametrize("length", LENGTHS)
    def test_horizontal_inverse(self, family: str, border: str, length: int) -> None:
        desc = get_description(family, border=border)
        rng = np.random.default_rng(150 + length)
        padded = length + length % 2
        source = rng.integers(-512, 512, size=(3, padded)).astype(np.int16)

        expected = np.zeros((3, length), dtype=np.int16)
        naive.horizontal_inverse(desc.border, desc.inverse, source, expected)

        actual = np.full((3, length), self.SENTINEL, dtype=np.int16)
        _fast_inverse(desc, source, actual, vertical=False)

        np.testing.assert_array_equal(actual, expected)

    @pytest.mark.parametrize("family", INT_FAMILIES)
    @pytest.mark.parametrize("border", BORDERS)
    @pytest.mark.parametrize("length", LENGTHS)
    def test_vertical_inverse(self, family: str, border: str, length: int) -> None:
        desc = get_description(family, border=border)
        rng = np.random.default_rng(250 + length)
        padded = length + length % 2
        source = rng.integers(-512, 512, size=(padded, 4)).astype(np.int16)

        expected = np.zeros((length, 4), dtype=np.int16)
        naive.vertical_inverse(desc.border, desc.inverse, source, expected)

        actual = np.full((length, 4), self.SENTINEL, dtype=np.int16)
        _fast_inverse(desc, source, actual, vertical=True)

        np.testing.assert_array_equal(actual, expected)

    def test_haar_int_row_round_trip(self) -> None:
        desc = get_description("haar-int")
        source = np.array([[2, 1, 5, 5]], dtype=np.uint8)
        bands = np.zeros((1, 4), dtype=np.int16)
        naive.horizontal(desc.border, desc.forward, source, bands)
        np.testing.assert_array_equal(bands[0], [3, 10, 1, 0])

        rebuilt = np.zeros((1, 4), dtype=np.int16)
        naive.horizontal_inverse(desc.border, desc.inverse, bands, rebuilt)
        np.testing.assert_array_equal(rebuilt, source)

    @pytest.mark.parametrize("strategy", ["naive", "fast"])
    @pytest.mark.parametrize("border", BORDERS)
    @pytest.mark.parametrize("length", LENGTHS)
    def test_haar_int_is_lossless(self, strategy: str, border: str, length: int) -> None:
        """Every pixel is rebuilt, odd rows included."""
        desc = get_description("haar-int", border=border)
        rng = np.random.default_rng(400 + length)
        source = rng.integers(0, 256, size=(length, length), dtype=np.uint8)
        padded = length + length % 2

        rows = np.zeros((length, padded), dtype=np.int16)
        bands = np.zeros((padded, padded), dtype=np.int16)
        _fast_forward(desc, source, rows, vertical=False)
        _fast_forward(desc, rows, bands, vertical=True)

        columns = np.zeros((length, padded), dtype=np.int16)
        rebuilt = np.zeros((length, length), dtype=np.int16)
        if strategy == "naive":
            naive.vertical_inverse(desc.border, desc.inverse, bands, columns)
            naive.horizontal_inverse(desc.border, desc.inverse, columns, rebuilt)
        else:
            _fast_inverse(desc, bands, columns, vertical=True)
            _fast_inverse(desc, columns, rebuilt, vertical=False)
        np.testing.assert_array_equal(rebuilt, source)


class TestNaiveValues:
    """Hand computed outputs of the reference kernels."""

    def test_haar_rows(self) -> None:
        desc = get_description("haar")
        r = 2.0 ** -0.5
        source = np.array([[1.0, 3.0, 5.0, 7.0]], dtype=np.float32)
        output = np.zeros((1, 4), dtype=np.float32)
        naive.horizontal(desc.border, desc.forward, source, output)
        np.testing.assert_allclose(output[0], [4 * r, 12 * r, -2 * r, -2 * r], rtol=1e-6)

    def test_odd_row_pads_with_zero(self) -> None:
        """The missing last sample of an odd row reads as zero."""
        desc = get_description("haar-int")
        source = np.array([[10, 4, 7]], dtype=np.uint8)
        output = np.zeros((1, 4), dtype=np.int16)
        naive.horizontal(desc.border, desc.forward, source, output)
        np.testing.assert_array_equal(output[0], [14, 7, 6, 7])

    def test_bior53_int_rounds_half_up(self) -> None:
        desc = get_description("bior53-int")
        source = np.array([[0, 1, 0, 0, 0, 0]], dtype=np.uint8)
        output = np.zeros((1, 6), dtype=np.int16)
        naive.horizontal(desc.border, desc.forward, source, output)
        # s0 = 2/8 and s1 = 2/8 round to 0, d0 = 2/2 = 1
        np.testing.assert_array_equal(output[0], [0, 0, 0, 1, 0, 0])

    @pytest.mark.parametrize("family", ["haar", "daub4", "sym4", "bior53"])
    def test_wrap_rows_reconstruct(self, family: str) -> None:
        """A periodic row is rebuilt from its two bands."""
        desc = get_description(family)
        rng = np.random.default_rng(7)
        source = rng.random((2, 16), dtype=np.float32)
        bands = np.zeros((2, 16), dtype=np.float32)
        naive.horizontal(desc.border, desc.forward, source, bands)
        rebuilt = np.zeros((2, 16), dtype=np.float32)
        naive.horizontal_inverse(desc.border, desc.inverse, bands, rebuilt)
        np.testing.assert_allclose(rebuilt, source, atol=1e-5)
