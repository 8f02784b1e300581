"""Border rules: how samples outside a signal are synthesised.

A border rule maps any integer position onto a valid index of a signal and
reports how wide the lower and upper border bands are for a coefficient set.
Samples inside those bands need synthesised neighbours and are computed by the
Border kernel; everything between them is left to the Inner kernel.

Widths are in samples of the pass output: forward widths count positions of
the padded (even) transformed row, inverse widths count positions of the
reconstructed row.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wavelet_ecs.wavelet.coefficients import WaveletCoefficients


class BorderRule(ABC):
    """Boundary extension policy shared by forward and inverse passes."""

    name: str = ""

    @abstractmethod
    def index(self, position: int, length: int) -> int:
        """Map ``position`` onto ``[0, length)``."""

    def forward_lower(self, coef: WaveletCoefficients) -> int:
        """Outputs at the start of a forward row whose support starts below 0."""
        below = max(0, -coef.min_offset)
        return 2 * ((below + 1) // 2)

    def forward_upper(self, coef: WaveletCoefficients, length: int) -> int:
        """Outputs at the end of a forward row whose support passes ``length - 1``."""
        padded = length + length % 2
        half = padded // 2
        k_lo = self.forward_lower(coef) // 2
        k_hi = (length - 1 - coef.max_extent) // 2 + 1
        k_hi = min(max(k_hi, k_lo), half)
        return padded - 2 * k_hi

    def inverse_lower(self, coef: WaveletCoefficients) -> int:
        """Reconstructed samples at the start of a row that need coefficients below 0."""
        return max(0, coef.max_extent)

    def inverse_upper(self, coef: WaveletCoefficients, length: int) -> int:
        """Reconstructed samples at the end of a row that need coefficients past the band."""
        padded = length + length % 2
        j_lo = min(self.inverse_lower(coef), length)
        j_hi = min(max(padded + coef.min_offset, j_lo), length)
        return length - j_hi

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class WrapBorder(BorderRule):
    """Periodic extension: ... n-2 n-1 | 0 1 ... n-1 | 0 1 ...

    With periodic extension the inverse of any perfect reconstruction filter
    pair is exact, whatever the signal length.
    """

    name = "wrap"

    def index(self, position: int, length: int) -> int:
        return position % length


class ReflectBorder(BorderRule):
    """Mirror extension without repeating the edge: ... 2 1 | 0 1 2 ... n-1 | n-2 ..."""

    name = "reflect"

    def index(self, position: int, length: int) -> int:
        if length == 1:
            return 0
        period = 2 * (length - 1)
        position %= period
        if position < length:
            return position
        return period - position


BORDER_RULES: dict[str, type[BorderRule]] = {
    WrapBorder.name: WrapBorder,
    ReflectBorder.name: ReflectBorder,
}


def border_rule(name: str | BorderRule) -> BorderRule:
    """Resolve a border rule by name. Instances are returned unchanged."""
    if isinstance(name, BorderRule):
        return name
    try:
        return BORDER_RULES[name]()
    except KeyError as e:
        raise ValueError(
            f"Border rule '{name}' not supported. Available: {list(BORDER_RULES)}"
        ) from e
