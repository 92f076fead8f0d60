"""HDR light values.

Radiance is an RGB triple of floating point light intensities. Unlike a
display color it has no upper bound: a bright area light may emit 15.0 in
every channel. Values only become displayable colors at the very end of a
render pass, through :meth:`Radiance.to_rgb`.

Radiance is immutable; every operation returns a new value, so results can
be accumulated additively across recursive calls without aliasing.

Example:
    >>> from src.lumen.core.radiance import Radiance
    >>> light = Radiance(15.0, 15.0, 15.0)
    >>> albedo = Radiance(0.5, 0.25, 1.0)
    >>> (light * albedo * 0.1).to_rgb(exposure=1.0)
    (191, 95, 255)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

# Sum of channels below which a Radiance counts as zero
ZERO_EPSILON = 1e-6

# Maximum value of one channel in 8-bit output
MAX_DISPLAY_VALUE = 255


@dataclass(frozen=True)
class Radiance:
    """Per-channel light intensity, unbounded above.

    Attributes:
        red: Red channel intensity.
        green: Green channel intensity.
        blue: Blue channel intensity.
    """

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    @classmethod
    def zero(cls) -> Radiance:
        """Return the radiance of complete darkness."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def gray(cls, value: float) -> Radiance:
        """Return a radiance with the same value in every channel."""
        return cls(value, value, value)

    @classmethod
    def from_rgb8(cls, red: int, green: int, blue: int) -> Radiance:
        """Map an 8-bit color to a radiance, with 255 mapped to 1.0."""
        return cls(red / 255.0, green / 255.0, blue / 255.0)

    @classmethod
    def sum(cls, values: Iterable[Radiance]) -> Radiance:
        """Add up any number of radiance values."""
        total = cls.zero()
        for value in values:
            total = total + value
        return total

    def scale(self, factor: float) -> Radiance:
        """Multiply every channel by a scalar."""
        return Radiance(self.red * factor, self.green * factor, self.blue * factor)

    def __add__(self, other: Radiance) -> Radiance:
        if not isinstance(other, Radiance):
            return NotImplemented
        return Radiance(
            self.red + other.red,
            self.green + other.green,
            self.blue + other.blue,
        )

    def __mul__(self, other: Radiance | float) -> Radiance:
        """Scale by a number, or attenuate component-wise by another Radiance."""
        if isinstance(other, Radiance):
            return Radiance(
                self.red * other.red,
                self.green * other.green,
                self.blue * other.blue,
            )
        if isinstance(other, (int, float)):
            return self.scale(float(other))
        return NotImplemented

    __rmul__ = __mul__

    def is_zero(self) -> bool:
        """Check whether the channels sum to (almost) nothing."""
        return self.red + self.green + self.blue < ZERO_EPSILON

    def max_channel(self) -> float:
        """Return the brightest channel value."""
        return max(self.red, self.green, self.blue)

    def as_tuple(self) -> tuple[float, float, float]:
        """Return the channels as an (R, G, B) tuple."""
        return (self.red, self.green, self.blue)

    def to_rgb(self, exposure: float = 1.0) -> tuple[int, int, int]:
        """Tone-map to an 8-bit color.

        Each channel is divided by the exposure, scaled so that 1.0 maps to
        255, truncated to an integer and clamped to [0, 255]. Everything at
        or above ``exposure`` is therefore displayed as full brightness.

        Args:
            exposure: Intensity that maps to full brightness. Must be positive.

        Returns:
            Tuple of (R, G, B) integers in [0, 255].

        Raises:
            ValueError: If exposure is not positive.
        """
        if exposure <= 0.0:
            raise ValueError(f"Exposure must be positive, got {exposure}")
        return (
            _to_display_value(self.red, exposure),
            _to_display_value(self.green, exposure),
            _to_display_value(self.blue, exposure),
        )


def _to_display_value(intensity: float, exposure: float) -> int:
    value = int(intensity / exposure * MAX_DISPLAY_VALUE)
    return min(max(value, 0), MAX_DISPLAY_VALUE)
