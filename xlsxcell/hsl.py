"""Conversions between RGB and HSL colour coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class HSL:
    """A colour in hue, saturation, lightness coordinates, each in 0..1."""

    h: float
    s: float
    l: float

    def rgba(self) -> tuple[int, int, int, int]:
        """Return 16-bit alpha-premultiplied red, green, blue and alpha."""
        r, g, b = hsl_to_rgb(self.h, self.s, self.l)
        return r * 0x101, g * 0x101, b * 0x101, 0xFFFF


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be in 0..255, got {value}")


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Convert 8-bit red, green and blue into (h, s, l)."""
    for name, value in (("r", r), ("g", g), ("b", b)):
        _check_byte(name, value)
    fr, fg, fb = r / 255, g / 255, b / 255
    hi = max(fr, fg, fb)
    lo = min(fr, fg, fb)
    l = (hi + lo) / 2
    if hi == lo:
        return 0.0, 0.0, l
    d = hi - lo
    s = d / (2.0 - hi - lo) if l > 0.5 else d / (hi + lo)
    if hi == fr:
        h = (fg - fb) / d
        if fg < fb:
            h += 6
    elif hi == fg:
        h = (fb - fr) / d + 2
    else:
        h = (fr - fg) / d + 4
    return h / 6, s, l


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1.0 / 6:
        return p + (q - p) * 6 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3:
        return p + (q - p) * (2.0 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:
    """Convert (h, s, l) into 8-bit red, green and blue."""
    if s == 0:
        fr = fg = fb = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - s * l
        p = 2 * l - q
        fr = _hue_to_rgb(p, q, h + 1.0 / 3)
        fg = _hue_to_rgb(p, q, h)
        fb = _hue_to_rgb(p, q, h - 1.0 / 3)
    return tuple(int(c * 255 + 0.5) & 0xFF for c in (fr, fg, fb))  # type: ignore[return-value]


def hsl_model(color: Any) -> HSL:
    """Convert a colour to HSL.

    Accepts an HSL (returned unchanged), an object with an ``rgba()`` method
    giving 16-bit components, or a sequence of 16-bit (r, g, b, a) values.
    """
    if isinstance(color, HSL):
        return color
    components = color.rgba() if hasattr(color, "rgba") else tuple(color)
    r, g, b = (int(c) >> 8 for c in components[:3])
    return HSL(*rgb_to_hsl(r & 0xFF, g & 0xFF, b & 0xFF))