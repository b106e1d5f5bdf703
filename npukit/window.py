"""Window functions for filter design."""

from __future__ import annotations

import enum
import math
from functools import partial
from typing import Callable, Optional, Sequence

from npukit.dsp_math import besseli0

__all__ = [
    "WindowType",
    "window_kaiser",
    "window_kbd",
    "window_hamming",
    "window_hann",
    "window_blackmanharris",
    "window_blackmanharris7",
    "window_flattop",
    "window_triangular",
    "bind_window",
]

WindowFunction = Callable[[int, int], float]


class WindowType(enum.Enum):
    """Kinds of window that :func:`bind_window` can produce."""

    KBD = enum.auto()
    KAISER = enum.auto()
    HAMMING = enum.auto()
    HANN = enum.auto()
    BLACKMANHARRIS = enum.auto()
    BLACKMANHARRIS7 = enum.auto()
    FLATTOP = enum.auto()
    TRIANGULAR = enum.auto()


def _phase(i: int, length: int) -> float:
    return 2 * math.pi * i / (length - 1)


def window_kaiser(i: int, length: int, beta: float) -> float:
    """Kaiser window sample ``i`` of ``length`` with shape parameter ``beta``."""
    t = i - (length - 1) / 2
    r = 2.0 * t / (length - 1)
    a = besseli0(beta * math.sqrt(max(0.0, 1 - r * r)))
    b = besseli0(beta)
    return a / b


def window_kbd(i: int, length: int, beta: float) -> float:
    """Kaiser-Bessel-derived window sample ``i`` of ``length``."""
    half = length // 2
    if i >= half:
        i = length - i - 1
        if i >= half:
            raise ValueError(
                f"KBD window has no sample {length - i - 1} for length {length}"
            )
    w0 = 0.0
    w1 = 0.0
    for j in range(half + 1):
        w = window_kaiser(j, half + 1, beta)
        w1 += w
        if j <= i:
            w0 += w
    return math.sqrt(w0 / w1)


def window_hamming(i: int, length: int) -> float:
    """Hamming window sample ``i`` of ``length``."""
    return 0.53836 - 0.46164 * math.cos(_phase(i, length))


def window_hann(i: int, length: int) -> float:
    """Hann window sample ``i`` of ``length``."""
    return 0.5 - 0.5 * math.cos(_phase(i, length))


def window_blackmanharris(i: int, length: int) -> float:
    """Four-term Blackman-Harris window sample ``i`` of ``length``."""
    a0, a1, a2, a3 = 0.35875, 0.48829, 0.14128, 0.01168
    t = _phase(i, length)
    return a0 - a1 * math.cos(t) + a2 * math.cos(2 * t) - a3 * math.cos(3 * t)


def window_blackmanharris7(i: int, length: int) -> float:
    """Seven-term Blackman-Harris window sample ``i`` of ``length``."""
    a0, a1, a2, a3 = 0.27105, 0.43329, 0.21812, 0.06592
    a4, a5, a6 = 0.01081, 0.00077, 0.00001
    t = _phase(i, length)
    return (
        a0
        - a1 * math.cos(t)
        + a2 * math.cos(2 * t)
        - a3 * math.cos(3 * t)
        + a4 * math.cos(4 * t)
        - a5 * math.cos(5 * t)
        + a6 * math.cos(6 * t)
    )


def window_flattop(i: int, length: int) -> float:
    """Flat-top window sample ``i`` of ``length``."""
    a0, a1, a2, a3, a4 = 1.000, 1.930, 1.290, 0.388, 0.028
    t = _phase(i, length)
    return (
        a0
        - a1 * math.cos(t)
        + a2 * math.cos(2 * t)
        - a3 * math.cos(3 * t)
        + a4 * math.cos(4 * t)
    )


def window_triangular(i: int, length: int, n: float) -> float:
    """Triangular window sample ``i`` of ``length`` with base width ``n``."""
    v0 = i - (length - 1) / 2.0
    v1 = n / 2.0
    return 1.0 - abs(v0 / v1)


_PLAIN = {
    WindowType.HAMMING: window_hamming,
    WindowType.HANN: window_hann,
    WindowType.BLACKMANHARRIS: window_blackmanharris,
    WindowType.BLACKMANHARRIS7: window_blackmanharris7,
    WindowType.FLATTOP: window_flattop,
}

_PARAMETRISED = {
    WindowType.KAISER: window_kaiser,
    WindowType.KBD: window_kbd,
    WindowType.TRIANGULAR: window_triangular,
}


def bind_window(
    window_type: WindowType, args: Optional[Sequence[float]] = None
) -> WindowFunction:
    """Return a function ``(i, length) -> float`` for the chosen window.

    Kaiser, KBD and triangular windows take their parameter from ``args[0]``.
    """
    if window_type in _PLAIN:
        return _PLAIN[window_type]
    if window_type in _PARAMETRISED:
        if not args:
            raise ValueError(f"{window_type.name} window needs an argument")
        return partial(_PARAMETRISED[window_type], **_param_name(window_type, args[0]))
    raise ValueError(f"unknown window type: {window_type!r}")


def _param_name(window_type: WindowType, value: float) -> dict:
    if window_type is WindowType.TRIANGULAR:
        return {"n": value}
    return {"beta": value}