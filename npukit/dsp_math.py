"""Elementary math helpers used by the filter and window designs."""

from __future__ import annotations

import math

__all__ = ["sinc", "besseli0"]


def sinc(x: float) -> float:
    """Return the unnormalised sinc, ``sin(x) / x``, with its limit 1 at zero."""
    if x == 0:
        return 1.0
    return math.sin(x) / x


def besseli0(x: float) -> float:
    """Return the modified Bessel function of the first kind, order zero."""
    half = x / 2.0
    term = 1.0
    total = 1.0
    k = 1
    while True:
        term *= (half / k) ** 2
        total += term
        if term <= total * 1e-17:
            return total
        k += 1