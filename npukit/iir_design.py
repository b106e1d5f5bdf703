"""IIR filter design in zero-pole-gain form and conversion to second-order sections."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

__all__ = [
    "Zpk",
    "ZeroPolePair",
    "butterworth",
    "bilinear",
    "zpk2tf_poly",
    "zpk2tf",
    "is_real",
    "cplxreal",
    "nearest_real_or_complex",
    "count_real",
    "warp_freq",
    "lp2lp_zpk",
    "to_sos",
]

_MAX_BUTTERWORTH_ORDER = 12


@dataclass
class Zpk:
    """A filter given by its zeros ``z``, poles ``p`` and gain ``k``."""

    z: List[complex] = field(default_factory=list)
    p: List[complex] = field(default_factory=list)
    k: float = 1.0


@dataclass
class ZeroPolePair:
    """Two poles and two zeros that together form one second-order section."""

    p1: complex
    p2: complex
    z1: complex
    z2: complex


def butterworth(order: int) -> Zpk:
    """Return the analog Butterworth lowpass prototype of the given order.

    Orders 1 to 12 are supported; any other order gives a filter with no
    zeros, no poles and unit gain.
    """
    if not 1 <= order <= _MAX_BUTTERWORTH_ORDER:
        return Zpk([], [], 1.0)
    poles = []
    for m in range(order - 1, -order, -2):
        theta = math.pi * m / (2 * order)
        poles.append(complex(-math.cos(theta), -math.sin(theta)))
    return Zpk([], poles, 1.0)


def bilinear(filter: Zpk, fs: float) -> Zpk:
    """Map an analog filter to a digital one with the bilinear transform."""
    fs2 = 2.0 * fs
    z_den = [fs2 - z for z in filter.z]
    p_den = [fs2 - p for p in filter.p]
    zeros = [(fs2 + z) / d for z, d in zip(filter.z, z_den)]
    poles = [(fs2 + p) / d for p, d in zip(filter.p, p_den)]
    zeros = zeros[: len(poles)] + [complex(-1.0)] * (len(poles) - len(zeros))
    gain_ratio = math.prod(z_den, start=complex(1.0)) / math.prod(
        p_den, start=complex(1.0)
    )
    return Zpk(zeros, poles, filter.k * gain_ratio.real)


def zpk2tf_poly(x: complex, y: complex) -> List[float]:
    """Return the quadratic ``[1, -(x + y), x * y]`` built from two roots."""
    return [1.0, -(x.real + y.real), x.real * y.real - x.imag * y.imag]


def zpk2tf(pairs: ZeroPolePair, k: float) -> List[float]:
    """Return one section ``[b0, b1, b2, a0, a1, a2]`` with numerator gain ``k``."""
    numerator = [k * c for c in zpk2tf_poly(pairs.z1, pairs.z2)]
    denominator = zpk2tf_poly(pairs.p1, pairs.p2)
    return numerator + denominator


def is_real(x: complex) -> bool:
    """Whether ``x`` has an imaginary part of exactly zero."""
    return complex(x).imag == 0


def cplxreal(values: Sequence[complex]) -> List[complex]:
    """Sort by real part and fold each conjugate pair into one positive-imaginary entry."""
    result = sorted((complex(v) for v in values), key=lambda c: c.real)
    tol = sys.float_info.epsilon * 100
    i = len(result)
    while i > 1:
        a, b = result[i - 2], result[i - 1]
        if (
            not is_real(a)
            and not is_real(b)
            and abs(b.real - a.real) < tol
            and abs(b.imag + a.imag) < tol
        ):
            del result[i - 1]
            result[i - 2] = complex(a.real, abs(a.imag))
        i -= 1
    return result


def nearest_real_or_complex(
    values: Sequence[complex], val: complex, must_be_real: bool = True
) -> int:
    """Index of the value nearest ``val`` among the real (or only the non-real) ones.

    Raises ValueError when no value of the requested kind exists.
    """
    candidates = [i for i, v in enumerate(values) if is_real(v) == must_be_real]
    if not candidates:
        kind = "real" if must_be_real else "complex"
        raise ValueError(f"no {kind} value to choose from")
    return min(candidates, key=lambda i: abs(val - values[i]))


def count_real(values: Sequence[complex]) -> int:
    """Number of values with an imaginary part of exactly zero."""
    return sum(1 for v in values if is_real(v))


def warp_freq(frequency: float, fs: float) -> float:
    """Pre-warp a cutoff frequency for a bilinear transform at ``fs = 2``."""
    normalised = 2 * frequency / fs
    warped_fs = 2.0
    return 2 * warped_fs * math.tan(math.pi * normalised / warped_fs)


def lp2lp_zpk(filter: Zpk, wo: float) -> Zpk:
    """Move the cutoff of an analog lowpass prototype to ``wo``."""
    return Zpk(
        [wo * z for z in filter.z],
        [wo * p for p in filter.p],
        filter.k * wo ** (len(filter.p) - len(filter.z)),
    )


def _index_of_min(values: Sequence[complex], key: Callable[[complex], float]) -> int:
    if not values:
        raise ValueError("ran out of poles or zeros while forming sections")
    return min(range(len(values)), key=lambda i: key(values[i]))


def to_sos(filter: Zpk) -> List[List[float]]:
    """Convert a digital filter to second-order sections, one row of six per section."""
    if not filter.p and not filter.z:
        return [[filter.k, 0.0, 0.0, 1.0, 0.0, 0.0]]

    length = max(len(filter.p), len(filter.z))
    zeros = [complex(z) for z in filter.z] + [0j] * (length - len(filter.z))
    poles = [complex(p) for p in filter.p] + [0j] * (length - len(filter.p))
    n_sections = (length + 1) // 2
    if length % 2:
        zeros.append(0j)
        poles.append(0j)

    zeros = cplxreal(zeros)
    poles = cplxreal(poles)

    pairs: List[ZeroPolePair] = []
    for _ in range(n_sections):
        p1 = poles.pop(_index_of_min(poles, lambda p: abs(1 - abs(p))))

        if is_real(p1) and count_real(poles) == 0:
            z1 = zeros.pop(nearest_real_or_complex(zeros, p1, True))
            p2 = z2 = 0j
        else:
            if not is_real(p1) and count_real(zeros) == 1:
                z1_idx = nearest_real_or_complex(zeros, p1, False)
            else:
                z1_idx = _index_of_min(zeros, lambda z: abs(p1 - z))
            z1 = zeros.pop(z1_idx)

            if not is_real(p1):
                p2 = p1.conjugate()
                if not is_real(z1):
                    z2 = z1.conjugate()
                else:
                    z2 = zeros.pop(nearest_real_or_complex(zeros, p1, True))
            else:
                if not is_real(z1):
                    z2 = z1.conjugate()
                    p2_idx = nearest_real_or_complex(poles, p1, True)
                else:
                    p2_idx = _index_of_min(poles, lambda p: abs(abs(p) - 1))
                    z2 = zeros.pop(nearest_real_or_complex(zeros, poles[p2_idx], True))
                p2 = poles.pop(p2_idx)

        pairs.append(ZeroPolePair(p1, p2, z1, z2))

    return [
        zpk2tf(pair, filter.k if si == 0 else 1.0)
        for si, pair in enumerate(reversed(pairs))
    ]