"""FIR and biquad filter design and application for mono signals."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from npukit.dsp_math import sinc
from npukit.window import WindowType, bind_window

__all__ = ["fir_lowpass", "fir", "biquad_lowpass", "biquad"]


def _mono(signal, name: str) -> np.ndarray:
    data = np.asarray(signal, dtype=np.float64)
    if data.ndim != 1:
        raise ValueError(f"only mono audio is supported; {name} has {data.ndim} dimensions")
    return data


def fir_lowpass(
    length: int,
    window_type: WindowType,
    cutoff: float,
    args: Optional[Sequence[float]] = None,
) -> np.ndarray:
    """Design a windowed-sinc lowpass FIR kernel normalised to unit DC gain.

    ``cutoff`` is the normalised cutoff frequency (cutoff_Hz / samplerate_Hz).
    """
    window = bind_window(window_type, args)
    taps = []
    for i in range(length):
        t = i - (length - 1) / 2
        taps.append(sinc(2 * cutoff * t) * window(i, length))
    total = sum(taps)
    return np.array([tap / total for tap in taps])


def fir(signal, kernel) -> np.ndarray:
    """Filter a mono signal with an FIR kernel; output has the input's length."""
    data = _mono(signal, "signal")
    taps = _mono(kernel, "kernel")
    if taps.size == 0:
        raise ValueError("kernel must not be empty")
    return np.convolve(data, taps)[: data.size]


def biquad_lowpass(frequency: float, q: float) -> np.ndarray:
    """Design lowpass biquad coefficients ``[a0, a1, a2, b0, b1, b2]``.

    ``a`` are the feed-forward and ``b`` the feedback coefficients;
    ``frequency`` is normalised (frequency_Hz / samplerate_Hz) and ``q`` is
    the Q-factor.
    """
    k = math.tan(math.pi * frequency)
    k2 = k * k
    norm = 1 / (1 + k / q + k2)
    a0 = k2 * norm
    a1 = 2 * a0
    a2 = a0
    b0 = 1.0
    b1 = 2 * (k2 - 1) * norm
    b2 = (1 - k / q + k2) * norm
    return np.array([a0, a1, a2, b0, b1, b2])


def biquad(signal, coefficients) -> np.ndarray:
    """Filter a mono signal with biquad coefficients ``[a0, a1, a2, b0, b1, b2]``."""
    data = _mono(signal, "signal")
    coeffs = _mono(coefficients, "coefficients")
    if coeffs.size != 6:
        raise ValueError(f"a biquad needs 6 coefficients, got {coeffs.size}")
    a0, a1, a2, b0, b1, b2 = (float(c) for c in coeffs)
    if b0 == 0:
        raise ValueError("leading feedback coefficient must not be zero")
    out = np.empty_like(data)
    x1 = x2 = y1 = y2 = 0.0
    for n, x in enumerate(data.tolist()):
        y = (a0 * x + a1 * x1 + a2 * x2 - b1 * y1 - b2 * y2) / b0
        out[n] = y
        x2, x1 = x1, x
        y2, y1 = y1, y
    return out