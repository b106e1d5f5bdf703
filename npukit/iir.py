"""IIR lowpass design and filtering with second-order sections."""

from __future__ import annotations

import numpy as np

from npukit.filters import biquad
from npukit.iir_design import Zpk, bilinear, lp2lp_zpk, to_sos, warp_freq

__all__ = ["iir_lowpass", "iir"]


def iir_lowpass(filter: Zpk, frequency: float, fs: float) -> np.ndarray:
    """Digitise an analog lowpass prototype at cutoff ``frequency`` for rate ``fs``.

    Returns an array of shape ``(sections, 6)``, each row
    ``[b0, b1, b2, a0, a1, a2]``.
    """
    warped = warp_freq(frequency, fs)
    digital = bilinear(lp2lp_zpk(filter, warped), 2.0)
    return np.array(to_sos(digital), dtype=np.float64)


def iir(signal, sos) -> np.ndarray:
    """Filter a mono signal through a cascade of second-order sections."""
    data = np.asarray(signal, dtype=np.float64)
    if data.ndim != 1:
        raise ValueError(
            f"only mono audio is supported; signal has {data.ndim} dimensions"
        )
    sections = np.asarray(sos, dtype=np.float64)
    if sections.ndim != 2 or sections.shape[1] != 6:
        raise ValueError(
            f"second-order sections must have shape (n, 6), got {sections.shape}"
        )
    out = data.copy()
    for row in sections:
        out = biquad(out, row)
    return out