"""Audio filter design and filtering (FIR, biquad, Butterworth IIR), window functions and a JPEG codec."""

__version__ = "0.1.0"