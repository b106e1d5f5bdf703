# npukit

Tools for designing and applying audio filters to mono signals, plus a small
JPEG image decoder and encoder.

## Installation

```
pip install .
```

To run the test suite, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## Audio filters

All filtering functions take one-dimensional (mono) signals. Anything with
more dimensions raises `ValueError`.

### Math helpers

`npukit.dsp_math` has `sinc(x)` (the unnormalised `sin(x) / x`, equal to 1 at
zero) and `besseli0(x)`, the modified Bessel function of the first kind,
order zero.

### Window functions

`npukit.window` provides window functions for FIR design:
`window_hamming`, `window_hann`, `window_blackmanharris` (4 terms),
`window_blackmanharris7` (7 terms), `window_flattop`, `window_triangular`,
`window_kaiser` and `window_kbd` (Kaiser-Bessel-derived). Each takes a
sample index `i` and a window `length`; Kaiser and KBD also take `beta`, and
triangular takes its base width `n`.

`bind_window(window_type, args)` takes a `WindowType` and returns a callable
`(i, length) -> weight`. Kaiser, KBD and triangular windows read their
parameter from `args[0]` and raise `ValueError` if `args` is empty or `None`.

### FIR and biquad filters

```python
from npukit.filters import fir_lowpass, fir, biquad_lowpass, biquad
from npukit.window import WindowType

kernel = fir_lowpass(31, WindowType.HAMMING, 0.1, None)
smoothed = fir(signal, kernel)

coefficients = biquad_lowpass(0.05, 0.707)
filtered = biquad(signal, coefficients)
```

- `fir_lowpass(length, window_type, cutoff, args)` returns a windowed-sinc
  kernel normalised to unit sum. `cutoff` is the cutoff in Hz divided by the
  sample rate.
- `fir(signal, kernel)` convolves the signal with the kernel and returns an
  output of the same length as the input.
- `biquad_lowpass(frequency, q)` returns six coefficients
  `[a0, a1, a2, b0, b1, b2]`, where `a` are feed-forward and `b` feedback
  coefficients; `frequency` is normalised the same way as above.
- `biquad(signal, coefficients)` runs the signal through one biquad section
  with that coefficient layout.

### Butterworth IIR filters

```python
from npukit.iir_design import butterworth
from npukit.iir import iir_lowpass, iir

sos = iir_lowpass(butterworth(4), 1000.0, 48000.0)
filtered = iir(signal, sos)
```

`iir_lowpass(filter, frequency, fs)` pre-warps the cutoff, scales the analog
prototype, applies the bilinear transform and returns an array of shape
`(sections, 6)`, one `[b0, b1, b2, a0, a1, a2]` row per second-order section.
`iir(signal, sos)` runs the signal through the sections in order.

`npukit.iir_design` holds the design steps on their own:

- `Zpk` holds zeros `z`, poles `p` and gain `k`; `ZeroPolePair` holds the two
  poles and two zeros of one section.
- `butterworth(order)` gives the analog prototype for orders 1 to 12; any
  other order gives a filter with no zeros, no poles and unit gain.
- `warp_freq`, `lp2lp_zpk`, `bilinear` and `to_sos` are the individual design
  steps; `zpk2tf`, `zpk2tf_poly`, `cplxreal`, `nearest_real_or_complex`,
  `count_real` and `is_real` are the helpers `to_sos` is built from.

## Image codecs

`npukit.imgcodecs_base` defines the abstract `BaseImageDecoder` and
`BaseImageEncoder` and the `ImageCodecError` exception raised when an image
cannot be read or written.

`npukit.jpeg_decoder.JpegDecoder` reads a JPEG file or an in-memory bytes
buffer. Colour images come back as `(height, width, 3)` arrays in BGR order,
grayscale ones as `(height, width, 1)`; CMYK images are converted to BGR.
`set_scale(denom)` asks for a downscaled decode on the next header read. The
output element type can be chosen with `JpegDecoder(dtype=...)` (default
`numpy.uint8`). The decoder also works as a context manager. `AppMarker`
lists the JPEG marker codes.

`npukit.jpeg_encoder.JpegEncoder` writes a file or appends to a `bytearray`.
It accepts `(height, width)` grayscale arrays and `(height, width, channels)`
arrays with 1 (grayscale), 3 (BGR) or 4 (BGRA, alpha dropped) channels.

```python
from npukit.jpeg_decoder import JpegDecoder
from npukit.jpeg_encoder import JpegEncoder

with JpegDecoder() as decoder:
    decoder.set_source("photo.jpg")
    decoder.read_header()
    image = decoder.read_data()

encoder = JpegEncoder()
encoder.set_destination("copy.jpg")
encoder.write(image, [])
```

## Limitations

- Only mono (one-dimensional) audio is filtered.
- Only Butterworth prototypes are available for IIR design.
- JPEG is the only image format. The encoder always writes baseline JPEG at
  quality 95; its `params` argument is accepted but not used, and
  `writemulti` raises `ImageCodecError`.
- There is no command-line tool; everything is used from Python.