"""JPEG decoding into BGR or grayscale pixel arrays."""

from __future__ import annotations

import enum
import io
import math
from typing import Optional

import numpy as np
from PIL import Image

from npukit.imgcodecs_base import BaseImageDecoder, ImageCodecError

__all__ = ["AppMarker", "JpegDecoder"]


class AppMarker(enum.IntEnum):
    """Markers that can be met in a JPEG stream."""

    SOI = 0xD8
    SOF0 = 0xC0
    SOF2 = 0xC2
    DHT = 0xC4
    DQT = 0xDB
    DRI = 0xDD
    SOS = 0xDA
    RST0 = 0xD0
    RST1 = 0xD1
    RST2 = 0xD2
    RST3 = 0xD3
    RST4 = 0xD4
    RST5 = 0xD5
    RST6 = 0xD6
    RST7 = 0xD7
    APP0 = 0xE0
    APP1 = 0xE1
    APP2 = 0xE2
    APP3 = 0xE3
    APP4 = 0xE4
    APP5 = 0xE5
    APP6 = 0xE6
    APP7 = 0xE7
    APP8 = 0xE8
    APP9 = 0xE9
    APP10 = 0xEA
    APP11 = 0xEB
    APP12 = 0xEC
    APP13 = 0xED
    APP14 = 0xEE
    APP15 = 0xEF
    COM = 0xFE
    EOI = 0xD9


class JpegDecoder(BaseImageDecoder):
    """Decodes a JPEG file or buffer.

    Colour images come back as ``(height, width, 3)`` arrays in BGR order,
    grayscale ones as ``(height, width, 1)``. CMYK images are converted to
    BGR. The decoder can be used as a context manager.
    """

    signature = bytes([0xFF, AppMarker.SOI, 0xFF])
    buffer_supported = True

    def __init__(self, dtype=np.uint8) -> None:
        super().__init__()
        self.dtype = np.dtype(dtype)
        self._image: Optional[Image.Image] = None

    def __enter__(self) -> "JpegDecoder":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release the open source and forget the header."""
        if self._image is not None:
            self._image.close()
            self._image = None
        self._width = self._height = 0
        self._channels = -1

    def new_decoder(self) -> "JpegDecoder":
        return JpegDecoder(self.dtype)

    def _open(self) -> Image.Image:
        if self._buf is not None:
            return Image.open(io.BytesIO(self._buf))
        return Image.open(self.filename)

    def read_header(self) -> None:
        """Read the dimensions, applying the pending scale denominator once."""
        self.close()
        denom = self._scale_denom
        if denom < 1:
            raise ImageCodecError(f"scale denominator must be positive, got {denom}")
        try:
            image = self._open()
        except (OSError, ValueError) as exc:
            raise ImageCodecError(f"cannot read JPEG header: {exc}") from exc
        if image.format != "JPEG":
            image.close()
            raise ImageCodecError(f"not a JPEG image (found {image.format})")
        if denom > 1:
            width, height = image.size
            image.draft(image.mode, (math.ceil(width / denom), math.ceil(height / denom)))
        # The scale applies to this header only.
        self._scale_denom = 1
        self._image = image
        self._width, self._height = image.size
        self._channels = 3 if len(image.getbands()) > 1 else 1

    def read_data(self) -> np.ndarray:
        """Decode the pixels of the image whose header was read, then close."""
        image = self._image
        if image is None or not self._width or not self._height:
            self.close()
            raise ImageCodecError("no JPEG header has been read")
        color = self._channels > 1
        try:
            if image.mode not in ("L", "RGB", "CMYK"):
                image = image.convert("RGB" if color else "L")
            if color:
                if image.mode == "CMYK":
                    pixels = self._cmyk_to_bgr(image)
                else:
                    pixels = np.asarray(image.convert("RGB"))[..., ::-1]
            else:
                pixels = np.asarray(image.convert("L"))[..., np.newaxis]
            return np.ascontiguousarray(pixels).astype(self.dtype)
        except (OSError, ValueError) as exc:
            raise ImageCodecError(f"cannot decode JPEG data: {exc}") from exc
        finally:
            self.close()

    @staticmethod
    def _cmyk_to_bgr(image: Image.Image) -> np.ndarray:
        raw = np.asarray(image, dtype=np.int32)
        if "adobe" in image.info:
            # Recover the stored (inverted) Adobe sample values.
            raw = 255 - raw
        c, m, y, k = (raw[..., i] for i in range(4))
        c = k - (((255 - c) * k) >> 8)
        m = k - (((255 - m) * k) >> 8)
        y = k - (((255 - y) * k) >> 8)
        return np.stack([y, m, c], axis=-1)