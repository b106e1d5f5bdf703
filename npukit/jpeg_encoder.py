"""JPEG encoding of BGR, BGRA or grayscale pixel arrays."""

from __future__ import annotations

import io
from typing import Sequence

import numpy as np
from PIL import Image

from npukit.imgcodecs_base import BaseImageEncoder, ImageCodecError

__all__ = ["JpegEncoder"]

_QUALITY = 95


class JpegEncoder(BaseImageEncoder):
    """Encodes an image array as a baseline JPEG at quality 95.

    The array has shape ``(height, width, channels)``; a 2-D array is taken
    as grayscale. Three channels are read as BGR, four as BGRA (alpha is
    dropped), one as grayscale. Samples are cast to 8 bits.
    """

    description = "JPEG files (*.jpeg;*.jpg;*.jpe)"
    buffer_supported = True

    def new_encoder(self) -> "JpegEncoder":
        return JpegEncoder()

    def write(self, img, params: Sequence[int] = ()) -> None:
        """Encode ``img`` to the file or buffer set by :meth:`set_destination`.

        ``params`` is accepted for the common encoder interface; the quality
        and other settings are fixed.
        """
        self.last_error = ""
        try:
            image = self._to_pil(img)
            encoded = io.BytesIO()
            image.save(encoded, format="JPEG", quality=_QUALITY)
            data = encoded.getvalue()
            if self._buf is not None:
                self._buf.extend(data)
            else:
                if not self.filename:
                    raise ImageCodecError("no destination has been set")
                with open(self.filename, "wb") as handle:
                    handle.write(data)
        except ImageCodecError as exc:
            self.last_error = str(exc)
            raise
        except (OSError, ValueError) as exc:
            self.last_error = str(exc)
            raise ImageCodecError(f"cannot write JPEG image: {exc}") from exc

    @staticmethod
    def _to_pil(img) -> Image.Image:
        pixels = np.asarray(img)
        if pixels.ndim == 2:
            pixels = pixels[..., np.newaxis]
        if pixels.ndim != 3:
            raise ImageCodecError(
                f"image must have 2 or 3 dimensions, got {pixels.ndim}"
            )
        height, width, channels = pixels.shape
        if height == 0 or width == 0:
            raise ImageCodecError("cannot encode an empty image")
        pixels = pixels.astype(np.uint8)
        if channels == 1:
            return Image.fromarray(np.ascontiguousarray(pixels[..., 0]), "L")
        if channels in (3, 4):
            rgb = np.ascontiguousarray(pixels[..., 2::-1])
            return Image.fromarray(rgb, "RGB")
        raise ImageCodecError(f"cannot encode an image with {channels} channels")