"""Base classes shared by the image decoders and encoders."""

from __future__ import annotations

import abc
import os
from typing import Optional, Sequence, Union

__all__ = ["ImageCodecError", "BaseImageDecoder", "BaseImageEncoder"]

PathLike = Union[str, "os.PathLike[str]"]
BufferLike = Union[bytes, bytearray, memoryview]


class ImageCodecError(Exception):
    """Raised when an image cannot be read or written."""


class BaseImageDecoder(abc.ABC):
    """Reads one image from a file or an in-memory buffer.

    Subclasses set :attr:`signature` to the leading bytes that identify their
    format and :attr:`buffer_supported` when they can read from memory.
    """

    signature: bytes = b""
    buffer_supported: bool = False

    def __init__(self) -> None:
        self._width = 0
        self._height = 0
        self._channels = -1
        self._scale_denom = 1
        self.filename = ""
        self._buf: Optional[bytes] = None

    @property
    def width(self) -> int:
        """Width of the image, filled in by :meth:`read_header`."""
        return self._width

    @property
    def height(self) -> int:
        """Height of the image, filled in by :meth:`read_header`."""
        return self._height

    @property
    def channels(self) -> int:
        """Channel count of the image, or -1 before a header has been read."""
        return self._channels

    @property
    def scale_denom(self) -> int:
        """The pending downscale denominator."""
        return self._scale_denom

    @property
    def buffer(self) -> Optional[bytes]:
        """The in-memory source, or None when reading from a file."""
        return self._buf

    def set_source(self, source: Union[PathLike, BufferLike]) -> None:
        """Read from a file path, or from a bytes-like buffer if supported."""
        if isinstance(source, (str, os.PathLike)):
            self.filename = os.fspath(source)
            self._buf = None
            return
        if not isinstance(source, (bytes, bytearray, memoryview)):
            raise TypeError(f"unsupported image source: {type(source).__name__}")
        if not self.buffer_supported:
            raise ImageCodecError(
                f"{type(self).__name__} cannot read from a memory buffer"
            )
        self.filename = ""
        self._buf = bytes(source)

    def set_scale(self, scale_denom: int) -> int:
        """Set the downscale denominator and return the previous one."""
        previous = self._scale_denom
        self._scale_denom = scale_denom
        return previous

    @abc.abstractmethod
    def read_header(self) -> None:
        """Read the image dimensions and channel count from the source."""

    @abc.abstractmethod
    def read_data(self):
        """Decode the pixels and return them as an array."""

    def next_page(self) -> bool:
        """Advance to the next page after :meth:`read_data`; single-page by default."""
        return False

    def signature_length(self) -> int:
        """Number of leading bytes that identify the format."""
        return len(self.signature)

    def check_signature(self, signature: bytes) -> bool:
        """Whether ``signature`` starts with this format's identifying bytes."""
        length = self.signature_length()
        return len(signature) >= length and bytes(signature[:length]) == self.signature

    @abc.abstractmethod
    def new_decoder(self) -> "BaseImageDecoder":
        """Return a fresh decoder of the same kind."""


class BaseImageEncoder(abc.ABC):
    """Writes images to a file or to an in-memory buffer."""

    description: str = ""
    buffer_supported: bool = False

    def __init__(self) -> None:
        self.filename = ""
        self._buf: Optional[bytearray] = None
        self.last_error = ""

    @property
    def buffer(self) -> Optional[bytearray]:
        """The in-memory destination, or None when writing to a file."""
        return self._buf

    def set_destination(self, destination: Union[PathLike, bytearray]) -> None:
        """Write to a file path, or into a bytearray (emptied first) if supported."""
        if isinstance(destination, (str, os.PathLike)):
            self.filename = os.fspath(destination)
            self._buf = None
            return
        if not isinstance(destination, bytearray):
            raise TypeError(
                f"unsupported image destination: {type(destination).__name__}"
            )
        if not self.buffer_supported:
            raise ImageCodecError(
                f"{type(self).__name__} cannot write to a memory buffer"
            )
        self._buf = destination
        self._buf.clear()
        self.filename = ""

    @abc.abstractmethod
    def write(self, img, params: Sequence[int]) -> None:
        """Encode ``img`` to the destination."""

    def writemulti(self, images, params: Sequence[int]) -> None:
        """Encode several images as pages; unsupported unless overridden."""
        raise ImageCodecError(f"{type(self).__name__} cannot write multiple images")

    @abc.abstractmethod
    def new_encoder(self) -> "BaseImageEncoder":
        """Return a fresh encoder of the same kind."""