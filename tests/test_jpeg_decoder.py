import io

import numpy as np
import pytest
from PIL import Image

from npukit.imgcodecs_base import ImageCodecError
from npukit.jpeg_decoder import AppMarker, JpegDecoder


def _jpeg_bytes(image):
    out = io.BytesIO()
    image.save(out, "JPEG", quality=95)
    return out.getvalue()


def _decoder_for(data):
    decoder = JpegDecoder()
    decoder.set_source(data)
    return decoder


def test_signature_matches_encoded_stream():
    data = _jpeg_bytes(Image.new("RGB", (4, 4)))
    decoder = JpegDecoder()
    assert decoder.signature[1] == AppMarker.SOI
    assert decoder.check_signature(data)
    assert not decoder.check_signature(b"\x89PNG\r\n")


def test_read_header_color(tmp_path):
    path = tmp_path / "red.jpg"
    Image.new("RGB", (16, 8), (255, 0, 0)).save(path, "JPEG", quality=95)
    decoder = JpegDecoder()
    decoder.set_source(path)
    decoder.read_header()
    assert (decoder.width, decoder.height, decoder.channels) == (16, 8, 3)
    decoder.close()


def test_read_data_is_bgr(tmp_path):
    path = tmp_path / "red.jpg"
    Image.new("RGB", (16, 8), (255, 0, 0)).save(path, "JPEG", quality=95)
    decoder = JpegDecoder()
    decoder.set_source(path)
    decoder.read_header()
    pixels = decoder.read_data()
    assert pixels.shape == (8, 16, 3)
    assert pixels.dtype == np.uint8
    assert pixels[..., 2].min() > pixels[..., 0].max()
    assert pixels[..., 2].min() > pixels[..., 1].max()


def test_read_data_closes_decoder():
    decoder = _decoder_for(_jpeg_bytes(Image.new("RGB", (4, 4))))
    decoder.read_header()
    decoder.read_data()
    assert (decoder.width, decoder.height, decoder.channels) == (0, 0, -1)
    with pytest.raises(ImageCodecError):
        decoder.read_data()


def test_grayscale_round_trip():
    gray = np.tile(np.arange(0, 256, 16, dtype=np.uint8), (16, 1))
    decoder = _decoder_for(_jpeg_bytes(Image.fromarray(gray, "L")))
    decoder.read_header()
    assert decoder.channels == 1
    pixels = decoder.read_data()
    assert pixels.shape == (16, 16, 1)
    assert np.abs(pixels[..., 0].astype(int) - gray.astype(int)).max() <= 8


def test_scale_halves_dimensions():
    decoder = _decoder_for(_jpeg_bytes(Image.new("RGB", (32, 16), (0, 128, 0))))
    assert decoder.set_scale(2) == 1
    decoder.read_header()
    assert (decoder.width, decoder.height) == (32 // 2, 16 // 2)
    assert decoder.scale_denom == 1
    assert decoder.read_data().shape == (16 // 2, 32 // 2, 3)


def test_invalid_scale_rejected():
    decoder = _decoder_for(_jpeg_bytes(Image.new("RGB", (4, 4))))
    decoder.set_scale(0)
    with pytest.raises(ImageCodecError):
        decoder.read_header()


def test_non_jpeg_rejected():
    out = io.BytesIO()
    Image.new("RGB", (4, 4)).save(out, "PNG")
    decoder = _decoder_for(out.getvalue())
    with pytest.raises(ImageCodecError):
        decoder.read_header()
    assert decoder.channels == -1


def test_missing_file_rejected(tmp_path):
    decoder = JpegDecoder()
    decoder.set_source(tmp_path / "missing.jpg")
    with pytest.raises(ImageCodecError):
        decoder.read_header()


def test_cmyk_white_becomes_white_bgr():
    decoder = _decoder_for(_jpeg_bytes(Image.new("CMYK", (8, 8), (0, 0, 0, 0))))
    decoder.read_header()
    assert decoder.channels == 3
    pixels = decoder.read_data()
    assert pixels.shape == (8, 8, 3)
    assert pixels.min() >= 245


def test_dtype_and_new_decoder():
    decoder = JpegDecoder(np.float32)
    other = decoder.new_decoder()
    assert other is not decoder
    assert other.dtype == np.dtype(np.float32)
    other.set_source(_jpeg_bytes(Image.new("RGB", (4, 2), (10, 20, 30))))
    other.read_header()
    assert other.read_data().dtype == np.float32


def test_context_manager_closes():
    with _decoder_for(_jpeg_bytes(Image.new("RGB", (4, 4)))) as decoder:
        decoder.read_header()
        assert decoder.width == 4
    assert decoder.width == 0