"""
Shared fixtures: ICO files assembled byte by byte so that entry order,
sizes and pixel values are known exactly.
"""

import io
import struct
from pathlib import Path

import pytest
from PIL import Image

from ico2img.models.image_model import IcoEntry

# (width, height, RGBA colour) of the entries in the sample icon, in directory order
SAMPLE_ENTRIES = [
    (16, 16, (255, 0, 0, 255)),
    (32, 32, (0, 128, 0, 128)),
    (48, 48, (0, 0, 255, 0)),
]


def png_bytes(size, color) -> bytes:
    """Encode a solid RGBA image as PNG."""
    buffer = io.BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def build_ico(blobs, data_order=None) -> bytes:
    """
    Assemble an ICO file from (width, height, bpp, data) tuples.

    Image data is laid out in directory order unless `data_order` lists
    the directory positions in the order their data is stored.
    """
    header = struct.pack("<HHH", 0, 1, len(blobs))
    base = len(header) + 16 * len(blobs)
    offsets = {}
    data = b""
    for position in data_order or range(len(blobs)):
        offsets[position] = base + len(data)
        data += blobs[position][3]
    directory = b""
    for position, (width, height, bpp, blob) in enumerate(blobs):
        directory += struct.pack(
            "<BBBBHHII", width % 256, height % 256, 0, 0, 1, bpp, len(blob), offsets[position]
        )
    return header + directory + data


@pytest.fixture
def sample_ico(tmp_path) -> Path:
    """ICO with three PNG entries: 16x16, 32x32 and 48x48."""
    blobs = [(w, h, 32, png_bytes((w, h), color)) for w, h, color in SAMPLE_ENTRIES]
    path = tmp_path / "sample.ico"
    path.write_bytes(build_ico(blobs))
    return path


@pytest.fixture
def empty_ico(tmp_path) -> Path:
    """ICO directory declaring zero entries."""
    path = tmp_path / "empty.ico"
    path.write_bytes(build_ico([]))
    return path


@pytest.fixture
def corrupt_ico(tmp_path) -> Path:
    """ICO whose middle entry holds garbage instead of PNG/BMP data."""
    blobs = [
        (16, 16, 32, png_bytes((16, 16), (10, 20, 30, 255))),
        (32, 32, 32, b"\xff" * 64),
        (48, 48, 32, png_bytes((48, 48), (40, 50, 60, 255))),
    ]
    path = tmp_path / "corrupt.ico"
    path.write_bytes(build_ico(blobs))
    return path


@pytest.fixture
def make_entry():
    """Factory for entries backed by an in-memory raster."""

    def _make(image: Image.Image, index: int = 0) -> IcoEntry:
        return IcoEntry(
            index=index,
            width=image.width,
            height=image.height,
            bits_per_pixel=32,
            decoder=lambda: image,
        )

    return _make
