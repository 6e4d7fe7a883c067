"""
Uncompressed 24-bit bitmap export for rendered fractals.

The file is a 14-byte file header, a 40-byte info header and the raw pixel
buffer, packed without padding. Rows are written exactly as stored in the
buffer, with no 4-byte row alignment.
"""

import struct
from typing import Tuple, Union
from pathlib import Path
from dataclasses import dataclass, asdict
import logging

from ..core.pixel_buffer import PixelBuffer, BYTES_PER_PIXEL

logger = logging.getLogger(__name__)

FILE_HEADER_FORMAT = '<2siii'
INFO_HEADER_FORMAT = '<iiihhiiiiii'
FILE_HEADER_SIZE = struct.calcsize(FILE_HEADER_FORMAT)
INFO_HEADER_SIZE = struct.calcsize(INFO_HEADER_FORMAT)
DATA_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE

BITMAP_MAGIC = b'BM'


@dataclass(frozen=True)
class BitmapFileHeader:
    """Leading bitmap header: magic, size and pixel data offset."""

    file_size: int
    data_offset: int = DATA_OFFSET
    reserved: int = 0
    magic: bytes = BITMAP_MAGIC

    def pack(self) -> bytes:
        return struct.pack(FILE_HEADER_FORMAT, self.magic, self.file_size,
                           self.reserved, self.data_offset)

    @classmethod
    def unpack(cls, data: bytes) -> 'BitmapFileHeader':
        magic, file_size, reserved, data_offset = struct.unpack_from(FILE_HEADER_FORMAT, data)
        return cls(file_size=file_size, data_offset=data_offset,
                   reserved=reserved, magic=magic)


@dataclass(frozen=True)
class BitmapInfoHeader:
    """BITMAPINFOHEADER fields for a 24-bit uncompressed image."""

    width: int
    height: int
    header_size: int = INFO_HEADER_SIZE
    planes: int = 1
    bits_per_pixel: int = 24
    compression: int = 0
    data_size: int = 0
    horizontal_resolution: int = 2400
    vertical_resolution: int = 2400
    colors: int = 0
    important_colors: int = 0

    def pack(self) -> bytes:
        return struct.pack(
            INFO_HEADER_FORMAT,
            self.header_size, self.width, self.height,
            self.planes, self.bits_per_pixel,
            self.compression, self.data_size,
            self.horizontal_resolution, self.vertical_resolution,
            self.colors, self.important_colors,
        )

    @classmethod
    def unpack(cls, data: bytes) -> 'BitmapInfoHeader':
        (header_size, width, height, planes, bits_per_pixel, compression, data_size,
         horizontal_resolution, vertical_resolution, colors,
         important_colors) = struct.unpack_from(INFO_HEADER_FORMAT, data, FILE_HEADER_SIZE)
        return cls(
            width=width,
            height=height,
            header_size=header_size,
            planes=planes,
            bits_per_pixel=bits_per_pixel,
            compression=compression,
            data_size=data_size,
            horizontal_resolution=horizontal_resolution,
            vertical_resolution=vertical_resolution,
            colors=colors,
            important_colors=important_colors,
        )

    def to_dict(self):
        return asdict(self)


def build_headers(width: int, height: int) -> Tuple[BitmapFileHeader, BitmapInfoHeader]:
    """Create the header pair for a width x height raster."""
    file_size = DATA_OFFSET + width * height * BYTES_PER_PIXEL
    return BitmapFileHeader(file_size=file_size), BitmapInfoHeader(width=width, height=height)


def read_bitmap_headers(data: bytes) -> Tuple[BitmapFileHeader, BitmapInfoHeader]:
    """
    Parse the headers at the start of an encoded bitmap.

    Args:
        data: Encoded bitmap, at least the first 54 bytes

    Returns:
        Tuple of (file_header, info_header)
    """
    if len(data) < DATA_OFFSET:
        raise ValueError(f"Bitmap too short: {len(data)} bytes, need at least {DATA_OFFSET}")

    file_header = BitmapFileHeader.unpack(data)
    if file_header.magic != BITMAP_MAGIC:
        raise ValueError(f"Not a bitmap: magic {file_header.magic!r}")

    return file_header, BitmapInfoHeader.unpack(data)


class BitmapExporter:
    """Serializes pixel buffers to bitmap files."""

    def encode(self, buffer: PixelBuffer) -> bytes:
        """
        Encode a pixel buffer as a complete bitmap byte string.

        Args:
            buffer: Rendered BGR raster

        Returns:
            Headers followed by the raw pixel bytes
        """
        file_header, info_header = build_headers(buffer.width, buffer.height)
        return file_header.pack() + info_header.pack() + buffer.as_bytes().tobytes()

    def write(self, buffer: PixelBuffer, filepath: Union[str, Path]) -> bool:
        """
        Write a pixel buffer to a bitmap file.

        Args:
            buffer: Rendered BGR raster
            filepath: Output file path

        Returns:
            True if every byte was written, False on any I/O failure
        """
        filepath = Path(filepath)
        file_header, info_header = build_headers(buffer.width, buffer.height)
        pixels = buffer.as_bytes()

        try:
            with open(filepath, 'wb') as f:
                written = f.write(file_header.pack())
                written += f.write(info_header.pack())
                written += f.write(pixels)
        except OSError as e:
            logger.error(f"Could not write bitmap {filepath}: {e}")
            return False

        if written != file_header.file_size:
            logger.error(f"Short write to {filepath}: {written} of {file_header.file_size} bytes")
            return False

        logger.info(f"Saved image: {filepath} ({buffer.width}x{buffer.height}, {written} bytes)")
        return True
