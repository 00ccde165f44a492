"""Reading and writing uncompressed 24- and 32-bit BMP images."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

from ecas.logger import fail

_BMP_MAGIC = 0x4D42


def _check_length(cls, raw: bytes) -> bytes:
    if len(raw) < cls.SIZE:
        raise ValueError(f"{cls.__name__} needs {cls.SIZE} bytes, got {len(raw)}")
    return bytes(raw[:cls.SIZE])


@dataclass
class BmpFileHeader:
    FORMAT: ClassVar[str] = "<HIHHI"
    SIZE: ClassVar[int] = struct.calcsize(FORMAT)

    file_type: int = _BMP_MAGIC
    file_size: int = 0
    reserved1: int = 0
    reserved2: int = 0
    offset_data: int = 0

    def pack(self) -> bytes:
        return struct.pack(
            self.FORMAT, self.file_type, self.file_size,
            self.reserved1, self.reserved2, self.offset_data,
        )

    @classmethod
    def unpack(cls, raw: bytes) -> "BmpFileHeader":
        return cls(*struct.unpack(cls.FORMAT, _check_length(cls, raw)))


@dataclass
class BmpInfoHeader:
    FORMAT: ClassVar[str] = "<IiiHHIIiiII"
    SIZE: ClassVar[int] = struct.calcsize(FORMAT)

    size: int = 0
    width: int = 0
    height: int = 0
    planes: int = 1
    bit_count: int = 0
    compression: int = 0
    size_image: int = 0
    x_pixels_per_meter: int = 0
    y_pixels_per_meter: int = 0
    colors_used: int = 0
    colors_important: int = 0

    def pack(self) -> bytes:
        return struct.pack(
            self.FORMAT, self.size, self.width, self.height, self.planes,
            self.bit_count, self.compression, self.size_image,
            self.x_pixels_per_meter, self.y_pixels_per_meter,
            self.colors_used, self.colors_important,
        )

    @classmethod
    def unpack(cls, raw: bytes) -> "BmpInfoHeader":
        return cls(*struct.unpack(cls.FORMAT, _check_length(cls, raw)))


@dataclass
class BmpColorHeader:
    FORMAT: ClassVar[str] = "<5I16I"
    SIZE: ClassVar[int] = struct.calcsize(FORMAT)

    red_mask: int = 0x00FF0000
    green_mask: int = 0x0000FF00
    blue_mask: int = 0x000000FF
    alpha_mask: int = 0xFF000000
    color_space_type: int = 0x73524742  # "sRGB"
    unused: tuple = field(default=(0,) * 16)

    def pack(self) -> bytes:
        return struct.pack(
            self.FORMAT, self.red_mask, self.green_mask, self.blue_mask,
            self.alpha_mask, self.color_space_type, *self.unused,
        )

    @classmethod
    def unpack(cls, raw: bytes) -> "BmpColorHeader":
        values = struct.unpack(cls.FORMAT, _check_length(cls, raw))
        return cls(*values[:5], unused=tuple(values[5:]))


def _check_color_header(header: BmpColorHeader) -> None:
    expected = BmpColorHeader()
    if (header.red_mask, header.green_mask, header.blue_mask, header.alpha_mask) != (
        expected.red_mask, expected.green_mask, expected.blue_mask, expected.alpha_mask
    ):
        fail("Unexpected color mask format! The program expects the pixel data to be in the BGRA format")
    if header.color_space_type != expected.color_space_type:
        fail("Unexpected color space type! The program expects sRGB values")


class BmpImage:
    """Bottom-up BMP image with BGR or BGRA pixels in ``data``."""

    def __init__(self, file_header: BmpFileHeader, info_header: BmpInfoHeader,
                 color_header: BmpColorHeader, data: bytearray) -> None:
        self.file_header = file_header
        self.info_header = info_header
        self.color_header = color_header
        self.data = data
        self._normalize()

    @property
    def width(self) -> int:
        return self.info_header.width

    @property
    def height(self) -> int:
        return self.info_header.height

    @property
    def channels(self) -> int:
        return self.info_header.bit_count // 8

    @property
    def row_stride(self) -> int:
        return self.info_header.width * self.info_header.bit_count // 8

    @property
    def padded_stride(self) -> int:
        return (self.row_stride + 3) // 4 * 4

    def _normalize(self) -> None:
        info, file_header = self.info_header, self.file_header
        if info.bit_count == 32:
            info.size = BmpInfoHeader.SIZE + BmpColorHeader.SIZE
            file_header.offset_data = BmpFileHeader.SIZE + BmpInfoHeader.SIZE + BmpColorHeader.SIZE
            info.compression = 3
        elif info.bit_count == 24:
            info.size = BmpInfoHeader.SIZE
            file_header.offset_data = BmpFileHeader.SIZE + BmpInfoHeader.SIZE
            info.compression = 0
        else:
            fail(f"Unsupported bit count: {info.bit_count}.\n")
        file_header.file_size = file_header.offset_data + self.padded_stride * info.height
        needed = self.row_stride * info.height
        if len(self.data) < needed:
            self.data.extend(bytes(needed - len(self.data)))
        elif len(self.data) > needed:
            del self.data[needed:]

    @classmethod
    def blank(cls, width: int, height: int, channels: int) -> "BmpImage":
        """A zero-filled image of the given size with 3 or 4 channels."""
        if channels not in (3, 4):
            fail("BmpReader only supports 3 or 4 channel inputs for now.\n")
        if width < 0 or height < 0:
            raise ValueError("width and height must not be negative")
        info = BmpInfoHeader(width=width, height=height, bit_count=channels * 8)
        return cls(BmpFileHeader(), info, BmpColorHeader(), bytearray())

    @classmethod
    def read(cls, path) -> "BmpImage":
        raw = Path(path).read_bytes()
        file_header = BmpFileHeader.unpack(raw)
        if file_header.file_type != _BMP_MAGIC:
            fail("Error! Unrecognized file format.")
        info_start = BmpFileHeader.SIZE
        info = BmpInfoHeader.unpack(raw[info_start:])
        color = BmpColorHeader()
        if info.bit_count == 32:
            if info.size >= BmpInfoHeader.SIZE + BmpColorHeader.SIZE:
                color = BmpColorHeader.unpack(raw[info_start + BmpInfoHeader.SIZE:])
                _check_color_header(color)
            else:
                fail("Error! Unrecognized file format: This file does not seem to contain bit mask information.")
        if info.height < 0:
            fail("The program can treat only BmpReader images with the origin in the bottom left corner!")
        offset = file_header.offset_data
        image = cls(file_header, info, color, bytearray())
        row, padded = image.row_stride, image.padded_stride
        pixels = bytearray()
        for y in range(info.height):
            start = offset + y * padded
            chunk = raw[start:start + row]
            if len(chunk) < row:
                fail("Error! Pixel data is truncated.\n")
            pixels += chunk
        image.data = pixels
        return image

    def write(self, path) -> None:
        if len(self.data) != self.row_stride * self.height:
            fail("Pixel data size does not match the image dimensions.\n")
        out = bytearray(self.file_header.pack())
        out += self.info_header.pack()
        if self.info_header.bit_count == 32:
            out += self.color_header.pack()
        row, padding = self.row_stride, bytes(self.padded_stride - self.row_stride)
        for y in range(self.height):
            out += self.data[y * row:(y + 1) * row]
            out += padding
        Path(path).write_bytes(bytes(out))