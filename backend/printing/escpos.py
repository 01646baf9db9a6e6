"""
ESC/POS byte encoding for thermal receipt printers.

Only the small command subset the receipt documents need is implemented:

    ESC @            initialize             1B 40
    ESC a n          justification          1B 61 n      (0 left, 1 center, 2 right)
    ESC ! n          print mode             1B 21 n      (bit 3 emphasis, bit 4 double height,
                                                          bit 5 double width)
    GS V 0           full cut               1D 56 00
    GS v 0 m xL xH yL yH d...  raster bit image  1D 76 30 00 ...
    ESC p m t1 t2    drawer kick            1B 70 00 19 FA
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from PIL import Image as PILImage

from .documents import Align, ColumnRow, Cut, Feed, FontScale, Image, ReceiptDocument, Text, layout_columns
from .exceptions import AssetMissingError

logger = logging.getLogger(__name__)

ESC = b"\x1b"
GS = b"\x1d"
LF = b"\n"

INIT = ESC + b"@"
CUT = GS + b"V\x00"
OPEN_DRAWER = ESC + b"p\x00\x19\xfa"
CLEAR = b"\x0c"

MODE_EMPHASIZED = 0x08
MODE_DOUBLE_HEIGHT = 0x10
MODE_DOUBLE_WIDTH = 0x20

# Raster image command header: GS v 0, mode 0 (normal density)
RASTER_PREFIX = GS + b"v0\x00"


def align(value: Align) -> bytes:
    return ESC + b"a" + bytes([int(value)])


def print_mode(scale: FontScale = FontScale.NORMAL, bold: bool = False) -> bytes:
    mode = 0
    if bold:
        mode |= MODE_EMPHASIZED
    if scale.height == 2:
        mode |= MODE_DOUBLE_HEIGHT
    if scale.width == 2:
        mode |= MODE_DOUBLE_WIDTH
    return ESC + b"!" + bytes([mode])


def feed(lines: int = 1) -> bytes:
    return LF * max(lines, 0)


@dataclass(frozen=True)
class RasterImage:
    """
    A 1-bit image packed row by row, most significant bit first, 1 = black.

    `width` and `height` are in dots; each row occupies width_bytes bytes,
    with unused trailing bits left at 0 (white).
    """

    width: int
    height: int
    data: bytes

    @property
    def width_bytes(self) -> int:
        return (self.width + 7) // 8

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "RasterImage":
        """
        Pack a matrix of 0/1 dots. All rows must have the same length.
        """
        height = len(rows)
        width = len(rows[0]) if height else 0
        width_bytes = (width + 7) // 8
        data = bytearray(width_bytes * height)

        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} dots, expected {width}")
            for x, dot in enumerate(row):
                if dot:
                    data[y * width_bytes + x // 8] |= 0x80 >> (x % 8)

        return cls(width=width, height=height, data=bytes(data))

    @classmethod
    def from_pil(cls, image, max_width: int = 384, threshold: int = 128) -> "RasterImage":
        """
        Convert a Pillow image to a 1-bit raster no wider than max_width.
        """
        img = image.convert("L")
        if img.width > max_width:
            height = max(1, round(img.height * max_width / img.width))
            img = img.resize((max_width, height), PILImage.Resampling.LANCZOS)

        pixels = img.tobytes()
        rows = [
            [1 if value < threshold else 0 for value in pixels[y * img.width:(y + 1) * img.width]]
            for y in range(img.height)
        ]
        return cls.from_rows(rows)


def raster_header(image: RasterImage) -> bytes:
    """
    GS v 0 header. xL xH is bytes per row and yL yH is dot rows, both
    little-endian 16-bit.
    """
    x = image.width_bytes
    y = image.height
    return RASTER_PREFIX + bytes([x & 0xFF, (x >> 8) & 0xFF, y & 0xFF, (y >> 8) & 0xFF])


def encode_raster(image: RasterImage) -> bytes:
    return raster_header(image) + image.data


class EscPosEncoder:
    """
    Encodes a ReceiptDocument into the byte stream sent to the printer.

    Usage:
        data = EscPosEncoder(encoding="cp437").encode(document, assets)
    """

    def __init__(self, encoding: str = "cp437", line_width: int = 32):
        self.encoding = encoding
        self.line_width = line_width

    def _text(self, text: str) -> bytes:
        return text.encode(self.encoding, errors="replace") + LF

    def encode_instruction(self, instruction, assets=None) -> bytes:
        if isinstance(instruction, Text):
            return (
                align(instruction.align)
                + print_mode(instruction.scale, instruction.bold)
                + self._text(instruction.text)
            )

        if isinstance(instruction, ColumnRow):
            return (
                align(Align.LEFT)
                + print_mode(instruction.scale, instruction.bold)
                + self._text(layout_columns(instruction))
            )

        if isinstance(instruction, Image):
            try:
                if assets is None:
                    raise AssetMissingError(instruction.ref, message="No asset resolver configured")
                image = assets.resolve(instruction.ref, instruction.width)
            except AssetMissingError as e:
                logger.warning(f"Skipping image '{instruction.ref}': {e}")
                if instruction.fallback_text:
                    return align(instruction.align) + print_mode(FontScale.DOUBLE_HEIGHT, True) + self._text(
                        instruction.fallback_text
                    )
                return b""
            return align(instruction.align) + encode_raster(image) + LF

        if isinstance(instruction, Feed):
            return feed(instruction.lines)

        if isinstance(instruction, Cut):
            return CUT

        raise TypeError(f"Cannot encode instruction {instruction!r}")

    def encode(self, document: ReceiptDocument, assets=None) -> bytes:
        chunks = [INIT]
        chunks.extend(self.encode_instruction(instruction, assets) for instruction in document)
        # Leave the printer in a neutral state for whoever prints next
        chunks.append(print_mode() + align(Align.LEFT))
        return b"".join(chunks)


def raster_to_pil(image: RasterImage):
    """
    Back-convert a packed raster to a Pillow 1-bit image.

    Pillow's "1" raw packing is also MSB first with padded rows, but uses
    1 for white, so the bits are inverted.
    """
    inverted = bytes(~b & 0xFF for b in image.data)
    return PILImage.frombytes("1", (image.width, image.height), inverted)
