"""
Device-independent receipt documents.

A ReceiptDocument is an ordered, immutable list of layout instructions.
Renderers produce documents; transports consume them. Nothing here knows
about ESC/POS bytes or any particular printer.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence, Tuple, Union

CUSTOMER = "customer"
KITCHEN = "kitchen"

DEFAULT_LINE_WIDTH = 32


class Align(IntEnum):
    LEFT = 0
    CENTER = 1
    RIGHT = 2


@dataclass(frozen=True)
class FontScale:
    """Character magnification; thermal printers support 1x or 2x per axis."""

    width: int = 1
    height: int = 1

    def __post_init__(self):
        if self.width not in (1, 2) or self.height not in (1, 2):
            raise ValueError(f"Unsupported font scale {self.width}x{self.height}")


FontScale.NORMAL = FontScale(1, 1)
FontScale.DOUBLE_HEIGHT = FontScale(1, 2)
FontScale.DOUBLE_WIDTH = FontScale(2, 1)
FontScale.MAXIMUM = FontScale(2, 2)


@dataclass(frozen=True)
class Text:
    text: str
    align: Align = Align.LEFT
    scale: FontScale = FontScale.NORMAL
    bold: bool = False


@dataclass(frozen=True)
class Image:
    """
    A raster image resolved at render time from `ref`.

    When the asset cannot be loaded the transport prints `fallback_text`
    instead, or nothing when it is None.
    """

    ref: str
    width: int
    align: Align = Align.CENTER
    fallback_text: Optional[str] = None


@dataclass(frozen=True)
class ColumnRow:
    cells: Tuple[str, ...]
    widths: Tuple[int, ...]
    aligns: Tuple[Align, ...]
    scale: FontScale = FontScale.NORMAL
    bold: bool = False

    def __post_init__(self):
        object.__setattr__(self, "cells", tuple(self.cells))
        object.__setattr__(self, "widths", tuple(self.widths))
        object.__setattr__(self, "aligns", tuple(Align(a) for a in self.aligns))
        if not (len(self.cells) == len(self.widths) == len(self.aligns)):
            raise ValueError("cells, widths and aligns must have the same length")


@dataclass(frozen=True)
class Cut:
    pass


@dataclass(frozen=True)
class Feed:
    lines: int = 1


Instruction = Union[Text, Image, ColumnRow, Cut, Feed]


@dataclass(frozen=True)
class ReceiptDocument:
    kind: str
    instructions: Tuple[Instruction, ...]
    line_width: int = DEFAULT_LINE_WIDTH

    def __post_init__(self):
        object.__setattr__(self, "instructions", tuple(self.instructions))

    def __iter__(self):
        return iter(self.instructions)

    def __len__(self):
        return len(self.instructions)


def fit(text: str, width: int, align: Align = Align.LEFT) -> str:
    """Truncate then pad `text` to exactly `width` characters."""
    text = (text or "")[:width]
    if align == Align.RIGHT:
        return text.rjust(width)
    if align == Align.CENTER:
        return text.center(width)
    return text.ljust(width)


def layout_columns(row: ColumnRow) -> str:
    """Lay a ColumnRow out as one fixed-width line of text."""
    return "".join(fit(cell, width, align) for cell, width, align in zip(row.cells, row.widths, row.aligns))


class DocumentBuilder:
    """
    Fluent helper for assembling a ReceiptDocument.

    Usage:
        doc = DocumentBuilder("customer", 32).text("Hello", align=Align.CENTER).divider().cut().build()
    """

    def __init__(self, kind: str, line_width: int = DEFAULT_LINE_WIDTH):
        self.kind = kind
        self.line_width = line_width
        self._instructions = []

    def add(self, instruction: Instruction) -> "DocumentBuilder":
        self._instructions.append(instruction)
        return self

    def text(self, text, align=Align.LEFT, scale=FontScale.NORMAL, bold=False) -> "DocumentBuilder":
        return self.add(Text(text=text, align=align, scale=scale, bold=bold))

    def divider(self, char: str = "-") -> "DocumentBuilder":
        return self.add(Text(text=char * self.line_width))

    def columns(self, cells: Sequence[str], widths: Sequence[int], aligns: Sequence[Align],
                scale=FontScale.NORMAL, bold=False) -> "DocumentBuilder":
        return self.add(ColumnRow(cells=cells, widths=widths, aligns=aligns, scale=scale, bold=bold))

    def image(self, ref: str, width: int, align=Align.CENTER, fallback_text=None) -> "DocumentBuilder":
        return self.add(Image(ref=ref, width=width, align=align, fallback_text=fallback_text))

    def feed(self, lines: int = 1) -> "DocumentBuilder":
        return self.add(Feed(lines=lines))

    def cut(self) -> "DocumentBuilder":
        return self.add(Cut())

    def build(self) -> ReceiptDocument:
        return ReceiptDocument(kind=self.kind, instructions=tuple(self._instructions), line_width=self.line_width)
