import logging

from ..documents import ColumnRow, Cut, Feed, Image, ReceiptDocument, Text, fit, layout_columns
from .base import PrintTransport

logger = logging.getLogger(__name__)


def format_document(document: ReceiptDocument) -> str:
    """Human-readable rendition of a document, one printed line per line."""
    width = document.line_width
    lines = []
    for instruction in document:
        if isinstance(instruction, Text):
            lines.append(fit(instruction.text, width, instruction.align).rstrip())
        elif isinstance(instruction, ColumnRow):
            lines.append(layout_columns(instruction).rstrip())
        elif isinstance(instruction, Image):
            text = instruction.fallback_text or f"[image: {instruction.ref}]"
            lines.append(fit(text, width, instruction.align).rstrip())
        elif isinstance(instruction, Feed):
            lines.extend([""] * instruction.lines)
        elif isinstance(instruction, Cut):
            lines.append(" CUT ".center(width, "~"))
    return "\n".join(lines)


class SimulatedTransport(PrintTransport):
    """
    Prints to the log instead of a device. Used in development and when no
    printer is configured. Always succeeds.
    """

    def __init__(self, target, assets=None, stream=None):
        super().__init__(target, assets)
        self.stream = stream

    async def _send(self, document: ReceiptDocument):
        title = f"SIMULATED {document.kind.upper()} DOCUMENT ({self.target.name})"
        output = "\n".join(["=" * document.line_width, title, "=" * document.line_width, format_document(document)])
        logger.info(f"\n{output}")
        if self.stream is not None:
            self.stream.write(output + "\n")

    async def _open_drawer(self):
        logger.info(f"Simulated cash drawer opened on '{self.target.name}'")

    async def _check(self) -> dict:
        return {"connected": True, "simulated": True}
