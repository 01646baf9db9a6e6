"""
Printers embedded in the terminal hardware (e.g. handheld POS devices with
a built-in thermal head) are driven call by call through a vendor SDK
rather than by raw ESC/POS bytes.
"""

import base64
import logging
from abc import ABC, abstractmethod
from io import BytesIO
from typing import Sequence

import requests
from asgiref.sync import sync_to_async

from ..documents import Align, ColumnRow, Cut, Feed, FontScale, Image, ReceiptDocument, Text
from ..escpos import raster_to_pil
from ..exceptions import AssetMissingError, ConnectionFailedError, WriteFailedError
from .base import PrintTransport

logger = logging.getLogger(__name__)

FONT_SIZES = {
    (1, 1): 24,
    (1, 2): 32,
    (2, 1): 32,
    (2, 2): 48,
}

QR_PREFIX = "qr:"
QR_MODULE_SIZE = 8
QR_ERROR_LEVEL = 0
STATUS_OK = 1


def font_size(scale: FontScale) -> int:
    return FONT_SIZES[(scale.width, scale.height)]


class PrinterPlugin(ABC):
    """Capability exposed by an embedded printer SDK."""

    @abstractmethod
    def printer_init(self): ...

    @abstractmethod
    def set_alignment(self, alignment: int): ...

    @abstractmethod
    def set_font_size(self, size: int): ...

    @abstractmethod
    def print_text(self, text: str): ...

    @abstractmethod
    def print_columns_text(self, texts: Sequence[str], widths: Sequence[int], aligns: Sequence[int]): ...

    @abstractmethod
    def print_bitmap(self, bitmap: str, width: int): ...

    @abstractmethod
    def print_qr_code(self, data: str, module_size: int, error_level: int): ...

    @abstractmethod
    def line_wrap(self, lines: int): ...

    @abstractmethod
    def cut_paper(self): ...

    @abstractmethod
    def open_drawer(self): ...

    @abstractmethod
    def get_printer_status(self) -> dict: ...


class HttpPrinterPlugin(PrinterPlugin):
    """
    Forwards each plugin call to the print bridge running on the terminal,
    e.g. POST http://terminal:8765/printText {"text": "..."}
    """

    def __init__(self, base_url: str, session=None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _call(self, method: str, **payload):
        url = f"{self.base_url}/{method}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise ConnectionFailedError(self.base_url, message=f"Print bridge unreachable at {url}: {e}")
        except requests.RequestException as e:
            raise WriteFailedError(self.base_url, message=f"Print bridge call {method} failed: {e}")

        if response.status_code >= 400:
            raise WriteFailedError(
                self.base_url, message=f"Print bridge call {method} returned {response.status_code}"
            )
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    def printer_init(self):
        self._call("printerInit")

    def set_alignment(self, alignment):
        self._call("setAlignment", alignment=alignment)

    def set_font_size(self, size):
        self._call("setFontSize", size=size)

    def print_text(self, text):
        self._call("printText", text=text)

    def print_columns_text(self, texts, widths, aligns):
        self._call("printColumnsText", texts=list(texts), widths=list(widths), aligns=list(aligns))

    def print_bitmap(self, bitmap, width):
        self._call("printBitmap", bitmap=bitmap, width=width)

    def print_qr_code(self, data, module_size, error_level):
        self._call("printQRCode", data=data, moduleSize=module_size, errorLevel=error_level)

    def line_wrap(self, lines):
        self._call("lineWrap", lines=lines)

    def cut_paper(self):
        self._call("cutPaper")

    def open_drawer(self):
        self._call("openDrawer")

    def get_printer_status(self):
        return self._call("getPrinterStatus")


class EmbeddedPluginTransport(PrintTransport):
    """
    Replays a document on a PrinterPlugin one instruction at a time.
    """

    def __init__(self, target, assets=None, plugin: PrinterPlugin = None):
        super().__init__(target, assets)
        if plugin is None and target.plugin_url:
            plugin = HttpPrinterPlugin(target.plugin_url)
        self._plugin = plugin

    @property
    def plugin(self) -> PrinterPlugin:
        if self._plugin is None:
            raise ConnectionFailedError(self.target.name, message=f"Printer '{self.target.name}' has no plugin URL")
        return self._plugin

    def _bitmap(self, instruction: Image) -> str:
        if self.assets is None:
            raise AssetMissingError(instruction.ref, message="No asset resolver configured")
        raster = self.assets.resolve(instruction.ref, instruction.width)
        buffer = BytesIO()
        raster_to_pil(raster).save(buffer, format="PNG")
        return base64.b64encode(buffer.getvalue()).decode("ascii")

    def _print_image(self, instruction: Image):
        plugin = self.plugin
        plugin.set_alignment(int(instruction.align))

        if instruction.ref.startswith(QR_PREFIX):
            plugin.print_qr_code(instruction.ref[len(QR_PREFIX):], QR_MODULE_SIZE, QR_ERROR_LEVEL)
            plugin.line_wrap(1)
            return

        try:
            bitmap = self._bitmap(instruction)
        except AssetMissingError as e:
            logger.warning(f"Skipping image '{instruction.ref}': {e}")
            if instruction.fallback_text:
                plugin.set_font_size(font_size(FontScale.DOUBLE_HEIGHT))
                plugin.print_text(f"{instruction.fallback_text}\n")
            return
        plugin.print_bitmap(bitmap, instruction.width)

    def _drive(self, document: ReceiptDocument):
        plugin = self.plugin
        plugin.printer_init()

        for instruction in document:
            if isinstance(instruction, Text):
                plugin.set_alignment(int(instruction.align))
                plugin.set_font_size(font_size(instruction.scale))
                plugin.print_text(f"{instruction.text}\n")
            elif isinstance(instruction, ColumnRow):
                plugin.set_font_size(font_size(instruction.scale))
                plugin.print_columns_text(
                    instruction.cells, instruction.widths, [int(a) for a in instruction.aligns]
                )
            elif isinstance(instruction, Image):
                self._print_image(instruction)
            elif isinstance(instruction, Feed):
                plugin.line_wrap(instruction.lines)
            elif isinstance(instruction, Cut):
                plugin.cut_paper()

        plugin.set_alignment(int(Align.LEFT))
        plugin.set_font_size(font_size(FontScale.NORMAL))

    async def _send(self, document: ReceiptDocument):
        await sync_to_async(self._drive, thread_sensitive=False)(document)

    async def _open_drawer(self):
        await sync_to_async(self.plugin.open_drawer, thread_sensitive=False)()

    async def _check(self) -> dict:
        status = await sync_to_async(self.plugin.get_printer_status, thread_sensitive=False)()
        return {"connected": status.get("status") == STATUS_OK, "message": status.get("message")}
