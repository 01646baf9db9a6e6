import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..documents import ReceiptDocument
from ..escpos import OPEN_DRAWER, EscPosEncoder
from ..exceptions import TransportError, WriteFailedError

logger = logging.getLogger(__name__)

SIMULATED = "simulated"
USB = "usb"
NETWORK = "network"
SPOOLER = "spooler"
PLUGIN = "plugin"

BACKENDS = (SIMULATED, USB, NETWORK, SPOOLER, PLUGIN)


@dataclass(frozen=True)
class PrinterTarget:
    """Where and how to print. Built from the Printer model or settings."""

    name: str
    backend: str = SIMULATED
    host: Optional[str] = None
    port: int = 9100
    usb_vendor_id: Optional[int] = None
    usb_product_id: Optional[int] = None
    queue_name: Optional[str] = None
    plugin_url: Optional[str] = None
    line_width: int = 32
    encoding: str = "cp437"

    @property
    def key(self):
        """Identity of the physical device; documents sharing a key print in sequence."""
        return (self.backend, self.host, self.port, self.usb_vendor_id, self.usb_product_id,
                self.queue_name, self.plugin_url, self.name if self.backend == SIMULATED else None)


@dataclass(frozen=True)
class PrintResult:
    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    printer: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "success": self.success,
            "error": self.error,
            "error_code": self.error_code,
            "printer": self.printer,
        }


class PrintTransport(ABC):
    """
    Delivers a ReceiptDocument to one printer.

    Variants implement `_send`; `render` turns any failure into a failed
    PrintResult so callers never have to handle transport exceptions.
    """

    def __init__(self, target: PrinterTarget, assets=None):
        self.target = target
        self.assets = assets

    @abstractmethod
    async def _send(self, document: ReceiptDocument):
        """Deliver the document or raise a TransportError."""

    async def _open_drawer(self):
        raise TransportError(f"Printer '{self.target.name}' cannot open a cash drawer", code="unsupported")

    async def _check(self) -> dict:
        return {"connected": True}

    async def render(self, document: ReceiptDocument) -> PrintResult:
        try:
            await self._send(document)
        except TransportError as e:
            logger.error(f"Printing {document.kind} document on '{self.target.name}' failed: {e}")
            return PrintResult(success=False, error=str(e), error_code=e.code, printer=self.target.name)
        except Exception as e:
            logger.error(
                f"Unexpected error printing {document.kind} document on '{self.target.name}': {e}", exc_info=True
            )
            return PrintResult(
                success=False, error=str(e), error_code=WriteFailedError.code, printer=self.target.name
            )

        logger.info(f"Printed {document.kind} document on '{self.target.name}' ({self.target.backend})")
        return PrintResult(success=True, printer=self.target.name)

    async def open_cash_drawer(self) -> PrintResult:
        try:
            await self._open_drawer()
        except TransportError as e:
            logger.error(f"Opening cash drawer on '{self.target.name}' failed: {e}")
            return PrintResult(success=False, error=str(e), error_code=e.code, printer=self.target.name)
        return PrintResult(success=True, printer=self.target.name)

    async def status(self) -> dict:
        result = {"name": self.target.name, "backend": self.target.backend, "connected": False, "error": None}
        try:
            result.update(await self._check())
        except TransportError as e:
            result["error"] = str(e)
        return result


class ByteStreamTransport(PrintTransport):
    """
    Base for printers that take a raw ESC/POS byte stream.
    """

    def __init__(self, target: PrinterTarget, assets=None):
        super().__init__(target, assets)
        self.encoder = EscPosEncoder(encoding=target.encoding, line_width=target.line_width)

    @abstractmethod
    async def _write(self, data: bytes):
        """Write raw bytes to the device or raise a TransportError."""

    async def _send(self, document: ReceiptDocument):
        data = self.encoder.encode(document, self.assets)
        await self._write(data)

    async def _open_drawer(self):
        await self._write(OPEN_DRAWER)
