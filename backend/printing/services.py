"""
Print orchestration: render an order's documents and deliver them.

Documents for the same physical printer are sent one after another so
their byte streams never interleave; different printers print in
parallel. Transport failures are reported in the results and never raised.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from asgiref.sync import async_to_sync
from django.conf import settings

from .assets import AssetResolver
from .documents import ReceiptDocument
from .exceptions import UnknownBackendError
from .renderers import PRINT_BOTH, PRINT_CUSTOMER, PRINT_KITCHEN, render_documents
from .transports import SIMULATED, PrinterTarget, TransportFactory
from .types import PrintableOrder, ShopDetails

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrintJobResult:
    kind: str
    printer: str
    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "kind": self.kind,
            "printer": self.printer,
            "success": self.success,
            "error": self.error,
            "error_code": self.error_code,
        }


def simulated_target(kind: str) -> PrinterTarget:
    return PrinterTarget(name=f"simulated-{kind}", backend=SIMULATED)


class PrintService:
    """
    Usage:
        service = PrintService(assets=AssetResolver(base_dir))
        results = await service.print_order(order, shop, "both", {"customer": [receipt_printer]})
    """

    def __init__(self, transport_factory=TransportFactory, assets=None):
        self.transport_factory = transport_factory
        self.assets = assets

    def _targets_for(self, kind: str, targets: Optional[Dict[str, Iterable[PrinterTarget]]]) -> List[PrinterTarget]:
        configured = list((targets or {}).get(kind) or [])
        if not configured:
            logger.info(f"No {kind} printer configured, using simulated output")
            return [simulated_target(kind)]
        return configured

    def plan(self, order: PrintableOrder, shop: ShopDetails, print_type: str = PRINT_BOTH, targets=None):
        """
        Render every requested document for every target, grouped by device.

        Returns an ordered mapping of device key -> (target, [documents]).
        """
        kinds = [PRINT_CUSTOMER, PRINT_KITCHEN] if print_type == PRINT_BOTH else [print_type]
        chains = {}
        for kind in kinds:
            for target in self._targets_for(kind, targets):
                documents = render_documents(order, shop, kind, line_width=target.line_width)
                chains.setdefault(target.key, (target, []))[1].extend(documents)
        return chains

    async def _run_chain(self, target: PrinterTarget, documents: List[ReceiptDocument]) -> List[PrintJobResult]:
        try:
            transport = self.transport_factory.create(target, self.assets)
        except UnknownBackendError as e:
            logger.error(f"Cannot print on '{target.name}': {e}")
            return [
                PrintJobResult(kind=doc.kind, printer=target.name, success=False, error=str(e),
                               error_code="unknown_backend")
                for doc in documents
            ]

        results = []
        for document in documents:
            result = await transport.render(document)
            results.append(PrintJobResult(
                kind=document.kind,
                printer=target.name,
                success=result.success,
                error=result.error,
                error_code=result.error_code,
            ))
        return results

    async def print_order(
        self,
        order: PrintableOrder,
        shop: ShopDetails,
        print_type: str = PRINT_BOTH,
        targets: Optional[Dict[str, Iterable[PrinterTarget]]] = None,
    ) -> List[PrintJobResult]:
        chains = self.plan(order, shop, print_type, targets)
        chain_results = await asyncio.gather(
            *(self._run_chain(target, documents) for target, documents in chains.values())
        )
        results = [result for chain in chain_results for result in chain]

        failed = [r for r in results if not r.success]
        if failed:
            logger.warning(
                f"Order #{order.order_number}: {len(failed)} of {len(results)} document(s) failed to print"
            )
        return results

    async def get_printer_status(self, target: PrinterTarget) -> dict:
        try:
            transport = self.transport_factory.create(target, self.assets)
        except UnknownBackendError as e:
            return {"name": target.name, "backend": target.backend, "connected": False, "error": str(e)}
        return await transport.status()

    async def open_cash_drawer(self, target: PrinterTarget):
        transport = self.transport_factory.create(target, self.assets)
        return await transport.open_cash_drawer()


def get_print_service() -> PrintService:
    """PrintService wired with the configured receipt asset directory."""
    return PrintService(assets=AssetResolver(getattr(settings, "RECEIPT_ASSETS_DIR", None)))


def print_order_sync(order, shop, print_type=PRINT_BOTH, targets=None, service=None) -> List[PrintJobResult]:
    """Blocking wrapper for views and Celery tasks."""
    service = service or get_print_service()
    return async_to_sync(service.print_order)(order, shop, print_type, targets)


def get_printer_status(target: PrinterTarget, service=None) -> dict:
    service = service or get_print_service()
    return async_to_sync(service.get_printer_status)(target)


def open_cash_drawer(target: PrinterTarget, service=None):
    service = service or get_print_service()
    return async_to_sync(service.open_cash_drawer)(target)
