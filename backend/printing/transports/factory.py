import logging

from ..exceptions import UnknownBackendError
from .base import NETWORK, PLUGIN, SIMULATED, SPOOLER, USB, PrinterTarget, PrintTransport
from .network import NetworkTransport
from .plugin import EmbeddedPluginTransport
from .simulated import SimulatedTransport
from .spooler import SpoolerTransport
from .usb import UsbTransport

logger = logging.getLogger(__name__)


class TransportFactory:
    """
    Factory for creating a print transport based on the target's backend.
    """

    # Maps configured backend name to a specific transport class
    _transports = {
        SIMULATED: SimulatedTransport,
        USB: UsbTransport,
        NETWORK: NetworkTransport,
        SPOOLER: SpoolerTransport,
        PLUGIN: EmbeddedPluginTransport,
    }

    @staticmethod
    def create(target: PrinterTarget, assets=None) -> PrintTransport:
        transport_class = TransportFactory._transports.get(target.backend)

        if transport_class:
            return transport_class(target, assets)

        raise UnknownBackendError(target.backend)
