from .base import (
    BACKENDS,
    NETWORK,
    PLUGIN,
    SIMULATED,
    SPOOLER,
    USB,
    PrinterTarget,
    PrintResult,
    PrintTransport,
)
from .factory import TransportFactory
from .network import NetworkTransport
from .plugin import EmbeddedPluginTransport, HttpPrinterPlugin, PrinterPlugin
from .simulated import SimulatedTransport, format_document
from .spooler import SpoolerTransport, list_printers, print_queue
from .usb import UsbTransport
