import logging

import serial
from asgiref.sync import sync_to_async
from serial.tools import list_ports

from .exceptions import DisplayWriteError, PortUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_PORT = "/dev/ttyUSB0"
DEFAULT_BAUD_RATE = 9600


class SerialConnection:
    """
    8N1 serial link to the pole display. pyserial blocks, so every call
    runs on a worker thread.
    """

    def __init__(self, port: str = DEFAULT_PORT, baud_rate: int = DEFAULT_BAUD_RATE, write_timeout: float = 2):
        self.port = port
        self.baud_rate = baud_rate
        self.write_timeout = write_timeout
        self._serial = None

    @property
    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def _open(self):
        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.baud_rate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                write_timeout=self.write_timeout,
            )
        except (serial.SerialException, ValueError) as e:
            raise PortUnavailableError(self.port, message=f"Cannot open {self.port}: {e}")
        logger.info(f"Customer display connected on {self.port} at {self.baud_rate} baud")

    def _write(self, data: bytes):
        if not self.is_open:
            raise DisplayWriteError(self.port, message=f"Display port {self.port} is not open")
        try:
            self._serial.write(data)
        except (serial.SerialException, OSError) as e:
            raise DisplayWriteError(self.port, message=f"Write to {self.port} failed: {e}")

    def _flush(self):
        if not self.is_open:
            raise DisplayWriteError(self.port, message=f"Display port {self.port} is not open")
        try:
            self._serial.flush()
        except (serial.SerialException, OSError) as e:
            raise DisplayWriteError(self.port, message=f"Flush on {self.port} failed: {e}")

    def _close(self):
        if self._serial is None:
            return
        try:
            self._serial.close()
        except (serial.SerialException, OSError) as e:
            logger.warning(f"Error closing {self.port}: {e}")
        finally:
            self._serial = None

    async def open(self):
        await sync_to_async(self._open, thread_sensitive=False)()

    async def write(self, data: bytes):
        await sync_to_async(self._write, thread_sensitive=False)(data)

    async def flush(self):
        await sync_to_async(self._flush, thread_sensitive=False)()

    async def close(self):
        await sync_to_async(self._close, thread_sensitive=False)()


def list_serial_ports():
    """Available serial ports as dicts with path, description and manufacturer."""
    return [
        {
            "path": info.device,
            "description": info.description,
            "manufacturer": info.manufacturer,
        }
        for info in list_ports.comports()
    ]
