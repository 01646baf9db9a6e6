import asyncio
import logging

from ..exceptions import ConnectionFailedError, WriteFailedError
from .base import ByteStreamTransport

logger = logging.getLogger(__name__)


class NetworkTransport(ByteStreamTransport):
    """
    Raw TCP printing (port 9100 / JetDirect).
    """

    async def _connect(self):
        target = self.target
        if not target.host:
            raise ConnectionFailedError(target.name, message=f"Printer '{target.name}' has no host configured")
        try:
            return await asyncio.open_connection(target.host, target.port)
        except OSError as e:
            raise ConnectionFailedError(
                target.name, message=f"Failed to connect to {target.host}:{target.port}: {e}"
            )

    async def _close(self, writer):
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.debug(f"Error closing connection to '{self.target.name}': {e}")

    async def _write(self, data: bytes):
        _, writer = await self._connect()
        try:
            writer.write(data)
            await writer.drain()
        except OSError as e:
            raise WriteFailedError(self.target.name, message=f"Write to {self.target.host}:{self.target.port} failed: {e}")
        finally:
            await self._close(writer)

        logger.debug(f"Sent {len(data)} bytes to {self.target.host}:{self.target.port}")

    async def _check(self) -> dict:
        _, writer = await self._connect()
        await self._close(writer)
        return {"connected": True}
