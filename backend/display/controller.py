"""
Customer display controller.

The display accepts one write sequence at a time and a write takes tens of
milliseconds, while cart changes can arrive much faster. The controller
therefore keeps at most one write in flight plus a single pending slot:
a new request while writing replaces whatever was pending, so the display
always catches up to the latest state without replaying stale ones.

States: DISCONNECTED -> CONNECTING -> CONNECTED <-> WRITING, and any write
failure drops back to DISCONNECTED. Reconnecting is the caller's decision.
"""

import asyncio
import logging
from enum import Enum

from .exceptions import DisplayError, PortUnavailableError
from .states import DEFAULT_WIDTH, Welcome

logger = logging.getLogger(__name__)

CLEAR = b"\x0c"
REINIT = b"\x1b\x40"


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    WRITING = "writing"


class CustomerDisplayController:
    def __init__(
        self,
        connection_factory,
        width: int = DEFAULT_WIDTH,
        symbol: str = "$",
        welcome: Welcome = None,
        handshake_delay: float = 0.05,
        settle_delay: float = 0.05,
        encoding: str = "ascii",
    ):
        self.connection_factory = connection_factory
        self.width = width
        self.symbol = symbol
        self.welcome = welcome or Welcome()
        self.handshake_delay = handshake_delay
        self.settle_delay = settle_delay
        self.encoding = encoding

        self._state = ConnectionState.DISCONNECTED
        self._connection = None
        self._pending = None
        self._task = None
        self.last_lines = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state in (ConnectionState.CONNECTED, ConnectionState.WRITING)

    @property
    def pending_state(self):
        return self._pending

    def status(self) -> dict:
        return {
            "state": self._state.value,
            "connected": self.is_connected,
            "lines": list(self.last_lines) if self.last_lines else None,
        }

    async def connect(self):
        """
        Open the display and show the welcome screen.

        Raises PortUnavailableError and stays DISCONNECTED if the port
        cannot be opened.
        """
        if self._connection is not None:
            await self.disconnect()

        self._state = ConnectionState.CONNECTING
        connection = self.connection_factory()
        try:
            await connection.open()
        except PortUnavailableError:
            self._state = ConnectionState.DISCONNECTED
            raise
        except DisplayError as e:
            self._state = ConnectionState.DISCONNECTED
            raise PortUnavailableError(message=str(e)) from e

        self._connection = connection
        self._pending = None
        self._state = ConnectionState.CONNECTED
        self.request_state(self.welcome)

    async def disconnect(self):
        self._pending = None
        self._state = ConnectionState.DISCONNECTED
        await self.wait_idle()
        await self._close()

    async def _close(self):
        connection, self._connection = self._connection, None
        if connection is None:
            return
        try:
            await connection.close()
        except (DisplayError, OSError) as e:
            logger.warning(f"Error closing customer display: {e}")

    def request_state(self, state):
        """
        Ask for `state` to be shown. Never blocks.

        Ignored while disconnected. When a write is in flight the request
        replaces any pending one.
        """
        if self._state in (ConnectionState.DISCONNECTED, ConnectionState.CONNECTING):
            logger.debug(f"Customer display not connected, dropping {state!r}")
            return

        if self._state == ConnectionState.WRITING:
            self._pending = state
            return

        self._state = ConnectionState.WRITING
        self._task = asyncio.get_running_loop().create_task(self._drain(state))

    async def _drain(self, state):
        current = state
        while current is not None and self._state == ConnectionState.WRITING:
            try:
                await self._write(current)
            except DisplayError as e:
                logger.error(f"Customer display write failed, disconnecting: {e}")
                await self._drop_connection()
                return
            except Exception as e:
                logger.error(f"Unexpected customer display error, disconnecting: {e}", exc_info=True)
                await self._drop_connection()
                return

            await asyncio.sleep(self.settle_delay)
            current, self._pending = self._pending, None

        if self._state == ConnectionState.WRITING:
            self._state = ConnectionState.CONNECTED

    async def _drop_connection(self):
        self._pending = None
        self._state = ConnectionState.DISCONNECTED
        await self._close()

    async def _write(self, state):
        line1, line2 = state.lines(self.width, self.symbol)
        connection = self._connection

        await connection.write(CLEAR + REINIT)
        await asyncio.sleep(self.handshake_delay)
        await connection.write((line1 + line2).encode(self.encoding, errors="replace"))
        await connection.flush()

        self.last_lines = (line1, line2)
        logger.debug(f'Customer display: "{line1.strip()}" / "{line2.strip()}"')

    async def wait_idle(self):
        """Wait until the in-flight write and anything pending behind it are done."""
        task = self._task
        if task is not None and not task.done():
            await task
