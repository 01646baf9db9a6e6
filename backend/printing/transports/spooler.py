"""
Printing through the operating system's print spooler.

On Linux and macOS jobs are submitted to CUPS with ``lp -o raw``; on
Windows they go through the win32print API as RAW documents.
"""

import logging
import os
import subprocess
import sys
import tempfile

from asgiref.sync import sync_to_async

from ..exceptions import ConnectionFailedError, PrintingError, WriteFailedError
from .base import ByteStreamTransport

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == "win32"


def _run(args):
    try:
        return subprocess.run(args, capture_output=True, text=True, check=False)
    except FileNotFoundError:
        raise ConnectionFailedError(message=f"'{args[0]}' is not available; is CUPS installed?")
    except OSError as e:
        raise ConnectionFailedError(message=f"Failed to run '{args[0]}': {e}")


def list_printers():
    """Names of the printers known to the OS spooler."""
    if IS_WINDOWS:
        import win32print

        flags = win32print.PRINTER_ENUM_LOCAL | win32print.PRINTER_ENUM_CONNECTIONS
        return [printer[2] for printer in win32print.EnumPrinters(flags)]

    result = _run(["lpstat", "-p"])
    if result.returncode != 0:
        # lpstat exits non-zero when no printers are installed
        logger.info(f"lpstat -p returned {result.returncode}: {result.stderr.strip()}")
        return []

    printers = []
    for line in result.stdout.splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[0] == "printer":
            printers.append(parts[1])
    return printers


def print_queue():
    """Pending spooler jobs as dicts with id, user, size and submitted."""
    if IS_WINDOWS:
        raise PrintingError("Listing the print queue is not supported on Windows")

    result = _run(["lpstat", "-o"])
    if result.returncode != 0:
        logger.info(f"lpstat -o returned {result.returncode}: {result.stderr.strip()}")
        return []

    jobs = []
    for line in result.stdout.splitlines():
        parts = line.split(None, 3)
        if len(parts) < 3:
            continue
        jobs.append({
            "id": parts[0],
            "user": parts[1],
            "size": parts[2],
            "submitted": parts[3] if len(parts) > 3 else "",
        })
    return jobs


class SpoolerTransport(ByteStreamTransport):
    def _queue(self):
        if not self.target.queue_name:
            raise ConnectionFailedError(
                self.target.name, message=f"Printer '{self.target.name}' has no spooler queue configured"
            )
        return self.target.queue_name

    def _submit_cups(self, data: bytes):
        queue = self._queue()
        try:
            fd, path = tempfile.mkstemp(prefix="receipt-", suffix=".bin")
        except OSError as e:
            raise WriteFailedError(self.target.name, message=f"Cannot spool job for '{queue}': {e}")
        try:
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(data)
            except OSError as e:
                raise WriteFailedError(self.target.name, message=f"Cannot spool job for '{queue}': {e}")
            result = _run(["lp", "-d", queue, "-o", "raw", path])
            if result.returncode != 0:
                raise WriteFailedError(
                    self.target.name, message=f"lp failed for queue '{queue}': {result.stderr.strip()}"
                )
            logger.debug(f"Submitted job to '{queue}': {result.stdout.strip()}")
        finally:
            os.remove(path)

    def _submit_win32(self, data: bytes):
        import pywintypes
        import win32print

        queue = self._queue()
        try:
            handle = win32print.OpenPrinter(queue)
        except pywintypes.error as e:
            raise ConnectionFailedError(self.target.name, message=f"Failed to open printer '{queue}': {e}")
        try:
            win32print.StartDocPrinter(handle, 1, ("Receipt", None, "RAW"))
            try:
                win32print.StartPagePrinter(handle)
                win32print.WritePrinter(handle, data)
                win32print.EndPagePrinter(handle)
            finally:
                win32print.EndDocPrinter(handle)
        except pywintypes.error as e:
            raise WriteFailedError(self.target.name, message=f"Failed to write to printer '{queue}': {e}")
        finally:
            win32print.ClosePrinter(handle)

    def _submit(self, data: bytes):
        if IS_WINDOWS:
            self._submit_win32(data)
        else:
            self._submit_cups(data)

    async def _write(self, data: bytes):
        await sync_to_async(self._submit, thread_sensitive=False)(data)

    async def _check(self) -> dict:
        queue = self._queue()
        printers = await sync_to_async(list_printers, thread_sensitive=False)()
        if queue not in printers:
            return {"connected": False, "error": f"Queue '{queue}' not found"}
        return {"connected": True}
