import logging

import usb.core
import usb.util
from asgiref.sync import sync_to_async

from ..exceptions import ConnectionFailedError, WriteFailedError
from .base import ByteStreamTransport

logger = logging.getLogger(__name__)

WRITE_TIMEOUT_MS = 5000


def _is_out_endpoint(endpoint):
    return usb.util.endpoint_direction(endpoint.bEndpointAddress) == usb.util.ENDPOINT_OUT


class UsbTransport(ByteStreamTransport):
    """
    Writes ESC/POS bytes to a USB printer's bulk OUT endpoint with pyusb.
    The device is claimed per job and released afterwards.
    """

    def _find_device(self):
        target = self.target
        if target.usb_vendor_id is None or target.usb_product_id is None:
            raise ConnectionFailedError(target.name, message=f"Printer '{target.name}' has no USB vendor/product id")
        try:
            return usb.core.find(idVendor=target.usb_vendor_id, idProduct=target.usb_product_id)
        except (usb.core.NoBackendError, OSError, ValueError) as e:
            raise ConnectionFailedError(target.name, message=f"USB lookup failed for '{target.name}': {e}")

    def _open_endpoint(self, device):
        try:
            try:
                if device.is_kernel_driver_active(0):
                    device.detach_kernel_driver(0)
            except NotImplementedError:
                # Not supported on every platform (e.g. Windows)
                pass
            device.set_configuration()
            interface = device.get_active_configuration()[(0, 0)]
        except usb.core.USBError as e:
            raise ConnectionFailedError(self.target.name, message=f"Failed to open USB printer '{self.target.name}': {e}")

        endpoint = usb.util.find_descriptor(interface, custom_match=_is_out_endpoint)
        if endpoint is None:
            raise ConnectionFailedError(self.target.name, message=f"USB printer '{self.target.name}' has no OUT endpoint")
        return endpoint

    def _write_blocking(self, data: bytes):
        device = self._find_device()
        if device is None:
            raise ConnectionFailedError(self.target.name)

        try:
            endpoint = self._open_endpoint(device)
            try:
                endpoint.write(data, WRITE_TIMEOUT_MS)
            except usb.core.USBError as e:
                raise WriteFailedError(self.target.name, message=f"USB write to '{self.target.name}' failed: {e}")
        finally:
            usb.util.dispose_resources(device)

        logger.debug(f"Wrote {len(data)} bytes to USB printer '{self.target.name}'")

    async def _write(self, data: bytes):
        await sync_to_async(self._write_blocking, thread_sensitive=False)(data)

    async def _check(self) -> dict:
        device = await sync_to_async(self._find_device, thread_sensitive=False)()
        if device is None:
            return {"connected": False, "error": "No USB printer found"}
        return {"connected": True}
