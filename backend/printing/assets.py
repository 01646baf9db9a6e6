"""
Image assets referenced by receipt documents.

Two kinds of reference are understood:

* a file path, relative to the resolver's base directory (shop logo)
* ``qr:<payload>``, rendered on the fly with the qrcode library
"""

import logging
import os

import qrcode
from PIL import Image as PILImage, UnidentifiedImageError

from .escpos import RasterImage
from .exceptions import AssetMissingError

logger = logging.getLogger(__name__)

QR_PREFIX = "qr:"


class AssetResolver:
    """
    Read-through resolver with a per-instance cache keyed by (ref, width).
    """

    def __init__(self, base_dir=None):
        self.base_dir = base_dir
        self._cache = {}

    def resolve(self, ref: str, width: int) -> RasterImage:
        key = (ref, width)
        if key not in self._cache:
            self._cache[key] = self._load(ref, width)
        return self._cache[key]

    def _load(self, ref: str, width: int) -> RasterImage:
        if not ref:
            raise AssetMissingError(ref)

        if ref.startswith(QR_PREFIX):
            return self._render_qr(ref[len(QR_PREFIX):], width)

        path = ref if os.path.isabs(ref) or not self.base_dir else os.path.join(self.base_dir, ref)
        try:
            with PILImage.open(path) as img:
                raster = RasterImage.from_pil(img, max_width=width)
        except (OSError, UnidentifiedImageError) as e:
            raise AssetMissingError(ref, message=f"Image asset '{ref}' could not be loaded: {e}")

        logger.debug(f"Loaded image asset {path} ({raster.width}x{raster.height})")
        return raster

    def _render_qr(self, payload: str, width: int) -> RasterImage:
        if not payload:
            raise AssetMissingError(QR_PREFIX, message="QR code payload is empty")

        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=4,
            border=2,
        )
        qr.add_data(payload)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white").get_image()
        return RasterImage.from_pil(img, max_width=width)


class NullAssetResolver:
    """Resolves nothing; every image falls back to its text."""

    def resolve(self, ref: str, width: int) -> RasterImage:
        raise AssetMissingError(ref, message="Image assets are disabled")
