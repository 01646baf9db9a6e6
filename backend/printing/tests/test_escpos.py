"""
ESC/POS byte contract tests.
"""
import logging

import pytest
from PIL import Image as PILImage

from printing.assets import AssetResolver, NullAssetResolver
from printing.documents import Align, ColumnRow, Cut, Feed, FontScale, Image, ReceiptDocument, Text
from printing.escpos import (
    CUT,
    INIT,
    OPEN_DRAWER,
    EscPosEncoder,
    RasterImage,
    encode_raster,
    print_mode,
    raster_header,
    raster_to_pil,
)
from printing.exceptions import AssetMissingError


def document(*instructions, line_width=32):
    return ReceiptDocument(kind="customer", instructions=instructions, line_width=line_width)


class StaticAssets:
    def __init__(self, image):
        self.image = image

    def resolve(self, ref, width):
        return self.image


class TestCommandBytes:
    def test_constants(self):
        assert INIT == bytes.fromhex("1b40")
        assert CUT == bytes.fromhex("1d5600")
        assert OPEN_DRAWER == bytes.fromhex("1b700019fa")

    @pytest.mark.parametrize("scale,bold,expected", [
        (FontScale.NORMAL, False, 0x00),
        (FontScale.NORMAL, True, 0x08),
        (FontScale.DOUBLE_HEIGHT, False, 0x10),
        (FontScale.DOUBLE_WIDTH, False, 0x20),
        (FontScale.MAXIMUM, True, 0x38),
    ])
    def test_print_mode_bits(self, scale, bold, expected):
        assert print_mode(scale, bold) == bytes([0x1B, 0x21, expected])

    def test_unsupported_scale(self):
        with pytest.raises(ValueError):
            FontScale(3, 1)


class TestRaster:
    def test_header_for_receipt_width_logo(self):
        image = RasterImage(width=384, height=100, data=bytes(48 * 100))
        assert raster_header(image) == bytes.fromhex("1d763000" "3000" "6400")

    def test_header_height_is_little_endian(self):
        image = RasterImage(width=384, height=2000, data=bytes(48 * 2000))
        header = raster_header(image)
        assert header[-2:] == bytes([0xD0, 0x07])

    def test_rows_pack_msb_first_and_pad(self):
        image = RasterImage.from_rows([
            [1, 0, 0, 0, 0, 0, 0, 0, 1],
            [0, 1, 0, 0, 0, 0, 0, 1, 0],
        ])
        assert image.width == 9
        assert image.width_bytes == 2
        assert image.data == bytes([0x80, 0x80, 0x41, 0x00])
        assert encode_raster(image) == bytes.fromhex("1d763000" "0200" "0200") + image.data

    def test_ragged_rows_rejected(self):
        with pytest.raises(ValueError):
            RasterImage.from_rows([[1, 0], [1]])

    def test_from_pil_black_is_one(self):
        img = PILImage.new("L", (8, 1), color=255)
        img.putpixel((0, 0), 0)
        img.putpixel((7, 0), 0)
        assert RasterImage.from_pil(img).data == bytes([0x81])

    def test_from_pil_scales_down_to_max_width(self):
        img = PILImage.new("L", (800, 200), color=0)
        raster = RasterImage.from_pil(img, max_width=400)
        assert raster.width == 400
        assert raster.height == 100

    def test_pil_round_trip_preserves_dots(self):
        image = RasterImage.from_rows([[1, 0, 1, 1, 0, 0, 0, 0, 1, 1]])
        assert RasterImage.from_pil(raster_to_pil(image)).data == image.data


class TestEncoder:
    def test_text_instruction(self):
        data = EscPosEncoder().encode(document(Text("Hi", align=Align.CENTER, scale=FontScale.DOUBLE_HEIGHT, bold=True)))
        assert data.startswith(INIT)
        assert bytes.fromhex("1b6101") + bytes.fromhex("1b2118") + b"Hi\n" in data

    def test_column_row_is_fixed_width(self):
        row = ColumnRow(cells=["2x Burger", "$13.98"], widths=[22, 10], aligns=[Align.LEFT, Align.RIGHT])
        data = EscPosEncoder().encode(document(row))
        assert b"2x Burger" + b" " * 13 + b"    $13.98\n" in data

    def test_long_cells_are_truncated(self):
        row = ColumnRow(cells=["A" * 40, "$1.00"], widths=[22, 10], aligns=[Align.LEFT, Align.RIGHT])
        data = EscPosEncoder().encode(document(row))
        assert b"A" * 22 + b"     $1.00\n" in data

    def test_feed_and_cut(self):
        data = EscPosEncoder().encode(document(Feed(3), Cut()))
        assert INIT + b"\n\n\n" + CUT in data

    def test_resolved_image_emits_raster(self):
        image = RasterImage.from_rows([[1] * 8])
        data = EscPosEncoder().encode(document(Image(ref="logo.png", width=384)), StaticAssets(image))
        assert bytes.fromhex("1b6101") + encode_raster(image) in data

    def test_missing_asset_falls_back_to_text(self, caplog):
        instruction = Image(ref="missing.png", width=384, fallback_text="Corner Grill")
        with caplog.at_level(logging.WARNING, logger="printing.escpos"):
            data = EscPosEncoder().encode(document(instruction), NullAssetResolver())

        assert b"Corner Grill\n" in data
        assert b"\x1dv0" not in data
        assert "missing.png" in caplog.text

    def test_missing_asset_without_fallback_emits_nothing(self):
        data = EscPosEncoder().encode(document(Image(ref="missing.png", width=384)), NullAssetResolver())
        assert data == INIT + print_mode() + bytes.fromhex("1b6100")

    def test_unencodable_characters_are_replaced(self):
        data = EscPosEncoder(encoding="ascii").encode(document(Text("Café")))
        assert b"Caf?\n" in data


class TestAssetResolver:
    def test_loads_file_relative_to_base_dir(self, tmp_path):
        PILImage.new("L", (16, 4), color=0).save(tmp_path / "logo.png")
        resolver = AssetResolver(str(tmp_path))

        raster = resolver.resolve("logo.png", 384)
        assert raster.width == 16
        assert raster.height == 4
        assert raster.data == b"\xff\xff" * 4

    def test_results_are_cached(self, tmp_path):
        PILImage.new("L", (8, 8), color=0).save(tmp_path / "logo.png")
        resolver = AssetResolver(str(tmp_path))
        first = resolver.resolve("logo.png", 384)

        (tmp_path / "logo.png").unlink()
        assert resolver.resolve("logo.png", 384) is first

    def test_missing_file(self, tmp_path):
        with pytest.raises(AssetMissingError) as exc_info:
            AssetResolver(str(tmp_path)).resolve("nope.png", 384)
        assert exc_info.value.code == "asset_missing"

    def test_qr_reference_is_generated(self):
        raster = AssetResolver().resolve("qr:https://example.com/review", 192)
        assert 0 < raster.width <= 192
        assert raster.width == raster.height
        assert any(raster.data)

    def test_empty_qr_payload(self):
        with pytest.raises(AssetMissingError):
            AssetResolver().resolve("qr:", 192)
