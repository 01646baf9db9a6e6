"""
Layout tests for the receipt and kitchen docket renderers.
"""
import pytest

from printing.assets import NullAssetResolver
from printing.documents import Align, ColumnRow, Cut, DocumentBuilder, Feed, FontScale, Image, Text
from printing.escpos import EscPosEncoder
from printing.renderers import (
    CustomerReceiptRenderer,
    KitchenDocketRenderer,
    format_timestamp,
    order_type_label,
    render_documents,
)
from .factories import make_order, make_shop


def texts(document):
    return [i.text for i in document if isinstance(i, Text)]


def rows(document):
    return [i for i in document if isinstance(i, ColumnRow)]


class TestHelpers:
    def test_order_type_label(self):
        assert order_type_label("dine_in") == "DINE IN"
        assert order_type_label("take-away") == "TAKE AWAY"
        assert order_type_label("online") == "ONLINE ORDER"

    def test_format_timestamp(self):
        from datetime import datetime
        assert format_timestamp(datetime(2024, 1, 5, 9, 7)) == "05/01/2024 09:07"

    def test_column_row_requires_matching_lengths(self):
        with pytest.raises(ValueError):
            ColumnRow(cells=["a", "b"], widths=[10], aligns=[Align.LEFT, Align.RIGHT])

    def test_builder_divider_spans_line_width(self):
        document = DocumentBuilder("customer", 40).divider("=").build()
        assert document.instructions == (Text("=" * 40),)


class TestCustomerReceiptRenderer:
    @pytest.fixture
    def receipt(self):
        return CustomerReceiptRenderer(32).render(make_order(), make_shop())

    def test_header(self, receipt):
        logo = receipt.instructions[0]
        assert isinstance(logo, Image)
        assert logo.ref == "logo.png"
        assert logo.fallback_text is None
        assert logo.width == 384

        lines = texts(receipt)
        assert "Corner Grill" in lines
        assert "1 High Street" in lines
        assert "Tel: 0123 456" in lines

    def test_order_info(self, receipt):
        number = next(i for i in receipt if isinstance(i, Text) and i.text == "#42")
        assert number.scale == FontScale.MAXIMUM
        assert "DINE IN" in texts(receipt)
        assert "15/01/2024 12:30" in texts(receipt)

    def test_lines_modifiers_and_notes(self, receipt):
        cells = [r.cells for r in rows(receipt)]
        assert ("2x Burger", "$13.98") in cells
        assert ("  + Cheese", "$0.50") in cells
        assert "  + No onion" in texts(receipt)
        assert "  Note: well done" in texts(receipt)

    def test_totals(self, receipt):
        cells = [r.cells for r in rows(receipt)]
        assert ("Subtotal:", "$13.98") in cells
        assert ("Discount:", "-$1.40") in cells
        assert ("Tax (10%):", "$1.26") in cells

        total = next(r for r in rows(receipt) if r.cells[0] == "TOTAL:")
        assert total.cells[1] == "$13.84"
        assert total.bold is True
        assert total.scale == FontScale.DOUBLE_HEIGHT

    def test_column_widths_fill_the_line(self, receipt):
        for row in rows(receipt):
            assert sum(row.widths) == 32

    def test_discount_row_omitted_when_zero(self):
        receipt = CustomerReceiptRenderer().render(make_order(discount=0), make_shop())
        assert all(r.cells[0] != "Discount:" for r in rows(receipt))

    def test_footer(self, receipt):
        lines = texts(receipt)
        assert "Paid by: CASH" in lines
        assert "VAT No: GB123" in lines
        assert "Thank you for your order!" in lines

        qr = [i for i in receipt if isinstance(i, Image) and i.ref.startswith("qr:")]
        assert qr[0].ref == "qr:https://example.com/review"

        assert receipt.instructions[-2:] == (Feed(4), Cut())

    def test_optional_sections_skipped(self):
        shop = make_shop(logo_ref=None, qr_data=None, vat_number=None, phone="")
        receipt = CustomerReceiptRenderer().render(make_order(payment_method=None), shop)

        assert not any(isinstance(i, Image) for i in receipt)
        assert not any(t.startswith(("Tel:", "VAT No:", "Paid by:")) for t in texts(receipt))

    def test_missing_logo_prints_shop_name_once(self):
        receipt = CustomerReceiptRenderer(32).render(make_order(), make_shop())
        data = EscPosEncoder().encode(receipt, NullAssetResolver())

        assert data.count(b"Corner Grill") == 1

    def test_rendering_is_deterministic(self):
        renderer = CustomerReceiptRenderer()
        assert renderer.render(make_order(), make_shop()) == renderer.render(make_order(), make_shop())


class TestKitchenDocketRenderer:
    @pytest.fixture
    def docket(self):
        return KitchenDocketRenderer(32).render(make_order(), make_shop())

    def test_never_prints_prices(self, docket):
        assert not rows(docket)
        assert not any("$" in t for t in texts(docket))

    def test_header(self, docket):
        first = docket.instructions[0]
        assert first == Text("#42", align=Align.CENTER, scale=FontScale.MAXIMUM, bold=True)
        assert "Customer: Sam" in texts(docket)
        assert "=" * 32 in texts(docket)

    def test_items_are_large_and_notes_emphasised(self, docket):
        item = next(i for i in docket if isinstance(i, Text) and i.text == "2x Burger")
        assert item.scale == FontScale.DOUBLE_HEIGHT
        assert item.bold is True

        note = next(i for i in docket if isinstance(i, Text) and i.text == "  *** well done ***")
        assert note.bold is True
        assert "  + Cheese" in texts(docket)

    def test_order_notes_and_cut(self, docket):
        assert "NOTES: Ring the bell" in texts(docket)
        assert docket.instructions[-2:] == (Feed(4), Cut())


class TestRenderDocuments:
    def test_both_renders_customer_then_kitchen(self):
        documents = render_documents(make_order(), make_shop(), "both")
        assert [d.kind for d in documents] == ["customer", "kitchen"]

    def test_single_kind(self):
        documents = render_documents(make_order(), make_shop(), "kitchen", line_width=48)
        assert [d.kind for d in documents] == ["kitchen"]
        assert documents[0].line_width == 48

    def test_unknown_print_type(self):
        with pytest.raises(ValueError):
            render_documents(make_order(), make_shop(), "invoice")
