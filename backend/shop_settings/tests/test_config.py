from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from printing.transports import PrinterTarget
from shop_settings.config import app_settings
from shop_settings.models import Printer, ShopSettings


@pytest.mark.django_db
class TestAppSettings:
    def test_defaults_created_on_first_access(self):
        assert ShopSettings.objects.count() == 0

        assert app_settings.currency == "USD"
        assert app_settings.tax_rate == Decimal("0.00")
        assert ShopSettings.objects.count() == 1

    def test_reloads_when_settings_saved(self):
        assert app_settings.shop_name == "My Shop"

        shop = ShopSettings.load()
        shop.shop_name = "Corner Grill"
        shop.tax_rate = Decimal("8.50")
        shop.save()

        assert app_settings.shop_name == "Corner Grill"
        assert app_settings.tax_rate == Decimal("8.50")

    def test_shop_details(self):
        ShopSettings.objects.create(
            shop_name="Corner Grill",
            address="1 Main St\nSpringfield",
            phone="555-0100",
            currency="gbp",
            currency_symbol="£",
            receipt_footer="",
            receipt_qr_url="https://example.com/review",
        )

        shop = app_settings.get_shop_details()

        assert shop.name == "Corner Grill"
        assert shop.currency == "GBP"
        assert shop.currency_symbol == "£"
        assert shop.footer_text is None
        assert shop.vat_number is None
        assert shop.logo_ref is None
        assert shop.qr_data == "https://example.com/review"

    def test_printer_targets_by_role(self):
        Printer.objects.create(name="Front", role="receipt", backend="network", ip_address="10.0.0.5")
        Printer.objects.create(name="Grill", role="kitchen", backend="spooler", queue_name="grill", line_width=42)
        Printer.objects.create(name="Old", role="kitchen", is_active=False)

        receipt = app_settings.get_printer_targets("receipt")
        kitchen = app_settings.get_printer_targets("kitchen")

        assert receipt == [PrinterTarget(name="Front", backend="network", host="10.0.0.5", port=9100)]
        assert [t.name for t in kitchen] == ["Grill"]
        assert kitchen[0].line_width == 42
        assert len(app_settings.get_printer_targets()) == 2
        assert app_settings.get_print_targets() == {"customer": receipt, "kitchen": kitchen}

    def test_deleting_printer_reloads_targets(self):
        printer = Printer.objects.create(name="Front", role="receipt")
        assert len(app_settings.get_printer_targets("receipt")) == 1

        printer.delete()

        assert app_settings.get_printer_targets("receipt") == []

    def test_printer_width_falls_back_to_shop_width(self):
        ShopSettings.objects.create(receipt_line_width=48)
        Printer.objects.create(name="Front", role="receipt")

        assert app_settings.get_printer_targets("receipt")[0].line_width == 48


@pytest.mark.django_db
class TestModels:
    def test_only_one_shop_settings(self):
        ShopSettings.objects.create()
        with pytest.raises(ValidationError):
            ShopSettings.objects.create(shop_name="Second")

    def test_load_reuses_existing_row(self):
        first = ShopSettings.load()
        assert ShopSettings.load().pk == first.pk

    @pytest.mark.parametrize(
        "backend,missing",
        [
            ("network", "ip_address"),
            ("usb", "usb_vendor_id"),
            ("spooler", "queue_name"),
            ("plugin", "plugin_url"),
        ],
    )
    def test_printer_requires_connection_fields(self, backend, missing):
        printer = Printer(name="P", role="receipt", backend=backend)
        with pytest.raises(ValidationError) as exc_info:
            printer.clean()
        assert missing in exc_info.value.message_dict

    def test_simulated_printer_needs_nothing(self):
        Printer(name="P", role="receipt").clean()
