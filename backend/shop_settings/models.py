from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from printing.transports import NETWORK, PLUGIN, SIMULATED, SPOOLER, USB, PrinterTarget


class ShopSettings(models.Model):
    """
    Shop-wide settings. There is exactly one row; use ShopSettings.load().

    Amounts on receipts are printed with `currency_symbol`; `currency`
    decides how many decimal places they are rounded to.
    """

    shop_name = models.CharField(max_length=100, default="My Shop")
    address = models.TextField(blank=True, help_text="Printed under the shop name, one line per row")
    phone = models.CharField(max_length=30, blank=True)
    vat_number = models.CharField(max_length=50, blank=True)

    tax_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
        help_text="Tax rate as a percentage (e.g., 10 for 10%)",
    )
    currency = models.CharField(
        max_length=3,
        default="USD",
        help_text="Three-letter currency code (ISO 4217)",
    )
    currency_symbol = models.CharField(max_length=5, default="$")

    receipt_footer = models.TextField(default="Thank you for your business!", blank=True)
    logo = models.ImageField(upload_to="receipt_logos/", null=True, blank=True)
    receipt_qr_url = models.URLField(blank=True, help_text="Printed as a QR code at the bottom of receipts")
    receipt_line_width = models.PositiveSmallIntegerField(
        default=32,
        validators=[MinValueValidator(16), MaxValueValidator(64)],
        help_text="Characters per line on receipt printers without their own width",
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Shop Settings"
        verbose_name_plural = "Shop Settings"

    def clean(self):
        if ShopSettings.objects.exclude(pk=self.pk).exists():
            raise ValidationError("There can only be one ShopSettings instance.")
        self.currency = (self.currency or "").upper()

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        instance = cls.objects.first()
        if instance is None:
            instance = cls.objects.create()
        return instance

    def __str__(self):
        return f"Shop Settings ({self.shop_name})"


class Printer(models.Model):
    """
    A configured receipt or kitchen printer and how to reach it.
    """

    class Role(models.TextChoices):
        RECEIPT = "receipt", "Receipt Printer"
        KITCHEN = "kitchen", "Kitchen Printer"

    class Backend(models.TextChoices):
        SIMULATED = SIMULATED, "Simulated (log only)"
        USB = USB, "USB"
        NETWORK = NETWORK, "Network (raw TCP)"
        SPOOLER = SPOOLER, "System print queue"
        PLUGIN = PLUGIN, "Embedded print plugin"

    name = models.CharField(max_length=100, unique=True, help_text="Display name (e.g., 'Front Counter')")
    role = models.CharField(max_length=20, choices=Role.choices)
    backend = models.CharField(max_length=20, choices=Backend.choices, default=Backend.SIMULATED)

    # Network
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    port = models.PositiveIntegerField(default=9100)

    # USB
    usb_vendor_id = models.PositiveIntegerField(null=True, blank=True)
    usb_product_id = models.PositiveIntegerField(null=True, blank=True)

    # Spooler / plugin
    queue_name = models.CharField(max_length=200, blank=True)
    plugin_url = models.URLField(blank=True)

    line_width = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(16), MaxValueValidator(64)],
        help_text="Characters per line; defaults to the shop's receipt line width",
    )
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["role", "name"]
        indexes = [models.Index(fields=["role", "is_active"], name="printer_role_active_idx")]

    def __str__(self):
        return f"{self.name} ({self.get_role_display()})"

    def clean(self):
        required = {
            self.Backend.NETWORK: ("ip_address",),
            self.Backend.USB: ("usb_vendor_id", "usb_product_id"),
            self.Backend.SPOOLER: ("queue_name",),
            self.Backend.PLUGIN: ("plugin_url",),
        }.get(self.backend, ())
        errors = {name: "Required for this backend." for name in required if getattr(self, name) in (None, "")}
        if errors:
            raise ValidationError(errors)

    def to_target(self, default_line_width: int = 32) -> PrinterTarget:
        return PrinterTarget(
            name=self.name,
            backend=self.backend,
            host=self.ip_address or None,
            port=self.port,
            usb_vendor_id=self.usb_vendor_id,
            usb_product_id=self.usb_product_id,
            queue_name=self.queue_name or None,
            plugin_url=self.plugin_url or None,
            line_width=self.line_width or default_line_width,
        )
