"""
Centralized access to shop settings and printer configuration.

Business logic reads configuration through `app_settings` instead of
querying ShopSettings/Printer directly. Loading is deferred to the first
attribute access so management commands can run before the tables exist.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional
import logging

from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError

from printing.types import ShopDetails

logger = logging.getLogger(__name__)


class AppSettings:
    """
    A LAZY singleton over the ShopSettings row and the active printers.
    """

    _instance: Optional["AppSettings"] = None
    _initialized: bool = False

    def __new__(cls) -> "AppSettings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def _setup(self):
        if not self._initialized:
            self.load_settings()
            self._initialized = True

    def __getattr__(self, name: str) -> Any:
        """
        Lazily loads settings on first access, then retrieves the attribute.
        """
        if not self._initialized:
            self._setup()

        # Prevents infinite recursion for attributes that truly don't exist.
        try:
            return self.__dict__[name]
        except KeyError:
            raise AttributeError(f"'AppSettings' object has no attribute '{name}'")

    def load_settings(self) -> None:
        from .models import ShopSettings

        try:
            settings_obj = ShopSettings.load()
        except DatabaseError as e:
            raise ImproperlyConfigured(f"Failed to load shop settings: {e}")

        self.shop_name: str = settings_obj.shop_name
        self.address: str = settings_obj.address
        self.phone: str = settings_obj.phone
        self.vat_number: str = settings_obj.vat_number

        self.tax_rate: Decimal = settings_obj.tax_rate
        self.currency: str = settings_obj.currency
        self.currency_symbol: str = settings_obj.currency_symbol

        self.receipt_footer: str = settings_obj.receipt_footer
        self.logo_path: Optional[str] = settings_obj.logo.path if settings_obj.logo else None
        self.receipt_qr_url: str = settings_obj.receipt_qr_url
        self.receipt_line_width: int = settings_obj.receipt_line_width

        self._load_printer_config()

    def _load_printer_config(self) -> None:
        from .models import Printer

        try:
            printers = list(Printer.objects.filter(is_active=True))
        except DatabaseError as e:
            # If loading fails, fall back to simulated output rather than crash
            logger.warning(f"Failed to load printer configuration: {e}")
            printers = []

        self.receipt_printers: List = [p.to_target(self.receipt_line_width) for p in printers if p.role == "receipt"]
        self.kitchen_printers: List = [p.to_target(self.receipt_line_width) for p in printers if p.role == "kitchen"]

    def reload(self) -> None:
        """
        Reload settings from the database. Called when settings or printers change.
        """
        self.load_settings()
        self._initialized = True
        logger.info("AppSettings cache reloaded")

    def get_shop_details(self) -> ShopDetails:
        """Shop header/footer information for rendered receipts."""
        return ShopDetails(
            name=self.shop_name,
            address=self.address,
            phone=self.phone,
            vat_number=self.vat_number or None,
            currency_symbol=self.currency_symbol,
            footer_text=self.receipt_footer or None,
            logo_ref=self.logo_path,
            qr_data=self.receipt_qr_url or None,
            currency=self.currency,
        )

    def get_printer_targets(self, role: Optional[str] = None) -> List:
        """Active printer targets, optionally only those with the given role."""
        if role == "receipt":
            return list(self.receipt_printers)
        if role == "kitchen":
            return list(self.kitchen_printers)
        return list(self.receipt_printers) + list(self.kitchen_printers)

    def get_print_targets(self) -> Dict[str, List]:
        """Targets keyed by document kind, as PrintService expects."""
        return {
            "customer": self.get_printer_targets("receipt"),
            "kitchen": self.get_printer_targets("kitchen"),
        }

    def __str__(self) -> str:
        return f"AppSettings(shop='{self.shop_name}', currency={self.currency}, tax_rate={self.tax_rate})"


# Create the singleton instance at module level
app_settings = AppSettings()
