"""
Signal handlers for the shop_settings app.
Keeps the app_settings cache in step with the database.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver
import logging

from .models import Printer, ShopSettings

logger = logging.getLogger(__name__)


@receiver(post_save, sender=ShopSettings)
def reload_app_settings(sender, instance, **kwargs):
    # Import here to avoid circular imports and ensure the singleton is loaded
    from .config import app_settings

    app_settings.reload()
    logger.info(f"Configuration cache updated: {app_settings}")


@receiver([post_save, post_delete], sender=Printer)
def reload_printer_config(sender, instance, **kwargs):
    """Printers are read on every print job, so refresh the targets immediately."""
    from .config import app_settings

    action = "deleted" if kwargs.get("signal") == post_delete else "updated"
    logger.info(f"Printer '{instance.name}' {action}, reloading printer configuration")
    app_settings.reload()
