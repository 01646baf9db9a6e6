from django.apps import AppConfig


class ShopSettingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "shop_settings"
    verbose_name = "Shop Settings"

    def ready(self):
        """
        Import signals when the app is ready to ensure they are registered.
        """
        import shop_settings.signals  # noqa: F401
