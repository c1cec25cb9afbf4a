from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class MarketplaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "neighborhub.marketplace"
    verbose_name = _("Marketplace")

    def ready(self):
        import neighborhub.marketplace.signals  # noqa: F401, PLC0415
