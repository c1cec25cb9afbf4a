from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class NeighborhoodsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "neighborhub.neighborhoods"
    verbose_name = _("Neighborhoods")
