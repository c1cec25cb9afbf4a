from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class SafetyConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "neighborhub.safety"
    verbose_name = _("Safety")

    def ready(self):
        import neighborhub.safety.signals  # noqa: F401, PLC0415
