from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AuditConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "neighborhub.audit"
    verbose_name = _("Audit trail")

    def ready(self):
        import neighborhub.audit.signals  # noqa: F401, PLC0415
