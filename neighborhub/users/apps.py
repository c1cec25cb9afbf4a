from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "neighborhub.users"
    verbose_name = _("Users")

    def ready(self):
        import neighborhub.users.signals  # noqa: F401, PLC0415
