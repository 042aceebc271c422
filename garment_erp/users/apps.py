from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "garment_erp.users"
    verbose_name = _("Users")

    def ready(self):
        import garment_erp.users.signals  # noqa: F401
