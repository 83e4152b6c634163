from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AuditConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "idea_hub.audit"
    verbose_name = _("Audit")

    def ready(self):
        # login and failed-login receivers
        import idea_hub.audit.signals  # noqa: F401, PLC0415
