from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class IdeasConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "idea_hub.ideas"
    verbose_name = _("Ideas")

    def ready(self):
        import idea_hub.ideas.signals  # noqa: F401, PLC0415
