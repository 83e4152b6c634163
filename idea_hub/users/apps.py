from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class UsersConfig(AppConfig):
    name = "idea_hub.users"
    verbose_name = _("Users")

    def ready(self):
        # role group assignment for new accounts
        import idea_hub.users.signals  # noqa: F401, PLC0415
