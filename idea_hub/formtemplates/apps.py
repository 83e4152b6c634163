from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class FormTemplatesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "idea_hub.formtemplates"
    label = "formtemplates"
    verbose_name = _("Form Templates")
