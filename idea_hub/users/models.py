from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import CharField
from django.db.models import EmailField
from django.utils.translation import gettext_lazy as _


class User(AbstractUser):
    """
    Default custom user model for idea_hub.

    Accounts start in ``pending`` and must be activated by an Admin before the
    authentication backend lets them in. Roles are carried by auth groups
    (Admin, Manager, Employee, Guest).
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        ACTIVE = "active", _("Active")
        REJECTED = "rejected", _("Rejected")

    # First and last name do not cover name patterns around the globe
    name = CharField(_("Full Name"), blank=True, max_length=255)
    email = EmailField(_("email address"), unique=True)
    first_name = CharField(_("First Name"), max_length=150, blank=True)
    last_name = CharField(_("Last Name"), max_length=150, blank=True)
    department = CharField(_("Department"), max_length=150, blank=True)
    status = CharField(
        _("Account Status"),
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    # Audit timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        full_name = f"{self.first_name} {self.last_name}".strip()
        self.name = full_name or self.name
        super().save(*args, **kwargs)

    @property
    def display_name(self) -> str:
        return self.name or self.username
