from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.db.models.signals import post_save
from django.dispatch import receiver

from idea_hub.users.roles import ROLE_EMPLOYEE


@receiver(post_save, sender=get_user_model())
def grant_employee_role(sender, instance, created, raw=False, **kwargs):
    """New accounts start as Employees; admins promote them on approval."""
    if not created or raw:
        return
    group, _ = Group.objects.get_or_create(name=ROLE_EMPLOYEE)
    instance.groups.add(group)
