import uuid

from django.db import models
from django.utils.text import slugify


def _template_id(name: str) -> str:
    base = slugify(name)[:40] or "template"
    return f"{base}-{uuid.uuid4().hex[:6]}"


class FormTemplate(models.Model):
    """Dynamic idea form plus the rubric ideas built from it are graded on.

    ``fields`` holds the form builder schema (``[{id, label, type, required,
    options?, placeholder?}]``) and ``rating_config`` the weighted rating
    dimensions (``[{id, name, description, weight}]``).
    """

    id = models.CharField(primary_key=True, max_length=64, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    fields = models.JSONField(default=list, blank=True)
    rating_config = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"FormTemplate({self.id}:{self.name})"

    def save(self, *args, **kwargs):
        if not self.id:
            self.id = _template_id(self.name)
        super().save(*args, **kwargs)
