import secrets
import string
import uuid

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

PUBLIC_ID_ALPHABET = string.ascii_uppercase + string.digits
PUBLIC_ID_LENGTH = 6


def generate_public_id() -> str:
    return "".join(secrets.choice(PUBLIC_ID_ALPHABET) for _ in range(PUBLIC_ID_LENGTH))


class Idea(models.Model):
    """A proposal and its whole review lifecycle.

    Ratings, comments and collaborators live on the record as ordered JSON
    lists; they are only ever changed through ``idea_hub.ideas.services``.
    """

    class Status(models.TextChoices):
        DRAFT = "Draft", _("Draft")
        SUBMITTED = "Submitted", _("Submitted")
        NEEDS_REVISION = "NeedsRevision", _("Needs Revision")
        APPROVED = "Approved", _("Approved")
        REJECTED = "Rejected", _("Rejected")
        PUBLISHED = "Published", _("Published")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    public_id = models.CharField(
        max_length=PUBLIC_ID_LENGTH, unique=True, editable=False
    )

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="ideas",
    )
    author_name = models.CharField(max_length=255, blank=True)
    department = models.CharField(max_length=150, blank=True)

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=150, blank=True)
    cover_image = models.URLField(max_length=500, blank=True)
    tags = models.JSONField(default=list, blank=True)

    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True
    )

    template = models.ForeignKey(
        "formtemplates.FormTemplate",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="ideas",
    )
    template_name = models.CharField(max_length=255, blank=True)
    dynamic_data = models.JSONField(default=dict, blank=True)

    # A contribution link only; deleting the parent keeps its children
    parent_idea = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="contributions",
    )

    ratings = models.JSONField(default=list, blank=True)
    comments = models.JSONField(default=list, blank=True)
    collaborators = models.JSONField(default=list, blank=True)

    duplicate_flag = models.JSONField(null=True, blank=True)
    ai_summary = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "category"], name="idea_status_category_idx")
        ]

    def __str__(self):
        return f"{self.public_id or self.pk}: {self.title}"

    def save(self, *args, **kwargs):
        if not self.public_id:
            self.public_id = self._unique_public_id()
        super().save(*args, **kwargs)

    @classmethod
    def _unique_public_id(cls) -> str:
        while True:
            candidate = generate_public_id()
            if not cls.objects.filter(public_id=candidate).exists():
                return candidate
