"""Template store: listing with first-use seeding."""

from __future__ import annotations

import copy
import logging

from django.db import transaction

from idea_hub.formtemplates.defaults import DEFAULT_TEMPLATE
from idea_hub.formtemplates.models import FormTemplate

logger = logging.getLogger(__name__)


@transaction.atomic
def ensure_default_template() -> FormTemplate:
    doc = copy.deepcopy(DEFAULT_TEMPLATE)
    template, created = FormTemplate.objects.get_or_create(
        id=doc.pop("id"), defaults=doc
    )
    if created:
        logger.info("Seeded default form template %s", template.id)
    return template


def list_templates() -> list[FormTemplate]:
    """All templates, seeding the default one when the store is empty."""
    if not FormTemplate.objects.exists():
        ensure_default_template()
    return list(FormTemplate.objects.all())
