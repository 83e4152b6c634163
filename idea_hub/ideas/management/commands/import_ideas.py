from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.core.management.base import CommandError
from django.core.management.base import CommandParser
from django.db import transaction
from django.utils.dateparse import parse_datetime

from idea_hub.formtemplates.models import FormTemplate
from idea_hub.formtemplates.services import list_templates
from idea_hub.ideas import ledger
from idea_hub.ideas.models import Idea
from idea_hub.ideas.normalization import normalize_payload
from idea_hub.org.services import UnknownDepartmentError
from idea_hub.org.services import canonical_department

LIST_FIELDS = ("comments", "collaborators")


class Command(BaseCommand):
    help = "Import a JSON list of idea documents, normalizing legacy fields"

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("path", help="JSON file holding a list of ideas")
        parser.add_argument(
            "--author",
            dest="author",
            help="Username used when a document names no known author",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Validate and report without writing anything",
        )

    def handle(self, *args, **options) -> None:
        self._templates = list_templates()
        docs = self._load(options["path"])
        fallback = self._fallback_author(options.get("author"))

        imported = 0
        with transaction.atomic():
            for index, doc in enumerate(docs):
                if not isinstance(doc, dict) or not doc.get("title"):
                    self.stderr.write(
                        self.style.WARNING(f"Skipping entry {index}: no title")
                    )
                    continue
                data = normalize_payload(doc)
                if data.get("status") not in Idea.Status.values:
                    self.stderr.write(
                        self.style.WARNING(
                            f"Skipping '{doc['title']}': "
                            f"unknown status {data.get('status')!r}"
                        )
                    )
                    continue
                self._create(data, fallback)
                imported += 1
            if options["dry_run"]:
                transaction.set_rollback(True)

        verb = "Validated" if options["dry_run"] else "Imported"
        self.stdout.write(self.style.SUCCESS(f"{verb} {imported} idea(s)"))

    def _load(self, path: str) -> list[Any]:
        try:
            docs = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            msg = f"Cannot read {path}: {exc}"
            raise CommandError(msg) from exc
        if isinstance(docs, dict):
            docs = docs.get("ideas", [])
        if not isinstance(docs, list):
            msg = "Expected a JSON list of ideas"
            raise CommandError(msg)
        return docs

    def _fallback_author(self, username: str | None):
        if not username:
            return None
        user = get_user_model().objects.filter(username=username).first()
        if user is None:
            msg = f"Unknown user: {username}"
            raise CommandError(msg)
        return user

    def _author_for(self, data: dict[str, Any], fallback):
        users = get_user_model().objects
        email = data.get("authorEmail") or data.get("author_email")
        if email:
            user = users.filter(email__iexact=email).first()
            if user is not None:
                return user
        username = data.get("author")
        if isinstance(username, str) and username:
            user = users.filter(username=username).first()
            if user is not None:
                return user
        return fallback

    def _department_for(self, data: dict[str, Any], author) -> str:
        fallback = getattr(author, "department", "") or ""
        try:
            return canonical_department(data.get("department")) or fallback
        except UnknownDepartmentError as exc:
            self.stderr.write(
                self.style.WARNING(f"'{data['title']}': {exc}, using {fallback!r}")
            )
            return fallback

    def _create(self, data: dict[str, Any], fallback) -> Idea:
        author = self._author_for(data, fallback)
        template = None
        if data.get("template"):
            template = FormTemplate.objects.filter(pk=str(data["template"])).first()

        idea = Idea(
            author=author,
            author_name=data.get("author_name")
            or (author.display_name if author else ""),
            department=self._department_for(data, author),
            title=data["title"],
            description=data.get("description") or "",
            category=data.get("category") or "",
            cover_image=data.get("cover_image") or "",
            tags=data.get("tags") or [],
            status=data["status"],
            template=template,
            template_name=data.get("template_name")
            or (template.name if template else ""),
            dynamic_data=data.get("dynamic_data") or {},
        )
        for name in LIST_FIELDS:
            value = data.get(name)
            setattr(idea, name, value if isinstance(value, list) else [])
        # stored grades are recomputed; one entry per manager survives
        idea.ratings = []
        ledger.restore(idea, data.get("ratings"), self._templates)
        idea.save()

        created_at = data.get("createdAt") or data.get("created_at")
        if isinstance(created_at, str) and parse_datetime(created_at):
            Idea.objects.filter(pk=idea.pk).update(
                created_at=parse_datetime(created_at)
            )
        return idea
