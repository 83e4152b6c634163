import copy

from django.db import migrations

from idea_hub.formtemplates.defaults import DEFAULT_TEMPLATE


def seed_default_template(apps, schema_editor):
    FormTemplate = apps.get_model("formtemplates", "FormTemplate")
    doc = copy.deepcopy(DEFAULT_TEMPLATE)
    FormTemplate.objects.get_or_create(id=doc.pop("id"), defaults=doc)


def remove_default_template(apps, schema_editor):
    FormTemplate = apps.get_model("formtemplates", "FormTemplate")
    FormTemplate.objects.filter(id=DEFAULT_TEMPLATE["id"]).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("formtemplates", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_default_template, remove_default_template),
    ]
