"""Seed the age-group and organization-type reference tables."""

from django.db import migrations

AGE_GROUPS = [
    ("6-9", "Ages 6-9"),
    ("9-13", "Ages 9-13"),
    ("13-16", "Ages 13-16"),
    ("16+", "Ages 16+"),
]

ORGANIZATION_TYPES = [
    ("government", "Government"),
    ("nonprofit", "Nonprofit"),
    ("school", "School"),
    ("library", "Library"),
    ("corporate_sponsor", "Corporate Sponsor"),
    ("faith_community", "Faith Community"),
    ("other", "Other"),
]


def seed_lookups(apps, schema_editor):
    AgeGroup = apps.get_model("inquiries", "AgeGroup")  # noqa: N806
    OrganizationType = apps.get_model("inquiries", "OrganizationType")  # noqa: N806

    for index, (code, label) in enumerate(AGE_GROUPS, start=1):
        AgeGroup.objects.update_or_create(code=code, defaults={"label": label, "sort_order": index * 10})
    for index, (code, label) in enumerate(ORGANIZATION_TYPES, start=1):
        OrganizationType.objects.update_or_create(code=code, defaults={"label": label, "sort_order": index * 10})


def unseed_lookups(apps, schema_editor):
    apps.get_model("inquiries", "AgeGroup").objects.filter(code__in=[c for c, _ in AGE_GROUPS]).delete()
    apps.get_model("inquiries", "OrganizationType").objects.filter(
        code__in=[c for c, _ in ORGANIZATION_TYPES]
    ).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("inquiries", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_lookups, unseed_lookups),
    ]
