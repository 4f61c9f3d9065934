"""Initial migration for inquiries app - inquiries, detail rows and lookups."""

import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AgeGroup",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=16, unique=True, verbose_name="code")),
                ("label", models.CharField(max_length=100, verbose_name="label")),
                ("active", models.BooleanField(default=True, verbose_name="active")),
                ("sort_order", models.PositiveIntegerField(default=0, verbose_name="sort order")),
            ],
            options={
                "verbose_name": "age group",
                "verbose_name_plural": "age groups",
                "db_table": "age_groups",
                "ordering": ["sort_order", "code"],
            },
        ),
        migrations.CreateModel(
            name="OrganizationType",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=32, unique=True, verbose_name="code")),
                ("label", models.CharField(max_length=100, verbose_name="label")),
                ("active", models.BooleanField(default=True, verbose_name="active")),
                ("sort_order", models.PositiveIntegerField(default=0, verbose_name="sort order")),
            ],
            options={
                "verbose_name": "organization type",
                "verbose_name_plural": "organization types",
                "db_table": "organization_types",
                "ordering": ["sort_order", "code"],
            },
        ),
        migrations.CreateModel(
            name="Inquiry",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "kind",
                    models.CharField(
                        choices=[("parent", "Parent"), ("partner", "Partner")],
                        editable=False,
                        max_length=16,
                        verbose_name="kind",
                    ),
                ),
                ("first_name", models.CharField(max_length=100, verbose_name="first name")),
                ("last_name", models.CharField(max_length=100, verbose_name="last name")),
                ("full_name", models.CharField(max_length=201, verbose_name="full name")),
                ("email", models.EmailField(max_length=320, verbose_name="email")),
                ("phone", models.CharField(blank=True, default="", max_length=50, verbose_name="phone")),
                ("message", models.TextField(blank=True, default="", verbose_name="message")),
                ("newsletter_opt_in", models.BooleanField(default=False, verbose_name="newsletter opt-in")),
                ("consent", models.BooleanField(default=False, verbose_name="consent")),
                ("consent_at", models.DateTimeField(blank=True, null=True, verbose_name="consent given at")),
                ("source", models.CharField(max_length=120, verbose_name="source")),
                ("page_path", models.CharField(blank=True, default="", max_length=512, verbose_name="page path")),
                (
                    "status",
                    models.CharField(
                        choices=[("new", "New"), ("read", "Read"), ("archived", "Archived")],
                        default="new",
                        max_length=16,
                        verbose_name="status",
                    ),
                ),
                ("spam_flag", models.BooleanField(default=False, verbose_name="spam")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated")),
            ],
            options={
                "verbose_name": "inquiry",
                "verbose_name_plural": "inquiries",
                "db_table": "inquiries",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["created_at"], name="inquiries_created_idx"),
                    models.Index(fields=["status"], name="inquiries_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="NewsletterSubscription",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("email", models.EmailField(max_length=320, unique=True, verbose_name="email")),
                ("first_name", models.CharField(blank=True, default="", max_length=100, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, default="", max_length=100, verbose_name="last name")),
                ("status", models.CharField(default="subscribed", max_length=32, verbose_name="status")),
                ("double_opt_in", models.BooleanField(default=False, verbose_name="double opt-in")),
                ("source", models.CharField(blank=True, default="", max_length=120, verbose_name="source")),
                ("subscribed_at", models.DateTimeField(verbose_name="subscribed")),
                ("updated_at", models.DateTimeField(verbose_name="updated")),
            ],
            options={
                "verbose_name": "newsletter subscription",
                "verbose_name_plural": "newsletter subscriptions",
                "db_table": "newsletter_subscriptions",
                "ordering": ["-subscribed_at"],
            },
        ),
        migrations.CreateModel(
            name="InquiryParent",
            fields=[
                (
                    "inquiry",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        primary_key=True,
                        related_name="parent_detail",
                        serialize=False,
                        to="inquiries.inquiry",
                    ),
                ),
                ("number_of_kids", models.PositiveSmallIntegerField(default=1, verbose_name="number of kids")),
                (
                    "primary_age_group",
                    models.ForeignKey(
                        help_text="Lowest sort-order age group among those selected.",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="inquiries.agegroup",
                    ),
                ),
            ],
            options={
                "verbose_name": "parent detail",
                "verbose_name_plural": "parent details",
                "db_table": "inquiry_parent",
            },
        ),
        migrations.CreateModel(
            name="InquiryPartner",
            fields=[
                (
                    "inquiry",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        primary_key=True,
                        related_name="partner_detail",
                        serialize=False,
                        to="inquiries.inquiry",
                    ),
                ),
                (
                    "org_type_other",
                    models.CharField(
                        blank=True,
                        help_text="Only stored when the organization type is 'other'.",
                        max_length=200,
                        null=True,
                        verbose_name="other organization type",
                    ),
                ),
                ("org_name", models.CharField(max_length=200, verbose_name="organization name")),
                (
                    "org_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="inquiries.organizationtype",
                    ),
                ),
            ],
            options={
                "verbose_name": "partner detail",
                "verbose_name_plural": "partner details",
                "db_table": "inquiry_partner",
            },
        ),
        migrations.CreateModel(
            name="InquiryAgeGroup",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "age_group",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="inquiries.agegroup",
                    ),
                ),
                (
                    "inquiry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="age_group_links",
                        to="inquiries.inquiry",
                    ),
                ),
            ],
            options={
                "verbose_name": "inquiry age group",
                "verbose_name_plural": "inquiry age groups",
                "db_table": "inquiry_age_groups",
                "constraints": [
                    models.UniqueConstraint(fields=("inquiry", "age_group"), name="inquiry_age_group_unique"),
                ],
            },
        ),
    ]
