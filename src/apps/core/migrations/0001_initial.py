"""Initial migration for core app - ContactSubmission model."""

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ContactSubmission",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=100)),
                ("email", models.EmailField(max_length=254)),
                ("company", models.CharField(blank=True, default="", max_length=100)),
                (
                    "service",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("E-Commerce Development", "E-Commerce Development"),
                            ("Mobile App Development", "Mobile App Development"),
                            ("Business Websites", "Business Websites"),
                            ("Digital Marketing", "Digital Marketing"),
                            ("ERP Solutions", "ERP Solutions"),
                            ("Project Management Software", "Project Management Software"),
                            ("Email Marketing", "Email Marketing"),
                            ("Salesforce Integration", "Salesforce Integration"),
                            ("Other", "Other"),
                        ],
                        default="",
                        max_length=100,
                    ),
                ),
                ("message", models.TextField()),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("user_agent", models.CharField(blank=True, default="", max_length=512)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                "verbose_name": "contact submission",
                "verbose_name_plural": "contact submissions",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
