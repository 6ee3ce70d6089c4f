import uuid

from django.db import migrations, models

import study.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="BankQuestion",
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
                ("text", models.TextField()),
                ("subject", models.CharField(db_index=True, max_length=100)),
                ("marks", models.PositiveSmallIntegerField(default=10)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "ordering": ["subject", "id"],
            },
        ),
        migrations.CreateModel(
            name="VaultDocument",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                (
                    "doc_type",
                    models.CharField(
                        choices=[
                            ("PDF", "PDF"),
                            ("IMAGE", "Image"),
                            ("DOCUMENT", "Document"),
                            ("POLICY", "Policy"),
                            ("EXAM", "Exam"),
                            ("NOTES", "Notes"),
                        ],
                        default="DOCUMENT",
                        max_length=20,
                    ),
                ),
                (
                    "file",
                    models.FileField(
                        blank=True,
                        null=True,
                        upload_to=study.models.vault_document_upload_path,
                    ),
                ),
                ("size_bytes", models.PositiveBigIntegerField(default=0)),
                ("content", models.TextField(blank=True)),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, db_index=True),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="bankquestion",
            constraint=models.UniqueConstraint(
                fields=("subject", "text"), name="uniq_bank_question_per_subject"
            ),
        ),
    ]
