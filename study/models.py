from django.db import models
import uuid
import os


def vault_document_upload_path(instance, filename: str) -> str:
    """
    Vault upload path: vault/<uuid hex>.<ext>, keeping the original name on the row.
    """
    _, ext = os.path.splitext(filename)
    ext = ext.lstrip(".") or "bin"
    return f"vault/{uuid.uuid4().hex}.{ext}"


class VaultDocument(models.Model):
    """
    Reference document in the student's study vault.

    Document names feed the vault context of answer grading and unlock
    question bank subjects.
    """

    class DocType(models.TextChoices):
        PDF = "PDF", "PDF"
        IMAGE = "IMAGE", "Image"
        DOCUMENT = "DOCUMENT", "Document"
        POLICY = "POLICY", "Policy"
        EXAM = "EXAM", "Exam"
        NOTES = "NOTES", "Notes"

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    name = models.CharField(max_length=255)
    doc_type = models.CharField(
        max_length=20,
        choices=DocType.choices,
        default=DocType.DOCUMENT,
    )
    file = models.FileField(upload_to=vault_document_upload_path, null=True, blank=True)
    size_bytes = models.PositiveBigIntegerField(default=0)
    content = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - admin display
        return self.name


class BankQuestion(models.Model):
    """Curated high-probability exam question."""

    text = models.TextField()
    subject = models.CharField(max_length=100, db_index=True)
    marks = models.PositiveSmallIntegerField(default=10)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["subject", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["subject", "text"],
                name="uniq_bank_question_per_subject",
            )
        ]

    def __str__(self) -> str:  # pragma: no cover - admin display
        return f"[{self.subject}] {self.text[:50]}"
