import csv
import os

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from study.models import BankQuestion


class Command(BaseCommand):
    help = "Import or update question bank rows from questions.csv"

    def add_arguments(self, parser):
        parser.add_argument(
            "--path",
            type=str,
            default=None,
            help="Path to questions.csv (default: BASE_DIR/questions.csv)",
        )

    def handle(self, *args, **options):
        path = options["path"] or os.path.join(settings.BASE_DIR, "questions.csv")

        if not os.path.exists(path):
            raise CommandError(f"File not found: {path}")

        created_count = 0
        updated_count = 0

        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            for line_no, row in enumerate(reader, start=2):
                text = (row.get("text") or "").strip()
                subject = (row.get("subject") or "").strip()
                if not text or not subject:
                    self.stderr.write(
                        self.style.WARNING(f"Skipping line {line_no}: text and subject are required")
                    )
                    continue

                try:
                    marks = int((row.get("marks") or "10").strip())
                except ValueError:
                    raise CommandError(f"Invalid marks on line {line_no}: {row.get('marks')!r}")

                _, created = BankQuestion.objects.update_or_create(
                    subject=subject,
                    text=text,
                    defaults={"marks": marks, "is_active": True},
                )
                if created:
                    created_count += 1
                else:
                    updated_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Done. created={created_count}, updated={updated_count}"
            )
        )
