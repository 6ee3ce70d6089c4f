from django.core.management.base import BaseCommand

from study.models import VaultDocument

# name, doc_type, size_bytes
STARTER_DOCUMENTS = [
    ("Course_Guide_ADS_2024.pdf", VaultDocument.DocType.POLICY, 1258291),
    ("Exam_Maths_II_2023.pdf", VaultDocument.DocType.EXAM, 838861),
    ("DBMS_Unit_1_Notes.pdf", VaultDocument.DocType.NOTES, 2202010),
]


class Command(BaseCommand):
    help = "Add the starter reference documents to the study vault"

    def handle(self, *args, **options):
        created_count = 0

        for name, doc_type, size_bytes in STARTER_DOCUMENTS:
            _, created = VaultDocument.objects.get_or_create(
                name=name,
                defaults={"doc_type": doc_type, "size_bytes": size_bytes},
            )
            if created:
                created_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Done. created={created_count}, existing={len(STARTER_DOCUMENTS) - created_count}"
            )
        )
