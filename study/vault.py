"""
Study vault helpers: vault context for grading, subjects for the question bank.
"""

import re
from typing import Iterable, List

from .models import VaultDocument

# (pattern on the upper-cased document name, question bank subject)
SUBJECT_PATTERNS = [
    (re.compile(r"ADS|ALGO|DATA STRUCTURE", re.IGNORECASE), "ADS"),
    (re.compile(r"MATH|CALCULUS|MATHEMATICS", re.IGNORECASE), "Maths II"),
    (re.compile(r"DBMS|DATABASE", re.IGNORECASE), "DBMS"),
    (re.compile(r"NETWORK", re.IGNORECASE), "Computer Networks"),
    (re.compile(r"OS|OPERATING", re.IGNORECASE), "Operating Systems"),
    (re.compile(r"SE|SOFTWARE", re.IGNORECASE), "Software Engineering"),
]


def build_vault_context(documents: Iterable[VaultDocument]) -> str:
    """Document names joined with ", ", newest first as the queryset orders them."""
    return ", ".join(doc.name for doc in documents if doc.name)


def detect_subjects(documents: Iterable[VaultDocument]) -> List[str]:
    """
    Subjects unlocked by the vault, in first-seen order.
    """
    subjects: List[str] = []
    for doc in documents:
        name = (doc.name or "").upper()
        for pattern, subject in SUBJECT_PATTERNS:
            if pattern.search(name) and subject not in subjects:
                subjects.append(subject)
    return subjects


def guess_doc_type(content_type: str) -> str:
    content_type = (content_type or "").lower()
    if "pdf" in content_type:
        return VaultDocument.DocType.PDF
    if "image" in content_type:
        return VaultDocument.DocType.IMAGE
    return VaultDocument.DocType.DOCUMENT
