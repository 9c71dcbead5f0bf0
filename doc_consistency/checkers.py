"""
Field consistency checkers — compare one semantic field across a document set.

Each checker function:
  - Takes the full list of DocumentRecords
  - Keeps only documents that actually carry the field
  - Compares every unordered pair exactly once
  - Returns a list of Inconsistency objects (empty = all clear)

Missing fields are never a mismatch. A bank statement without a date of
birth says nothing about the applicant's date of birth.

Gender is carried on DocumentRecord but deliberately not compared here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from itertools import combinations
from typing import Optional

from .config import DEFAULT_THRESHOLDS, ConsistencyThresholds
from .models import DocumentRecord, Inconsistency, InconsistencyField, Severity
from .similarity import normalize_date, similarity


# ─── Orchestrator ────────────────────────────────────────────────────


def check_all(
    documents: Sequence[DocumentRecord],
    thresholds: ConsistencyThresholds = DEFAULT_THRESHOLDS,
    log: Optional[logging.Logger] = None,
) -> list[Inconsistency]:
    """Run every field checker in order: name, date of birth, address."""
    inconsistencies: list[Inconsistency] = []
    inconsistencies.extend(check_name_consistency(documents, thresholds))
    inconsistencies.extend(check_dob_consistency(documents, log))
    inconsistencies.extend(check_address_consistency(documents, thresholds))
    return inconsistencies


def _pairs_with(
    documents: Sequence[DocumentRecord], attr: str
) -> Iterator[tuple[DocumentRecord, DocumentRecord]]:
    """Yield each unordered pair of documents where `attr` is non-empty.

    Fewer than two such documents yields nothing.
    """
    present = [doc for doc in documents if getattr(doc, attr)]
    return combinations(present, 2)


# ─── Individual Checkers ─────────────────────────────────────────────


def check_name_consistency(
    documents: Sequence[DocumentRecord],
    thresholds: ConsistencyThresholds = DEFAULT_THRESHOLDS,
) -> list[Inconsistency]:
    """Names must be near-identical across documents.

    Containment counts as a match (0.9), so "Priya Sharma" vs
    "Priya Kumari Sharma" passes while "Jane Doe" vs "John Doe" does not.
    """
    inconsistencies: list[Inconsistency] = []

    for doc1, doc2 in _pairs_with(documents, "name"):
        score = similarity(doc1.name, doc2.name)
        if score < thresholds.name_mismatch:
            inconsistencies.append(
                Inconsistency(
                    field=InconsistencyField.NAME,
                    description=(
                        f"Name mismatch between {doc1.document_type} ({doc1.name}) "
                        f"and {doc2.document_type} ({doc2.name})"
                    ),
                    severity=(
                        Severity.HIGH if score < thresholds.name_high else Severity.MEDIUM
                    ),
                    involved_documents=[doc1.document_type, doc2.document_type],
                )
            )

    return inconsistencies


def check_dob_consistency(
    documents: Sequence[DocumentRecord],
    log: Optional[logging.Logger] = None,
) -> list[Inconsistency]:
    """Dates of birth must agree exactly once normalized.

    There is no partial credit for a date: any difference is HIGH.
    """
    inconsistencies: list[Inconsistency] = []

    for doc1, doc2 in _pairs_with(documents, "date_of_birth"):
        assert doc1.date_of_birth is not None and doc2.date_of_birth is not None
        if normalize_date(doc1.date_of_birth, log) != normalize_date(doc2.date_of_birth, log):
            inconsistencies.append(
                Inconsistency(
                    field=InconsistencyField.DATE_OF_BIRTH,
                    description=(
                        f"Date of birth mismatch between {doc1.document_type} "
                        f"({doc1.date_of_birth}) and {doc2.document_type} "
                        f"({doc2.date_of_birth})"
                    ),
                    severity=Severity.HIGH,
                    involved_documents=[doc1.document_type, doc2.document_type],
                )
            )

    return inconsistencies


def check_address_consistency(
    documents: Sequence[DocumentRecord],
    thresholds: ConsistencyThresholds = DEFAULT_THRESHOLDS,
) -> list[Inconsistency]:
    """Addresses must be broadly similar across documents.

    The bar is lower than for names: addresses are long and OCR-noisy.
    Raw values are left out of the description for the same reason.
    """
    inconsistencies: list[Inconsistency] = []

    for doc1, doc2 in _pairs_with(documents, "address"):
        score = similarity(doc1.address, doc2.address)
        if score < thresholds.address_mismatch:
            inconsistencies.append(
                Inconsistency(
                    field=InconsistencyField.ADDRESS,
                    description=(
                        f"Address mismatch between {doc1.document_type} "
                        f"and {doc2.document_type}"
                    ),
                    severity=(
                        Severity.HIGH if score < thresholds.address_high else Severity.MEDIUM
                    ),
                    involved_documents=[doc1.document_type, doc2.document_type],
                )
            )

    return inconsistencies
