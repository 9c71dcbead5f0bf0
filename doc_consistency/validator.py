"""
Document-set validation — orchestrates pre-check, field checkers and verdict.

Flow:
  ┌──────────────┐
  │ DocumentSet  │
  └──────┬───────┘
         │
  ┌──────▼───────┐
  │  Pre-check   │   ← Any individually invalid document? Stop here.
  └──────┬───────┘
         │
  ┌──────▼───────┐
  │   Checkers   │   ← Name → Date of birth → Address
  └──────┬───────┘
         │
  ┌──────▼───────┐
  │   Verdict    │   ← Valid iff no HIGH inconsistency
  └──────┬───────┘
         │
  ┌──────▼───────┐
  │   Summary    │   ← One sentence from the severity counts
  └──────────────┘

Design principles:
  - Fail fast: cross-document checks never run on a set that contains a
    document which already failed its own verification.
  - Inputs are never mutated; every call builds a fresh result.
  - Diagnostics go to an injected logger, not to the console.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from .checkers import check_all
from .config import DEFAULT_THRESHOLDS, ConsistencyThresholds
from .models import (
    DocumentRecord,
    Inconsistency,
    InconsistencyField,
    Severity,
    VerificationResult,
)

logger = logging.getLogger(__name__)

SUMMARY_ALL_CONSISTENT = "All documents are consistent and valid. Verification successful."


class DocumentSetValidator:
    """Validates a set of documents against each other.

    Usage:
        validator = DocumentSetValidator()
        result = validator.run(documents)
        if not result.is_valid:
            for issue in result.inconsistencies:
                print(issue.description)
    """

    def __init__(
        self,
        thresholds: Optional[ConsistencyThresholds] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.thresholds = thresholds or DEFAULT_THRESHOLDS
        self.logger = log or logger

    def run(self, documents: Sequence[DocumentRecord]) -> VerificationResult:
        """Cross-validate a document set.

        Args:
            documents: Records extracted from each uploaded document.

        Returns:
            VerificationResult with inconsistencies in detection order.
        """
        self.logger.debug(
            "Cross-validating %d document(s): %s",
            len(documents),
            [doc.document_type for doc in documents],
        )

        # ── Step 1: Individual validity pre-check ───────────────────
        invalid = [doc for doc in documents if not doc.is_individually_valid]
        if invalid:
            self.logger.info(
                "%d document(s) failed individual verification, skipping cross-checks",
                len(invalid),
            )
            return VerificationResult(
                is_valid=False,
                inconsistencies=[self._invalid_document_issue(doc) for doc in invalid],
                summary=f"{len(invalid)} document(s) failed individual verification.",
            )

        # ── Step 2: Cross-document field checks ─────────────────────
        inconsistencies = check_all(documents, self.thresholds, self.logger)

        # ── Step 3: Verdict + summary ───────────────────────────────
        high = sum(1 for i in inconsistencies if i.severity == Severity.HIGH)
        result = VerificationResult(
            is_valid=high == 0,
            inconsistencies=inconsistencies,
            summary=build_summary(inconsistencies),
        )
        self.logger.info(
            "Document set %s with %d inconsistency(ies)",
            "passed" if result.is_valid else "failed",
            len(inconsistencies),
        )
        return result

    @staticmethod
    def _invalid_document_issue(doc: DocumentRecord) -> Inconsistency:
        return Inconsistency(
            field=InconsistencyField.OTHER,
            description=f"Invalid {doc.document_type}: {doc.validation_feedback}",
            severity=Severity.HIGH,
            involved_documents=[doc.document_type],
        )


def build_summary(inconsistencies: Sequence[Inconsistency]) -> str:
    """Pick the one-line summary for a list of cross-document inconsistencies.

    LOW issues are not counted in the pass branch; only MEDIUM ones are.
    """
    if not inconsistencies:
        return SUMMARY_ALL_CONSISTENT

    high = sum(1 for i in inconsistencies if i.severity == Severity.HIGH)
    if high > 0:
        return f"Verification failed due to {high} critical inconsistency(ies)."

    medium = sum(1 for i in inconsistencies if i.severity == Severity.MEDIUM)
    return f"Verification passed with {medium} minor inconsistency(ies) that should be reviewed."


def validate_document_set(
    documents: Sequence[DocumentRecord],
    log: Optional[logging.Logger] = None,
) -> VerificationResult:
    """Validate a document set with default thresholds."""
    return DocumentSetValidator(log=log).run(documents)
