"""
Field-mapping adapter — lifts upstream extraction results into DocumentRecords.

The extraction step (OCR + LLM, not part of this package) reports a verdict
for the document plus a loose dict of whatever it could read. Different
document types name the same concept differently ("aadharNumber",
"panNumber", ...); this module maps them onto one record shape.

Precedence for the canonical ID number is an ordered list of candidate keys:
the first key with a non-empty value wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel

from .models import DocumentRecord, ExtractedValue

# ─── Key Mapping ─────────────────────────────────────────────────────

# Explicit document number first, then national ID, then tax ID.
ID_NUMBER_KEYS: tuple[str, ...] = ("documentNumber", "aadharNumber", "panNumber")

# Record attribute → upstream keys, in priority order.
FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "date_of_birth": ("dob", "dateOfBirth"),
    "gender": ("gender",),
    "address": ("address",),
    "id_number": ID_NUMBER_KEYS,
    "account_number": ("accountNumber",),
    "issuer": ("issuer",),
}


class ExtractionResult(BaseModel):
    """What the upstream verification step reports for one document."""

    is_valid: bool
    feedback: str = ""
    extracted_data: Optional[dict[str, ExtractedValue]] = None
    is_correct_document_type: Optional[bool] = None


# ─── Public API ──────────────────────────────────────────────────────


def first_present(data: Mapping[str, Any], keys: tuple[str, ...]) -> Optional[str]:
    """Return the first non-empty value among `keys`, as a string."""
    for key in keys:
        value = _safe_str(data.get(key))
        if value is not None:
            return value
    return None


def format_document_record(
    document_type: str,
    extraction: Union[ExtractionResult, Mapping[str, Any]],
) -> DocumentRecord:
    """Build a DocumentRecord from one document's extraction result.

    Args:
        document_type: Label of the uploaded document (e.g. "PAN card").
        extraction: ExtractionResult, or a mapping with the same keys.
    """
    if not isinstance(extraction, ExtractionResult):
        extraction = ExtractionResult.model_validate(extraction)

    extracted = dict(extraction.extracted_data or {})
    lifted = {attr: first_present(extracted, keys) for attr, keys in FIELD_KEYS.items()}

    return DocumentRecord(
        document_type=document_type,
        extracted_fields=extracted,
        is_individually_valid=extraction.is_valid,
        validation_feedback=extraction.feedback,
        **lifted,
    )


class DocumentExtraction(BaseModel):
    """A document label paired with its extraction result."""

    document_type: str
    extraction: ExtractionResult


def format_document_set(entries: list[DocumentExtraction]) -> list[DocumentRecord]:
    """Map a batch of extraction results, preserving order."""
    return [format_document_record(e.document_type, e.extraction) for e in entries]


# ─── Safe Type Converters ────────────────────────────────────────────


def _safe_str(value: object) -> Optional[str]:
    """Convert a scalar to a non-empty string, or None.

    Lists and objects are never lifted onto a record field.
    """
    if value is None or isinstance(value, (list, dict)):
        return None
    text = str(value)
    return text if text else None
