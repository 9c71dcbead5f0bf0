"""
Pydantic models for document sets — strict typing at the boundary.

Every model here is frozen: the validator reads records, it never edits them.
Results are built fresh on every call and handed back to the caller as-is.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, JsonValue, PlainSerializer

# Any JSON value an extraction step may report for an arbitrary key,
# including nested lists and objects (e.g. bank transactions).
ExtractedValue = JsonValue


def _as_dict(value: Mapping[str, Any]) -> dict[str, Any]:
    return dict(value)


# Read-only at the top level. Nested lists and objects are stored as given.
ExtractedFields = Annotated[
    Mapping[str, ExtractedValue],
    AfterValidator(MappingProxyType),
    PlainSerializer(_as_dict),
]


# ─── Severity Levels ────────────────────────────────────────────────


class Severity(str, Enum):
    """Severity of an inconsistency, ordered HIGH > MEDIUM > LOW."""

    HIGH = "high"  # Fails the document set
    MEDIUM = "medium"  # Passes, but a human should look
    LOW = "low"


class InconsistencyField(str, Enum):
    """Which semantic field an inconsistency concerns."""

    NAME = "name"
    DATE_OF_BIRTH = "dateOfBirth"
    ADDRESS = "address"
    GENDER = "gender"  # Reserved: no checker compares gender yet
    OTHER = "other"


# ─── Input Record ───────────────────────────────────────────────────


class DocumentRecord(BaseModel):
    """Data extracted from one uploaded document.

    Optional fields are None when the document type simply does not carry
    them (a bank statement has no date of birth). That is never an error.

    `extracted_fields` is a read-only view; nested lists and objects inside
    it are kept exactly as the extraction step produced them.
    """

    model_config = ConfigDict(frozen=True)

    document_type: str
    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    id_number: Optional[str] = None
    account_number: Optional[str] = None
    issuer: Optional[str] = None
    extracted_fields: ExtractedFields = Field(default_factory=dict, validate_default=True)
    is_individually_valid: bool = True
    validation_feedback: str = ""


# ─── Inconsistency ──────────────────────────────────────────────────


class Inconsistency(BaseModel):
    """One discrepancy between documents (or one failed document)."""

    model_config = ConfigDict(frozen=True)

    field: InconsistencyField
    description: str
    severity: Severity
    involved_documents: tuple[str, ...] = Field(min_length=1)


# ─── Verification Result ────────────────────────────────────────────


class VerificationResult(BaseModel):
    """The final output of a document-set validation."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    inconsistencies: list[Inconsistency] = Field(default_factory=list)
    summary: str

    def count(self, severity: Severity) -> int:
        """Number of inconsistencies with the given severity."""
        return sum(1 for i in self.inconsistencies if i.severity == severity)
