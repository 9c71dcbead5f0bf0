"""
Document Consistency Validator — FastAPI Server
================================================

RESTful API for cross-validating extracted identity/financial documents.

Endpoints:
    POST /validate               Validate a list of document records
    POST /validate/extractions   Map raw extraction results, then validate
    POST /report                 Validate and return the HTML report
    GET  /health                 Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
    http://localhost:8000/redoc            # ReDoc (alternative)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from doc_consistency import __version__
from doc_consistency.adapter import DocumentExtraction, format_document_set
from doc_consistency.config import load_thresholds
from doc_consistency.models import (
    DocumentRecord,
    Inconsistency,
    Severity,
    VerificationResult,
)
from doc_consistency.report import render_verification_report
from doc_consistency.validator import DocumentSetValidator

# ─── Load .env if available ──────────────────────────────────────────
try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass

logger = logging.getLogger(__name__)


# ─── Application Lifespan (pre-warm validator) ──────────────────────

_validator: DocumentSetValidator | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the validator (read threshold overrides) on startup."""
    global _validator  # noqa: PLW0603
    _validator = DocumentSetValidator(thresholds=load_thresholds(), log=logger)
    yield
    _validator = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Document Consistency Validator API",
    description=(
        "Cross-document consistency checks for KYC document sets. "
        "Fuzzy name and address matching, date-of-birth normalization, "
        "severity-ranked findings and a pass/fail verdict."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class ValidateRequest(BaseModel):
    """Request body for /validate and /report."""

    documents: list[DocumentRecord] = Field(
        ...,
        description="Records extracted from each uploaded document.",
        json_schema_extra={
            "example": [
                {
                    "document_type": "PAN card",
                    "name": "Priya Sharma",
                    "date_of_birth": "05/01/1990",
                    "id_number": "ABCDE1234F",
                },
                {
                    "document_type": "Aadhaar card",
                    "name": "PRIYA SHARMA",
                    "date_of_birth": "1990-01-05",
                    "address": "12, MG Road, Bengaluru 560038",
                },
            ]
        },
    )


class ValidateExtractionsRequest(BaseModel):
    """Request body for /validate/extractions."""

    documents: list[DocumentExtraction]


class ValidateResponse(BaseModel):
    """Verification result plus severity counts."""

    is_valid: bool
    summary: str
    high_count: int
    medium_count: int
    low_count: int
    inconsistencies: list[Inconsistency]


class HealthResponse(BaseModel):
    status: str
    version: str
    name_mismatch_threshold: float
    address_mismatch_threshold: float


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_validator() -> DocumentSetValidator:
    if _validator is None:
        raise HTTPException(status_code=503, detail="Validator not initialised")
    return _validator


def _build_response(result: VerificationResult) -> ValidateResponse:
    """Convert the internal VerificationResult to the API response schema."""
    return ValidateResponse(
        is_valid=result.is_valid,
        summary=result.summary,
        high_count=result.count(Severity.HIGH),
        medium_count=result.count(Severity.MEDIUM),
        low_count=result.count(Severity.LOW),
        inconsistencies=result.inconsistencies,
    )


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/validate",
    summary="Cross-validate a set of document records",
    tags=["Validation"],
    responses={503: {"description": "Validator not yet initialised"}},
)
def validate_documents(request: ValidateRequest) -> ValidateResponse:
    """Compare name, date of birth and address across all documents.

    Returns a structured result with:
    - **is_valid**: `false` if any document failed on its own, or any HIGH inconsistency exists
    - **inconsistencies**: detected discrepancies in detection order
    - **summary**: one-sentence verdict
    """
    validator = _get_validator()
    return _build_response(validator.run(request.documents))


@app.post(
    "/validate/extractions",
    summary="Cross-validate raw extraction results",
    tags=["Validation"],
    responses={503: {"description": "Validator not yet initialised"}},
)
def validate_extractions(request: ValidateExtractionsRequest) -> ValidateResponse:
    """Map each extraction result onto a document record, then validate the set."""
    validator = _get_validator()
    documents = format_document_set(request.documents)
    return _build_response(validator.run(documents))


@app.post(
    "/report",
    summary="Cross-validate and render the HTML report",
    tags=["Validation"],
    response_class=HTMLResponse,
    responses={503: {"description": "Validator not yet initialised"}},
)
def validation_report(request: ValidateRequest) -> HTMLResponse:
    """Return the verification report as an HTML fragment for direct display."""
    validator = _get_validator()
    result = validator.run(request.documents)
    return HTMLResponse(render_verification_report(result))


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Validator not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and active thresholds."""
    validator = _get_validator()
    return HealthResponse(
        status="healthy",
        version=__version__,
        name_mismatch_threshold=validator.thresholds.name_mismatch,
        address_mismatch_threshold=validator.thresholds.address_mismatch,
    )
