#!/usr/bin/env python3
"""
Document Consistency Validator — Entry Point
=============================================

Cross-validates a set of extracted identity/financial documents and prints
a colour-coded consistency report.

Usage:
    python main.py                     # Built-in sample set
    python main.py documents.json      # Your own set (see below)
    python main.py documents.json --html > report.html

documents.json holds either a list of records:
    [{"document_type": "PAN card", "name": "...", "date_of_birth": "..."}, ...]
or a list of raw extraction results:
    [{"document_type": "PAN card", "extraction": {"is_valid": true, ...}}, ...]
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from doc_consistency.adapter import DocumentExtraction, format_document_set
from doc_consistency.config import load_thresholds
from doc_consistency.models import DocumentRecord, Severity, VerificationResult
from doc_consistency.report import render_verification_report
from doc_consistency.validator import DocumentSetValidator

# ─── Load .env if available (optional dependency) ────────────────────
try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass


# ─── Sample Document Set — Inconsistent on Purpose ──────────────────

SAMPLE_DOCUMENTS = [
    DocumentRecord(
        document_type="Aadhaar card",
        name="Priya Kumari Sharma",
        date_of_birth="05/01/1990",
        gender="F",
        address="12, MG Road, Indiranagar, Bengaluru 560038",
        id_number="1234 5678 9012",
    ),
    DocumentRecord(
        document_type="PAN card",
        name="PRIYA SHARMA",
        date_of_birth="1990-01-05",
        id_number="ABCDE1234F",
    ),
    DocumentRecord(
        document_type="Bank statement",
        name="Priya Verma",
        address="44 Residency Rd, Shanthala Nagar, Bengaluru 560025",
        account_number="001234567890",
        issuer="State Bank of India",
    ),
]


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72

_SEVERITY_COLORS = {
    Severity.HIGH: _RED,
    Severity.MEDIUM: _YELLOW,
    Severity.LOW: _CYAN,
}


# ─── Loading ────────────────────────────────────────────────────────


def load_documents(path: Path) -> list[DocumentRecord]:
    """Read a document set from JSON, as records or as extraction results."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list) and data and all(isinstance(entry, dict) and "extraction" in entry for entry in data):
        entries = TypeAdapter(list[DocumentExtraction]).validate_python(data)
        return format_document_set(entries)
    return TypeAdapter(list[DocumentRecord]).validate_python(data)


# ─── Pretty Printer ─────────────────────────────────────────────────


def format_console_report(documents: list[DocumentRecord], result: VerificationResult) -> str:
    """Render the verification result with ANSI color codes."""
    lines = [
        "=" * _WIDTH,
        f"{_BOLD}{_CYAN}  DOCUMENT CONSISTENCY REPORT{_RESET}",
        "=" * _WIDTH,
    ]
    for doc in documents:
        mark = f"{_GREEN}ok{_RESET}" if doc.is_individually_valid else f"{_RED}invalid{_RESET}"
        lines.append(f"  {doc.document_type:<24} {_DIM}[{mark}{_DIM}]{_RESET}")
    lines.append("─" * _WIDTH)

    for severity in Severity:
        issues = [i for i in result.inconsistencies if i.severity == severity]
        if not issues:
            continue
        color = _SEVERITY_COLORS[severity]
        lines.append(f"\n  {color}{_BOLD}{severity.value.upper()} ({len(issues)}){_RESET}")
        for issue in issues:
            lines.append(f"    {color}[{issue.field.value}]{_RESET} {issue.description}")
            lines.append(f"      {_DIM}documents: {', '.join(issue.involved_documents)}{_RESET}")

    lines.append("=" * _WIDTH)
    if result.is_valid:
        lines.append(f"  {_GREEN}{_BOLD}VERIFIED{_RESET}  {result.summary}")
    else:
        lines.append(f"  {_RED}{_BOLD}VERIFICATION FAILED{_RESET}  {result.summary}")
    lines.append("=" * _WIDTH)
    return "\n".join(lines)


# ─── Main ────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    """Validate a document set and print the report.

    Returns:
        0 if the set is consistent, 1 if it is not, 2 if the input is malformed.
    """
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    args = sys.argv[1:] if argv is None else argv
    as_html = "--html" in args
    paths = [a for a in args if a != "--html"]

    try:
        documents = load_documents(Path(paths[0])) if paths else SAMPLE_DOCUMENTS
    except ValidationError as e:
        print(
            f"error: {paths[0]} is not a list of documents ({e.error_count()} validation error(s))",
            file=sys.stderr,
        )
        return 2
    validator = DocumentSetValidator(thresholds=load_thresholds())
    result = validator.run(documents)

    if as_html:
        print(render_verification_report(result))
    else:
        print(format_console_report(documents, result))

    return 0 if result.is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
