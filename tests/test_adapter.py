"""Tests for the extraction-result adapter and threshold configuration."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from doc_consistency.adapter import (
    ID_NUMBER_KEYS,
    DocumentExtraction,
    ExtractionResult,
    first_present,
    format_document_record,
    format_document_set,
)
from doc_consistency.config import DEFAULT_THRESHOLDS, load_thresholds


# ═══════════════════════════════════════════════════════════════════════
# FIELD MAPPING
# ═══════════════════════════════════════════════════════════════════════


class TestFormatDocumentRecord:
    def test_lifts_known_fields(self):
        record = format_document_record(
            "Aadhaar card",
            ExtractionResult(
                is_valid=True,
                feedback="Looks genuine",
                extracted_data={
                    "name": "Priya Sharma",
                    "dob": "05/01/1990",
                    "gender": "F",
                    "address": "12 MG Road Bengaluru",
                    "aadharNumber": "1234 5678 9012",
                },
            ),
        )
        assert record.document_type == "Aadhaar card"
        assert record.name == "Priya Sharma"
        assert record.date_of_birth == "05/01/1990"
        assert record.gender == "F"
        assert record.address == "12 MG Road Bengaluru"
        assert record.id_number == "1234 5678 9012"
        assert record.is_individually_valid is True
        assert record.validation_feedback == "Looks genuine"

    def test_document_number_takes_precedence(self):
        record = format_document_record(
            "Passport",
            {
                "is_valid": True,
                "feedback": "",
                "extracted_data": {
                    "panNumber": "ABCDE1234F",
                    "aadharNumber": "1234 5678 9012",
                    "documentNumber": "P1234567",
                },
            },
        )
        assert record.id_number == "P1234567"

    def test_national_id_before_tax_id(self):
        record = format_document_record(
            "Aadhaar card",
            {"is_valid": True, "extracted_data": {"panNumber": "ABCDE1234F", "aadharNumber": "9999"}},
        )
        assert record.id_number == "9999"

    def test_empty_candidates_are_skipped(self):
        record = format_document_record(
            "PAN card",
            {"is_valid": True, "extracted_data": {"documentNumber": "", "panNumber": "ABCDE1234F"}},
        )
        assert record.id_number == "ABCDE1234F"

    def test_bank_fields(self):
        record = format_document_record(
            "Bank statement",
            {
                "is_valid": True,
                "extracted_data": {"accountNumber": 1234567890, "issuer": "State Bank of India"},
            },
        )
        assert record.account_number == "1234567890"
        assert record.issuer == "State Bank of India"
        assert record.name is None
        assert record.id_number is None

    def test_extracted_fields_preserved(self):
        data = {"name": "Priya Sharma", "fatherName": "Raj Sharma", "pages": 2}
        record = format_document_record("PAN card", {"is_valid": True, "extracted_data": data})
        assert record.extracted_fields == data

    def test_missing_extracted_data(self):
        record = format_document_record(
            "PAN card", {"is_valid": False, "feedback": "Not a PAN card"}
        )
        assert record.extracted_fields == {}
        assert record.is_individually_valid is False
        assert record.validation_feedback == "Not a PAN card"

    def test_date_of_birth_alias(self):
        record = format_document_record(
            "Passport", {"is_valid": True, "extracted_data": {"dateOfBirth": "1990-01-05"}}
        )
        assert record.date_of_birth == "1990-01-05"

    def test_missing_verdict_is_rejected(self):
        with pytest.raises(ValidationError):
            format_document_record("PAN card", {"extracted_data": {}})

    def test_nested_values_preserved(self):
        data = {
            "name": "Priya Sharma",
            "transactions": [{"amount": 500, "narration": "NEFT"}],
            "bankDetails": {"ifsc": "SBIN0001234", "branch": "Indiranagar"},
        }
        record = format_document_record(
            "Bank statement", {"is_valid": True, "extracted_data": data}
        )
        assert record.name == "Priya Sharma"
        assert record.extracted_fields["transactions"] == [{"amount": 500, "narration": "NEFT"}]
        assert record.extracted_fields["bankDetails"] == {"ifsc": "SBIN0001234", "branch": "Indiranagar"}

    def test_nested_values_are_not_lifted(self):
        record = format_document_record(
            "Passport",
            {
                "is_valid": True,
                "extracted_data": {
                    "documentNumber": {"value": "P1234567"},
                    "aadharNumber": ["1234"],
                    "panNumber": "ABCDE1234F",
                },
            },
        )
        assert record.id_number == "ABCDE1234F"


class TestFirstPresent:
    def test_returns_none_when_absent(self):
        assert first_present({}, ID_NUMBER_KEYS) is None

    def test_order_matters(self):
        assert first_present({"b": "2", "a": "1"}, ("a", "b")) == "1"


class TestFormatDocumentSet:
    def test_preserves_order(self):
        entries = [
            DocumentExtraction(document_type="PAN card", extraction=ExtractionResult(is_valid=True)),
            DocumentExtraction(document_type="Passport", extraction=ExtractionResult(is_valid=False)),
        ]
        records = format_document_set(entries)
        assert [r.document_type for r in records] == ["PAN card", "Passport"]
        assert [r.is_individually_valid for r in records] == [True, False]


# ═══════════════════════════════════════════════════════════════════════
# THRESHOLD CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════


class TestLoadThresholds:
    def test_defaults(self):
        thresholds = load_thresholds({})
        assert thresholds == DEFAULT_THRESHOLDS
        assert thresholds.name_mismatch == pytest.approx(0.8)
        assert thresholds.name_high == pytest.approx(0.5)
        assert thresholds.address_mismatch == pytest.approx(0.7)
        assert thresholds.address_high == pytest.approx(0.4)

    def test_override(self):
        thresholds = load_thresholds({"DOC_CONSISTENCY_NAME_MISMATCH": "0.9"})
        assert thresholds.name_mismatch == pytest.approx(0.9)
        assert thresholds.address_mismatch == pytest.approx(0.7)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DOC_CONSISTENCY_ADDRESS_HIGH", "0.3")
        assert load_thresholds().address_high == pytest.approx(0.3)

    def test_bad_values_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="doc_consistency.config"):
            thresholds = load_thresholds(
                {"DOC_CONSISTENCY_NAME_HIGH": "abc", "DOC_CONSISTENCY_ADDRESS_MISMATCH": "1.5"}
            )
        assert thresholds == DEFAULT_THRESHOLDS
        assert len(caplog.records) == 2
