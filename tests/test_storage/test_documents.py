"""Tests for autosave/export documents, import reconciliation and InputStore."""

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from nettoit.config import STORAGE_KEY
from nettoit.exceptions import DocumentImportError
from nettoit.models.enums import FederalState, HealthType, TaxClass
from nettoit.models.inputs import EstimateInput
from nettoit.storage.documents import (
    DEFAULT_INPUT,
    autosave_document,
    dumps_document,
    export_document,
    export_filename,
    load_document_file,
    parse_document,
    reconcile_input,
)

FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def sample_input() -> EstimateInput:
    return EstimateInput(
        gross_monthly=Decimal("4250.5"),
        tax_class=TaxClass.III,
        church_tax=True,
        child_allowance=Decimal("1.5"),
        state=FederalState.NW,
        health_type=HealthType.PRIVATE,
        pkv_premium_monthly=Decimal("420"),
    )


class TestDocumentShape:
    def test_export_meta(self, sample_input):
        doc = export_document(sample_input, now=FIXED_NOW)
        assert doc["meta"] == {
            "app": "nettoit",
            "version": "v1",
            "exportedAt": "2026-01-02T03:04:05.000Z",
        }

    def test_autosave_meta(self, sample_input):
        doc = autosave_document(sample_input, now=FIXED_NOW)
        assert doc["meta"]["savedAt"] == "2026-01-02T03:04:05.000Z"
        assert "exportedAt" not in doc["meta"]

    def test_numbers_written_as_json_numbers(self, sample_input):
        payload = json.loads(dumps_document(export_document(sample_input, now=FIXED_NOW)))
        assert payload["data"]["grossMonthly"] == 4250.5
        assert payload["data"]["pkvPremiumMonthly"] == 420
        assert payload["data"]["taxClass"] == "III"
        assert payload["data"]["healthType"] == "private"
        assert payload["data"]["churchTax"] is True

    def test_export_then_import_restores_input(self, sample_input):
        text = dumps_document(export_document(sample_input))
        assert parse_document(text) == sample_input

    def test_export_filename(self):
        assert export_filename(date(2026, 3, 1)) == "toolstack-nettoit-v1-2026-03-01.json"


class TestParseDocument:
    @pytest.mark.parametrize("text", ["not json", "{", "[1, 2]", '"text"', "42", "null"])
    def test_invalid_documents(self, text):
        with pytest.raises(DocumentImportError, match="invalid JSON"):
            parse_document(text, source="backup.json")

    def test_non_object_data_field(self):
        with pytest.raises(DocumentImportError):
            parse_document('{"meta": {}, "data": [1, 2, 3]}')

    @pytest.mark.parametrize(
        "text",
        [
            '{"meta": {}, "data": []}',
            '{"data": ""}',
            '{"data": 0}',
            '{"data": null}',
            '{"data": false}',
        ],
    )
    def test_empty_data_field_rejected(self, text):
        with pytest.raises(DocumentImportError, match="invalid JSON"):
            parse_document(text)

    def test_empty_data_object_gives_defaults(self):
        assert parse_document('{"meta": {}, "data": {}}') == DEFAULT_INPUT

    def test_bare_record(self):
        data = parse_document('{"grossMonthly": 4200, "state": "HH"}')
        assert data.gross_monthly == Decimal("4200")
        assert data.state == FederalState.HH

    def test_empty_object_gives_defaults(self):
        assert parse_document("{}") == DEFAULT_INPUT

    def test_bytes_accepted(self):
        data = parse_document(b'{"data": {"grossMonthly": 5000}}')
        assert data.gross_monthly == Decimal("5000")


class TestReconcileInput:
    def test_missing_fields_keep_defaults(self):
        data = reconcile_input({"taxClass": "V"})
        assert data.tax_class == TaxClass.V
        assert data.gross_monthly == Decimal("3700")
        assert data.state == FederalState.BY

    def test_invalid_fields_keep_defaults(self):
        data = reconcile_input(
            {
                "grossMonthly": "abc",
                "taxClass": "IX",
                "churchTax": "maybe",
                "state": "ZZ",
                "healthType": "both",
            }
        )
        assert data == DEFAULT_INPUT

    def test_string_values_coerced(self):
        data = reconcile_input(
            {
                "grossMonthly": "5100,25",
                "taxClass": "ii",
                "churchTax": "yes",
                "childAllowance": "0.5",
                "healthType": "PRIVATE",
            }
        )
        assert data.gross_monthly == Decimal("5100.25")
        assert data.tax_class == TaxClass.II
        assert data.church_tax is True
        assert data.child_allowance == Decimal("0.5")
        assert data.health_type == HealthType.PRIVATE

    @pytest.mark.parametrize("raw", ["ja", "JA", "on", "1"])
    def test_truthy_strings(self, raw):
        assert reconcile_input({"churchTax": raw}).church_tax is True

    @pytest.mark.parametrize("raw", ["nein", "off", "0", ""])
    def test_falsy_strings_override_saved_value(self, raw):
        saved = DEFAULT_INPUT.model_copy(update={"church_tax": True})
        assert reconcile_input({"churchTax": raw}, defaults=saved).church_tax is False

    def test_out_of_range_clamped(self):
        data = reconcile_input({"grossMonthly": 5000000, "childAllowance": 99})
        assert data.gross_monthly == Decimal("1000000")
        assert data.child_allowance == Decimal("10")

    def test_null_values_keep_defaults(self):
        data = reconcile_input({"grossMonthly": None, "churchTax": None})
        assert data == DEFAULT_INPUT

    def test_snake_case_keys(self):
        data = reconcile_input({"gross_monthly": 2800, "pkv_premium_monthly": 310})
        assert data.gross_monthly == Decimal("2800")
        assert data.pkv_premium_monthly == Decimal("310")

    def test_unknown_fields_dropped_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="nettoit.storage.documents"):
            data = reconcile_input({"grossMonthly": 3900, "salaryBonus": 1, "age": 40})
        assert data.gross_monthly == Decimal("3900")
        assert "age, salaryBonus" in caplog.text


class TestLoadDocumentFile:
    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentImportError, match="cannot read file"):
            load_document_file(tmp_path / "missing.json")

    def test_reads_file(self, tmp_path, sample_input):
        path = tmp_path / "backup.json"
        path.write_text(dumps_document(export_document(sample_input)), encoding="utf-8")
        assert load_document_file(path) == sample_input


class TestInputStore:
    def test_load_empty_gives_defaults(self, store):
        assert store.load() == DEFAULT_INPUT
        assert store.load().gross_monthly == Decimal("3700")

    def test_save_then_load(self, store, memory_storage, sample_input):
        store.save(sample_input, now=FIXED_NOW)
        assert STORAGE_KEY in memory_storage
        stored = json.loads(memory_storage.get(STORAGE_KEY))
        assert stored["meta"]["savedAt"] == "2026-01-02T03:04:05.000Z"
        assert store.load() == sample_input

    def test_last_write_wins(self, store):
        store.save(EstimateInput(gross_monthly=Decimal("1000")))
        store.save(EstimateInput(gross_monthly=Decimal("2000")))
        assert store.load().gross_monthly == Decimal("2000")

    def test_corrupt_autosave_gives_defaults(self, store, memory_storage, caplog):
        memory_storage.set(STORAGE_KEY, "{not json")
        with caplog.at_level(logging.WARNING, logger="nettoit.storage.documents"):
            assert store.load() == DEFAULT_INPUT
        assert "Discarding unreadable autosave" in caplog.text

    def test_reset(self, store, memory_storage, sample_input):
        store.save(sample_input)
        assert store.reset() == DEFAULT_INPUT
        assert STORAGE_KEY not in memory_storage
        assert store.load() == DEFAULT_INPUT

    def test_import_file_replaces_state(self, store, tmp_path, sample_input):
        path = tmp_path / "backup.json"
        path.write_text(dumps_document(export_document(sample_input)), encoding="utf-8")
        assert store.import_file(path) == sample_input
        assert store.load() == sample_input

    def test_failed_import_keeps_state(self, store, tmp_path, sample_input):
        store.save(sample_input)
        path = tmp_path / "broken.json"
        path.write_text("{{{", encoding="utf-8")
        with pytest.raises(DocumentImportError):
            store.import_file(path)
        assert store.load() == sample_input

    def test_empty_data_import_keeps_state(self, store, tmp_path, sample_input):
        store.save(sample_input)
        path = tmp_path / "empty.json"
        path.write_text('{"meta": {}, "data": []}', encoding="utf-8")
        with pytest.raises(DocumentImportError):
            store.import_file(path)
        assert store.load() == sample_input

    def test_export_file(self, store, tmp_path, sample_input):
        store.save(sample_input)
        path = store.export_file(tmp_path / "out.json", now=FIXED_NOW)
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["meta"]["exportedAt"] == "2026-01-02T03:04:05.000Z"
        assert parse_document(path.read_text(encoding="utf-8")) == sample_input
