"""Autosave and export/import documents for the input record.

Document shape (shared by autosave and export files)::

    {
      "meta": {"app": "nettoit", "version": "v1", "savedAt" | "exportedAt": "<ISO-8601>"},
      "data": {"grossMonthly": 3700, "taxClass": "I", ...}
    }

Imports are reconciled field by field onto the defaults: each field is
validated on its own, invalid or missing fields keep the default value and
unknown fields are dropped.
"""

import json
import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any

from nettoit.config import APP_ID, APP_VERSION, STORAGE_KEY
from nettoit.exceptions import DocumentImportError
from nettoit.models.enums import HealthType
from nettoit.models.inputs import (
    FALSY_STRINGS,
    TRUTHY_STRINGS,
    EstimateInput,
    parse_decimal,
    parse_state,
    parse_tax_class,
)
from nettoit.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_INPUT = EstimateInput(gross_monthly=Decimal("3700"))

_NUMERIC_FIELDS = ("gross_monthly", "child_allowance", "pkv_premium_monthly")


class _DecimalEncoder(json.JSONEncoder):
    """Writes Decimals as JSON numbers when a float round-trips them exactly."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            if obj == obj.to_integral_value():
                return int(obj)
            as_float = float(obj)
            if Decimal(repr(as_float)) == obj:
                return as_float
            return str(obj)
        return super().default(obj)


def _timestamp(now: datetime | None) -> str:
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_document(data: EstimateInput, stamp_field: str, now: datetime | None = None) -> dict:
    return {
        "meta": {"app": APP_ID, "version": APP_VERSION, stamp_field: _timestamp(now)},
        "data": data.to_record(),
    }


def autosave_document(data: EstimateInput, now: datetime | None = None) -> dict:
    return build_document(data, "savedAt", now)


def export_document(data: EstimateInput, now: datetime | None = None) -> dict:
    return build_document(data, "exportedAt", now)


def dumps_document(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False, cls=_DecimalEncoder)


def export_filename(today: date | None = None) -> str:
    """``toolstack-nettoit-v1-YYYY-MM-DD.json``"""
    day = today or date.today()
    return f"toolstack-{APP_ID}-{APP_VERSION}-{day.isoformat()}.json"


# ---------------------------------------------------------------------------
# Import reconciliation
# ---------------------------------------------------------------------------


def _lookup(raw: Mapping[str, Any], field_name: str) -> tuple[bool, Any]:
    """Find a field by its camelCase alias or its snake_case name."""
    alias = EstimateInput.model_fields[field_name].alias or field_name
    for key in (alias, field_name):
        if key in raw and raw[key] is not None:
            return True, raw[key]
    return False, None


def _reconcile_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    if isinstance(value, str):
        key = value.strip().lower()
        if key in TRUTHY_STRINGS:
            return True
        if key in FALSY_STRINGS:
            return False
    return default


def _reconcile_health_type(value: Any, default: HealthType) -> HealthType:
    key = str(value).strip().lower()
    if key in {h.value for h in HealthType}:
        return HealthType(key)
    return default


def reconcile_input(
    raw: Mapping[str, Any],
    defaults: EstimateInput = DEFAULT_INPUT,
) -> EstimateInput:
    """Merge an untrusted record onto *defaults*, one field at a time."""
    fields: dict[str, Any] = {}

    for name in _NUMERIC_FIELDS:
        default = getattr(defaults, name)
        found, value = _lookup(raw, name)
        fields[name] = parse_decimal(value, fallback=default) if found else default

    found, value = _lookup(raw, "tax_class")
    fields["tax_class"] = parse_tax_class(value, defaults.tax_class) if found else defaults.tax_class

    found, value = _lookup(raw, "state")
    fields["state"] = parse_state(value, defaults.state) if found else defaults.state

    found, value = _lookup(raw, "church_tax")
    fields["church_tax"] = _reconcile_bool(value, defaults.church_tax) if found else defaults.church_tax

    found, value = _lookup(raw, "health_type")
    fields["health_type"] = (
        _reconcile_health_type(value, defaults.health_type) if found else defaults.health_type
    )

    known = set(EstimateInput.model_fields)
    known |= {f.alias for f in EstimateInput.model_fields.values() if f.alias}
    unknown = sorted(str(k) for k in raw if k not in known)
    if unknown:
        logger.warning("Ignoring unknown fields in imported data: %s", ", ".join(unknown))

    return EstimateInput(**fields)


def parse_document(text: str | bytes, source: str = "<document>") -> EstimateInput:
    """Parse an autosave/export document (or a bare input record).

    Raises DocumentImportError on malformed JSON or a non-object payload.
    """
    try:
        document = json.loads(text, parse_float=Decimal)
    except (ValueError, UnicodeDecodeError) as exc:
        raise DocumentImportError(source, "invalid JSON") from exc

    payload = document
    if isinstance(document, dict) and "data" in document:
        payload = document["data"]
    if not isinstance(payload, dict):
        raise DocumentImportError(source, "invalid JSON")
    return reconcile_input(payload)


def load_document_file(path: Path) -> EstimateInput:
    try:
        text = path.read_bytes()
    except OSError as exc:
        raise DocumentImportError(str(path), f"cannot read file: {exc.strerror}") from exc
    return parse_document(text, source=str(path))


# ---------------------------------------------------------------------------
# Autosave store
# ---------------------------------------------------------------------------


class InputStore:
    """Loads, autosaves and resets the input record in a key-value storage."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> EstimateInput:
        """Stored record, or the defaults when nothing usable is stored."""
        raw = self.storage.get(self.key)
        if raw is None:
            return DEFAULT_INPUT
        try:
            return parse_document(raw, source=self.key)
        except DocumentImportError as exc:
            logger.warning("Discarding unreadable autosave: %s", exc)
            return DEFAULT_INPUT

    def save(self, data: EstimateInput, now: datetime | None = None) -> None:
        self.storage.set(self.key, dumps_document(autosave_document(data, now)))

    def reset(self) -> EstimateInput:
        self.storage.remove(self.key)
        return DEFAULT_INPUT

    def import_file(self, path: Path) -> EstimateInput:
        """Replace the stored record with an imported file.

        On failure the stored record is left untouched.
        """
        data = load_document_file(path)
        self.save(data)
        return data

    def export_file(self, path: Path, now: datetime | None = None) -> Path:
        """Write the stored record as an export document to *path*."""
        data = self.load()
        path.write_text(dumps_document(export_document(data, now)) + "\n", encoding="utf-8")
        return path
