# formdoc/fields.py
from __future__ import annotations
import datetime as dt
import json, logging
from typing import Any, Dict, Mapping, Optional
from .errors import MissingRequiredField
from .schema import FieldRecord, OutputFormat
from .ui import FormUI

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("full_name", "company", "email", "address", "notes")
FORM_FIELDS = TEXT_FIELDS[:4] + ("date", "notes", "format")
# fields whose edits refresh the live preview (format is not one of them)
TRACKED_FIELDS = ("full_name", "company", "email", "address", "date", "notes")

REQUIRED_MESSAGE = "Please enter Full Name."

def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()

def _parse_date(value: Any, today: dt.date) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    s = _clean(value)
    if not s:
        return today
    try:
        return dt.date.fromisoformat(s)
    except ValueError:
        logger.warning("Unreadable date %r, using today (%s)", s, today.isoformat())
        return today

def _parse_format(value: Any) -> OutputFormat:
    s = _clean(value).lower()
    if not s:
        return OutputFormat.PDF
    try:
        return OutputFormat(s)
    except ValueError:
        # anything that is not "pdf" goes down the Word path
        logger.warning("Unknown output format %r, using docx", s)
        return OutputFormat.DOCX

def read_fields(raw: Mapping[str, Any], today: Optional[dt.date] = None) -> FieldRecord:
    """Build a fresh FieldRecord from raw form values. Never raises on bad input."""
    today = today or dt.date.today()
    values: Dict[str, Any] = {k: _clean(raw.get(k)) for k in TEXT_FIELDS}
    values["date"] = _parse_date(raw.get("date"), today)
    values["format"] = _parse_format(raw.get("format"))
    return FieldRecord(**values)

def load_fields(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of form fields")
    unknown = sorted(set(data) - set(FORM_FIELDS))
    if unknown:
        logger.warning("%s: ignoring unknown fields %s", path, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in FORM_FIELDS}

def validate_required(record: FieldRecord, ui: FormUI) -> bool:
    if record.full_name:
        return True
    ui.alert(REQUIRED_MESSAGE)
    ui.focus("full_name")
    return False

def require_fields(record: FieldRecord) -> FieldRecord:
    """Raising variant of validate_required for callers without a UI."""
    if not record.full_name:
        raise MissingRequiredField("full_name")
    return record
