# formdoc/preview.py
from __future__ import annotations
import datetime as dt
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional
from .fields import FORM_FIELDS, TRACKED_FIELDS, read_fields
from .schema import DocumentType
from .templates import build_text
from .ui import FormUI

logger = logging.getLogger(__name__)

EMPTY_PREVIEW = "Fill out the form and click a document button."

Listener = Callable[[str], None]

class FormState:
    """Raw, user-editable form values plus change notification.

    Stands in for the page's input elements: it holds strings exactly as typed
    and tells subscribers which field changed. Nothing here formats or validates.
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = {k: "" for k in FORM_FIELDS}
        self._values["format"] = "pdf"
        self._listeners: List[Listener] = []
        for k, v in (initial or {}).items():
            self._check(k)
            self._values[k] = v

    @staticmethod
    def _check(field: str) -> None:
        if field not in FORM_FIELDS:
            raise KeyError(f"unknown form field: {field}")

    def get(self, field: str) -> Any:
        self._check(field)
        return self._values[field]

    def set(self, field: str, value: Any) -> None:
        self._check(field)
        self._values[field] = value
        for listener in list(self._listeners):
            listener(field)

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._values)

    def reset_date(self, today: Optional[dt.date] = None) -> None:
        self.set("date", (today or dt.date.today()).isoformat())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

class PreviewRenderer:
    """Keeps ``ui.show_preview`` in step with the form, always as a letter."""

    def __init__(self, ui: FormUI):
        self.ui = ui

    def render(self, raw: Mapping[str, Any]) -> str:
        record = read_fields(raw)
        if not record.full_name:
            return EMPTY_PREVIEW
        return build_text(DocumentType.LETTER, record).text

    def bind(self, form: FormState) -> Callable[[], None]:
        def on_change(field: str) -> None:
            if field not in TRACKED_FIELDS:
                return
            logger.debug("preview refresh after %s changed", field)
            self.ui.show_preview(self.render(form.snapshot()))
        return form.subscribe(on_change)
