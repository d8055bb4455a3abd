# formdoc/errors.py
from __future__ import annotations

class FormDocError(Exception):
    """Base class for everything formdoc raises on purpose."""

class MissingRequiredField(FormDocError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Required field is empty: {field}")

class CollaboratorUnavailable(FormDocError):
    """A rendering or saving library could not be used.

    ``message`` is the human-readable text shown to the user.
    """
    def __init__(self, library: str, message: str):
        self.library = library
        self.message = message
        super().__init__(message)

class SaveFailed(CollaboratorUnavailable):
    pass
