# formdoc/schema.py
from __future__ import annotations
import datetime as dt
from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field

class OutputFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"

    @property
    def extension(self) -> str:
        return self.value

class DocumentType(str, Enum):
    NDA = "nda"
    INVOICE = "invoice"
    LETTER = "letter"

class FieldRecord(BaseModel):
    """Normalized snapshot of the form. Optional fields are "" when left empty."""
    model_config = ConfigDict(frozen=True)

    full_name: str = ""
    company: str = ""
    email: str = ""
    address: str = ""
    date: dt.date = Field(default_factory=dt.date.today)
    notes: str = ""
    format: OutputFormat = OutputFormat.PDF

    @property
    def date_str(self) -> str:
        # long form, e.g. "October 19, 2026"
        return f"{self.date:%B} {self.date.day}, {self.date.year}"

class RenderedText(BaseModel):
    model_config = ConfigDict(frozen=True)

    lines: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

class ExportArtifact(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    data: bytes
    format: OutputFormat
