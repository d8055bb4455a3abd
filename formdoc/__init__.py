# formdoc/__init__.py
from .schema import DocumentType, OutputFormat, FieldRecord, RenderedText, ExportArtifact
from .fields import read_fields, validate_required
from .templates import build_text
from .exporter import handle_generate

__all__ = [
    "DocumentType", "OutputFormat", "FieldRecord", "RenderedText", "ExportArtifact",
    "read_fields", "validate_required", "build_text", "handle_generate",
]
