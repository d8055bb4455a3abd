# formdoc/exporter.py
from __future__ import annotations
import asyncio, io, logging, os, random, re
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence
from .config import Settings, load_settings
from .errors import CollaboratorUnavailable, SaveFailed
from .fields import read_fields, validate_required
from .schema import DocumentType, ExportArtifact, FieldRecord, OutputFormat
from .templates import build_text
from .ui import FormUI

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^\w\-]+", re.ASCII)

def safe_filename(value: Optional[str], max_length: int = 80) -> str:
    return _UNSAFE.sub("_", (value or "document").strip())[:max_length]

def export_filename(doc_type: DocumentType, record: FieldRecord, max_length: int = 80) -> str:
    base = f"{DocumentType(doc_type).value.upper()}_{safe_filename(record.full_name, max_length)}"
    return f"{base}.{record.format.extension}"

# ------- PDF -------

def render_pdf(lines: Sequence[str], settings: Optional[Settings] = None) -> bytes:
    """Lay out ``lines`` on letter pages: wrapped at the usable width, new page when full.

    The built-in Type 1 fonts only cover Latin-1 (WinAnsi). Characters outside
    it, such as CJK, Greek or emoji, are replaced by reportlab without an error.
    """
    settings = settings or Settings()
    try:
        from reportlab.lib.pagesizes import letter
        from reportlab.lib.utils import simpleSplit
        from reportlab.pdfbase import pdfmetrics
        from reportlab.pdfgen import canvas
    except ImportError as exc:
        raise CollaboratorUnavailable(
            "reportlab", "PDF library failed to load (reportlab). Check your installation."
        ) from exc
    try:
        pdfmetrics.getFont(settings.pdf_font)
    except KeyError as exc:
        raise CollaboratorUnavailable(
            "reportlab", f"PDF font {settings.pdf_font!r} is not available. Check FORMDOC_PDF_FONT."
        ) from exc

    margin = settings.pdf_margin
    line_height = settings.pdf_line_height
    page_width, page_height = letter
    usable_width = page_width - margin * 2

    buf = io.BytesIO()
    doc = canvas.Canvas(buf, pagesize=letter)
    doc.setFont(settings.pdf_font, settings.pdf_font_size)

    wrapped = []
    for line in lines:
        # simpleSplit drops blank lines; keep them as vertical space
        wrapped.extend(simpleSplit(line, settings.pdf_font, settings.pdf_font_size, usable_width) or [""])

    y = margin
    pages = 1
    for line in wrapped:
        if y + line_height > page_height - margin:
            doc.showPage()
            doc.setFont(settings.pdf_font, settings.pdf_font_size)
            pages += 1
            y = margin
        # y runs down from the top edge; reportlab's origin is bottom-left
        doc.drawString(margin, page_height - y, line)
        y += line_height

    doc.save()
    logger.debug("pdf: %d wrapped lines on %d page(s)", len(wrapped), pages)
    return buf.getvalue()

# ------- DOCX -------

def _pack_docx(lines: Sequence[str], spacing_after: int) -> bytes:
    from docx import Document
    from docx.shared import Twips

    document = Document()
    # one section; python-docx starts every document with it
    for line in lines:
        p = document.add_paragraph(line)
        p.paragraph_format.space_after = Twips(spacing_after)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()

async def render_docx(lines: Sequence[str], settings: Optional[Settings] = None) -> bytes:
    """One paragraph per line. Packing runs off the event loop and is awaited."""
    settings = settings or Settings()
    try:
        import docx  # noqa: F401
    except ImportError as exc:
        raise CollaboratorUnavailable(
            "python-docx", "Word library failed to load (python-docx). Check your installation."
        ) from exc
    return await asyncio.to_thread(_pack_docx, list(lines), settings.docx_spacing_after)

# ------- saving -------

def save_as(artifact: ExportArtifact, out_dir: str) -> Path:
    path = Path(out_dir) / artifact.filename
    try:
        os.makedirs(out_dir, exist_ok=True)
        path.write_bytes(artifact.data)
    except OSError as exc:
        raise SaveFailed("filesystem", f"Could not save {artifact.filename} to {out_dir}: {exc}") from exc
    logger.info("saved %s (%d bytes)", path, len(artifact.data))
    return path

# ------- main handler -------

async def handle_generate(doc_type: DocumentType, raw: Mapping[str, Any], ui: FormUI,
                          settings: Optional[Settings] = None,
                          rng: Optional[random.Random] = None) -> Optional[Path]:
    """Read, validate, build, preview, render and save one document.

    Returns the saved path, or None when validation failed or a collaborator
    was unavailable (the user has already been told why).
    """
    settings = settings or load_settings()
    record = read_fields(raw)
    if not validate_required(record, ui):
        return None

    rendered = build_text(doc_type, record, rng)
    ui.show_preview(rendered.text)

    filename = export_filename(doc_type, record, settings.filename_max)
    logger.info("generating %s as %s", filename, record.format.value)
    try:
        if record.format is OutputFormat.PDF:
            data = render_pdf(rendered.lines, settings)
        else:
            data = await render_docx(rendered.lines, settings)
        return save_as(ExportArtifact(filename=filename, data=data, format=record.format),
                       settings.out_dir)
    except CollaboratorUnavailable as exc:
        logger.error("export of %s failed: %s", filename, exc.message)
        ui.alert(exc.message)
        return None
