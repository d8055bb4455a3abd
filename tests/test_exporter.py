"""
Tests for formdoc.exporter: filenames, PDF/Word rendering and the generate handler.
"""

import io
import sys
import pdfplumber
import pytest
from docx import Document
from docx.shared import Pt
from formdoc.config import Settings
from formdoc.exporter import (
    export_filename, handle_generate, render_docx, render_pdf, safe_filename, save_as,
)
from formdoc.errors import CollaboratorUnavailable, SaveFailed
from formdoc.fields import read_fields
from formdoc.schema import DocumentType, ExportArtifact, OutputFormat


def pdf_text(data):
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        return len(pdf.pages), "\n".join(page.extract_text() or "" for page in pdf.pages)


@pytest.mark.unit
class TestFilenames:

    def test_replaces_unsafe_runs(self):
        assert safe_filename("Jane Doe") == "Jane_Doe"
        assert safe_filename("O'Brien, Ann-Marie") == "O_Brien_Ann-Marie"
        assert safe_filename("a/../b") == "a_b"

    def test_only_ascii_word_chars_survive(self):
        assert safe_filename("José Núñez") == "Jos_N_ez"

    def test_empty_becomes_document(self):
        assert safe_filename("") == "document"
        assert safe_filename(None) == "document"

    def test_truncated(self):
        assert len(safe_filename("x" * 200)) == 80
        assert safe_filename("abcdef", max_length=3) == "abc"

    def test_export_filename(self, jane):
        assert export_filename(DocumentType.LETTER, read_fields(jane)) == "LETTER_Jane_Doe.pdf"
        jane["format"] = "docx"
        assert export_filename(DocumentType.NDA, read_fields(jane)) == "NDA_Jane_Doe.docx"


@pytest.mark.integration
class TestRenderPdf:

    def test_text_lands_in_pdf(self):
        pages, text = pdf_text(render_pdf(["LETTER", "", "Dear Jane Doe,"]))
        assert pages == 1
        assert "Dear Jane Doe," in text

    def test_paginates(self):
        # 792pt page, 54pt margins, 16pt lines: 42 lines fit on a page
        pages, text = pdf_text(render_pdf([f"line {i}" for i in range(100)]))
        assert pages == 3
        assert "line 99" in text

    def test_wraps_long_lines(self):
        long_line = " ".join(["word"] * 200)
        pages, text = pdf_text(render_pdf([long_line]))
        assert len(text.splitlines()) > 1

    def test_missing_library(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "reportlab.pdfgen", None)
        with pytest.raises(CollaboratorUnavailable) as exc:
            render_pdf(["x"])
        assert "PDF library failed to load" in exc.value.message

    def test_unknown_font(self):
        with pytest.raises(CollaboratorUnavailable) as exc:
            render_pdf(["x"], Settings(pdf_font="NoSuchFont-Bold"))
        assert "NoSuchFont-Bold" in exc.value.message

    def test_text_outside_latin1_does_not_fail(self):
        pages, text = pdf_text(render_pdf(["Prepared for: 张伟 Ωmega", "Dear Jane,"]))
        assert pages == 1
        assert "Dear Jane," in text


@pytest.mark.integration
class TestRenderDocx:

    @pytest.mark.asyncio
    async def test_one_paragraph_per_line(self):
        lines = ["LETTER", "", "Dear Jane Doe,", ""]
        doc = Document(io.BytesIO(await render_docx(lines)))
        texts = [p.text for p in doc.paragraphs]
        assert texts[-len(lines):] == lines
        assert doc.paragraphs[-1].paragraph_format.space_after == Pt(6)
        assert len(doc.sections) == 1

    @pytest.mark.asyncio
    async def test_missing_library(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "docx", None)
        with pytest.raises(CollaboratorUnavailable) as exc:
            await render_docx(["x"])
        assert "Word library failed to load" in exc.value.message


@pytest.mark.unit
class TestSaveAs:

    def test_writes_file(self, tmp_path):
        art = ExportArtifact(filename="a.pdf", data=b"%PDF", format=OutputFormat.PDF)
        path = save_as(art, str(tmp_path / "out"))
        assert path.read_bytes() == b"%PDF"

    def test_unwritable_target(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        art = ExportArtifact(filename="a.pdf", data=b"%PDF", format=OutputFormat.PDF)
        with pytest.raises(SaveFailed):
            save_as(art, str(blocker))


@pytest.mark.integration
class TestHandleGenerate:

    @pytest.mark.asyncio
    async def test_letter_pdf_scenario(self, ui, settings, tmp_path):
        raw = {"full_name": "Jane Doe", "company": "Acme", "format": "pdf"}
        path = await handle_generate(DocumentType.LETTER, raw, ui, settings)
        assert path == tmp_path / "LETTER_Jane_Doe.pdf"
        _, text = pdf_text(path.read_bytes())
        assert "Dear Jane Doe," in text
        assert "Company: Acme" in text
        assert "Dear Jane Doe," in ui.previews[-1]
        assert ui.alerts == []

    @pytest.mark.asyncio
    async def test_invoice_docx(self, ui, settings, jane):
        jane["format"] = "docx"
        path = await handle_generate(DocumentType.INVOICE, jane, ui, settings)
        assert path.name == "INVOICE_Jane_Doe.docx"
        texts = [p.text for p in Document(str(path)).paragraphs]
        assert "Bill To: Jane Doe (Acme)" in texts

    @pytest.mark.asyncio
    async def test_empty_name_generates_nothing(self, ui, settings, tmp_path):
        path = await handle_generate(DocumentType.NDA, {"full_name": "", "format": "pdf"}, ui, settings)
        assert path is None
        assert list(tmp_path.iterdir()) == []
        assert ui.alerts == ["Please enter Full Name."]
        assert ui.focused == ["full_name"]
        assert ui.previews == []

    @pytest.mark.asyncio
    async def test_missing_library_alerts(self, ui, settings, tmp_path, monkeypatch):
        monkeypatch.setitem(sys.modules, "reportlab.pdfgen", None)
        path = await handle_generate(DocumentType.LETTER, {"full_name": "Jane"}, ui, settings)
        assert path is None
        assert list(tmp_path.iterdir()) == []
        assert len(ui.alerts) == 1 and "reportlab" in ui.alerts[0]

    @pytest.mark.asyncio
    async def test_long_name_is_capped(self, ui, tmp_path):
        settings = Settings(out_dir=str(tmp_path), filename_max=5)
        path = await handle_generate(DocumentType.LETTER, {"full_name": "Jonathan Smith"}, ui, settings)
        assert path.name == "LETTER_Jonat.pdf"

    @pytest.mark.asyncio
    async def test_multiline_address_gives_one_paragraph_per_line(self, ui, settings):
        raw = {"full_name": "Jane", "address": "1 Main St\nSpringfield", "format": "docx"}
        path = await handle_generate(DocumentType.LETTER, raw, ui, settings)
        expected = ui.previews[-1].split("\n")
        texts = [p.text for p in Document(str(path)).paragraphs]
        assert texts[-len(expected):] == expected
        assert "Springfield" in texts
        assert not any("\n" in t for t in texts)

    @pytest.mark.asyncio
    async def test_unknown_font_alerts(self, ui, tmp_path):
        settings = Settings(out_dir=str(tmp_path), pdf_font="NoSuchFont-Bold")
        path = await handle_generate(DocumentType.LETTER, {"full_name": "Jane"}, ui, settings)
        assert path is None
        assert list(tmp_path.iterdir()) == []
        assert ui.alerts == ["PDF font 'NoSuchFont-Bold' is not available. Check FORMDOC_PDF_FONT."]
