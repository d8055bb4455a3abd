# formdoc/templates.py
from __future__ import annotations
import random
from typing import Callable, Dict, List, Optional
from .schema import DocumentType, FieldRecord, RenderedText

PLACEHOLDER = "—"
HEADER_SEP = " • "

def _or_dash(value: str) -> str:
    return value or PLACEHOLDER

def _join_nonempty(parts: List[str], sep: str = HEADER_SEP) -> str:
    return sep.join([p for p in parts if p])

def _header(r: FieldRecord) -> List[str]:
    return [
        f"Prepared for: {_join_nonempty([r.full_name, r.company])}",
        f"Email: {_or_dash(r.email)}",
        f"Address: {_or_dash(r.address)}",
        f"Date: {r.date_str}",
        "",
    ]

def _notes(r: FieldRecord, title: str = "Notes:") -> List[str]:
    return [title, _or_dash(r.notes)]

def _split_lines(items: List[str]) -> List[str]:
    # any field may carry line breaks; every output item must be one line
    return [part for item in items for part in (item.splitlines() or [""])]

def _nda(r: FieldRecord, rng: random.Random) -> List[str]:
    return [
        "NON-DISCLOSURE AGREEMENT (NDA)",
        "",
        f'This Non-Disclosure Agreement ("Agreement") is entered into on {r.date_str} by and between:',
        f"- Disclosing Party: {r.company or r.full_name}",
        f"- Receiving Party: {r.full_name}",
        "",
        "1. Confidential Information",
        "The Receiving Party agrees to keep confidential any non-public information disclosed.",
        "",
        "2. Permitted Use",
        "Confidential Information will only be used for evaluation/business discussions.",
        "",
        "3. Non-Disclosure",
        "The Receiving Party will not disclose Confidential Information to third parties without written consent.",
        "",
        "4. Term",
        "This Agreement remains in effect for 2 years from the date above.",
        "",
        *_notes(r),
        "",
        "Signature: ______________________",
        f"Name: {r.full_name}",
        "",
    ]

def invoice_number(rng: Optional[random.Random] = None) -> str:
    """A fresh "INV-NNNNN" on every call.

    There is no seed and no uniqueness check: two invoices can share a number.
    The number is cosmetic, so building the same invoice twice gives two
    different texts.
    """
    rng = rng or random
    return f"INV-{rng.randint(10000, 99999)}"

def _invoice(r: FieldRecord, rng: random.Random) -> List[str]:
    bill_to = r.full_name + (f" ({r.company})" if r.company else "")
    return [
        "INVOICE",
        "",
        f"Bill To: {bill_to}",
        f"Invoice Date: {r.date_str}",
        f"Invoice #: {invoice_number(rng)}",
        "",
        "Line Items:",
        "1) Professional Services .................................. $500.00",
        "",
        "Subtotal: $500.00",
        "Tax:      $0.00",
        "Total:    $500.00",
        "",
        *_notes(r),
        "",
        "Thank you for your business.",
        "",
    ]

def _letter(r: FieldRecord, rng: random.Random) -> List[str]:
    return [
        "LETTER",
        "",
        f"Dear {r.full_name},",
        "",
        "This letter confirms the details provided in the form.",
        "",
        "Details:",
        f"- Company: {_or_dash(r.company)}",
        f"- Email: {_or_dash(r.email)}",
        f"- Address: {_or_dash(r.address)}",
        "",
        *_notes(r, "Additional Notes:"),
        "",
        "Sincerely,",
        "Document Generator",
        "",
    ]

TEMPLATES: Dict[DocumentType, Callable[[FieldRecord, random.Random], List[str]]] = {
    DocumentType.NDA: _nda,
    DocumentType.INVOICE: _invoice,
    DocumentType.LETTER: _letter,
}

def build_text(doc_type: DocumentType, record: FieldRecord,
               rng: Optional[random.Random] = None) -> RenderedText:
    """Fill the template for ``doc_type``. Field text goes in verbatim, unescaped."""
    body = TEMPLATES[DocumentType(doc_type)](record, rng or random)
    return RenderedText(lines=tuple(_split_lines(_header(record) + body)))
