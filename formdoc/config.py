# formdoc/config.py
from __future__ import annotations
import os
from typing import Callable, Optional, TypeVar
from dotenv import load_dotenv
from pydantic import BaseModel

T = TypeVar("T")

ENV_PREFIX = "FORMDOC_"

class Settings(BaseModel):
    out_dir: str = "."
    # PDF layout, in points on a US letter page
    pdf_margin: float = 54.0  # 0.75in
    pdf_font: str = "Times-Roman"
    pdf_font_size: float = 12.0
    pdf_line_height: float = 16.0
    # Word paragraph spacing, in twips (1/20 pt)
    docx_spacing_after: int = 120
    filename_max: int = 80

def _env(name: str, cast: Callable[[str], T], default: T) -> T:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} has an invalid value: {raw!r}") from None

def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Defaults, overridden by FORMDOC_* variables (a .env file is honored)."""
    load_dotenv(dotenv_path)
    d = Settings()
    return Settings(
        out_dir=_env("OUT_DIR", str, d.out_dir),
        pdf_margin=_env("PDF_MARGIN", float, d.pdf_margin),
        pdf_font=_env("PDF_FONT", str, d.pdf_font),
        pdf_font_size=_env("PDF_FONT_SIZE", float, d.pdf_font_size),
        pdf_line_height=_env("PDF_LINE_HEIGHT", float, d.pdf_line_height),
        docx_spacing_after=_env("DOCX_SPACING_AFTER", int, d.docx_spacing_after),
        filename_max=_env("FILENAME_MAX", int, d.filename_max),
    )
