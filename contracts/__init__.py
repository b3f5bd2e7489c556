"""Contract typesetting: plain contract text in, paginated justified PDF out."""

from __future__ import annotations

from .pdf.builder import DocumentBuilder, build_contract_pdf, encode_pdf_base64
from .pdf.pdf_settings import LayoutConfig, LayoutConfigError
from .template import fill_template, load_contract_template

__all__ = [
    "DocumentBuilder",
    "LayoutConfig",
    "LayoutConfigError",
    "build_contract_pdf",
    "encode_pdf_base64",
    "fill_template",
    "load_contract_template",
]
