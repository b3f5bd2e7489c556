"""Public re-exports for contract PDF layout."""

from __future__ import annotations

from .builder import (
    BuilderState,
    BuilderStateError,
    DocumentBuilder,
    EmptyDocumentError,
    build_contract_pdf,
    encode_pdf_base64,
)
from .pdf_assets import DocumentAssets, load_assets
from .pdf_settings import LayoutConfig, LayoutConfigError
from .pdf_surface import ReportLabSurface, TextSurface

__all__ = [
    "BuilderState",
    "BuilderStateError",
    "DocumentAssets",
    "DocumentBuilder",
    "EmptyDocumentError",
    "LayoutConfig",
    "LayoutConfigError",
    "ReportLabSurface",
    "TextSurface",
    "build_contract_pdf",
    "encode_pdf_base64",
    "load_assets",
]
