"""Best-effort loading of fonts and the watermark image."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .pdf_constants import FALLBACK_BOLD_FONT, FALLBACK_REGULAR_FONT
from .pdf_settings import LayoutConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DocumentAssets:
    """Fonts and images resolved once before layout starts.

    Args:
        regular_font: Registered font name for body text and footers.
        bold_font: Registered font name for the title and subtitles.
        watermark: Loaded watermark image, or None when unavailable.
    """

    regular_font: str = FALLBACK_REGULAR_FONT
    bold_font: str = FALLBACK_BOLD_FONT
    watermark: ImageReader | None = None


def _font_available(name: str) -> bool:
    if name in pdfmetrics.getRegisteredFontNames() or name in pdfmetrics.standardFonts:
        return True
    try:
        pdfmetrics.getFont(name)
    except Exception:
        return False
    return True


def resolve_font(name: str, font_file: str | None, fallback: str) -> str:
    """Register ``name`` from ``font_file`` when given and return a usable font.

    Args:
        name: Desired font name.
        font_file: Optional TrueType file to register under ``name``.
        fallback: Built-in font used when ``name`` cannot be provided.
    Returns:
        ``name`` when it is registered or registrable, otherwise ``fallback``.

    Example:
        >>> resolve_font("Helvetica", None, "Times-Roman")
        'Helvetica'
        >>> resolve_font("NoSuchFont", None, "Times-Roman")
        'Times-Roman'
    """

    if font_file and name not in pdfmetrics.getRegisteredFontNames():
        try:
            pdfmetrics.registerFont(TTFont(name, font_file))
        except Exception as exc:
            logger.warning("Could not register font %s from %s: %s", name, font_file, exc)
            return fallback
    if _font_available(name):
        return name
    logger.warning("Font %s is not available, falling back to %s", name, fallback)
    return fallback


def load_watermark(source: str | Path | None) -> ImageReader | None:
    """Load the watermark image, returning None when it cannot be read.

    Example:
        >>> load_watermark(None) is None
        True
        >>> load_watermark("/nonexistent/logo.png") is None
        True
    """

    if not source:
        return None
    try:
        image = ImageReader(str(source))
        image.getSize()
    except Exception as exc:
        logger.warning("Watermark %s could not be loaded, continuing without it: %s", source, exc)
        return None
    return image


def load_assets(config: LayoutConfig) -> DocumentAssets:
    """Resolve fonts and the watermark for ``config``; never raises.

    Both faces fall back together, so body text and headings never end up
    in different families. Faces registered from TrueType files are also
    registered as a family so ReportLab's bold/italic mapping knows them.

    Example:
        >>> assets = load_assets(LayoutConfig(font_family="Times"))
        >>> assets.regular_font, assets.bold_font
        ('Times-Roman', 'Times-Bold')
    """

    regular = resolve_font(config.regular_font, config.regular_font_file, FALLBACK_REGULAR_FONT)
    bold = resolve_font(config.bold_font, config.bold_font_file, FALLBACK_BOLD_FONT)
    if (regular == config.regular_font) != (bold == config.bold_font):
        logger.warning(
            "Only one face of %s is available (%s, %s), using %s and %s",
            config.font_family,
            regular,
            bold,
            FALLBACK_REGULAR_FONT,
            FALLBACK_BOLD_FONT,
        )
        regular, bold = FALLBACK_REGULAR_FONT, FALLBACK_BOLD_FONT
    elif regular == config.regular_font and (config.regular_font_file or config.bold_font_file):
        pdfmetrics.registerFontFamily(config.font_family, normal=regular, bold=bold)
    return DocumentAssets(
        regular_font=regular,
        bold_font=bold,
        watermark=load_watermark(config.watermark),
    )
