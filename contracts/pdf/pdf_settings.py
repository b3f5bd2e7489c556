"""Page geometry, fonts and styling knobs for contract output."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from reportlab.lib.fonts import tt2ps
from reportlab.lib.pagesizes import letter
from reportlab.lib.units import cm

from .pdf_constants import SUBTITLE_SPACE_FACTOR

DEFAULT_TITLE = (
    "CONTRATO DE PRESTACIÓN DE SERVICIOS DE ENSEÑANZA DEPORTIVA "
    "ESPECIALIZADA EN FÚTBOL"
)


class LayoutConfigError(ValueError):
    """Raised when a ``LayoutConfig`` cannot describe a usable page."""


# Style identifier (lowercase, separators removed) -> (bold, italic).
STYLE_FLAGS = {
    "": (0, 0),
    "normal": (0, 0),
    "regular": (0, 0),
    "roman": (0, 0),
    "bold": (1, 0),
    "italic": (0, 1),
    "oblique": (0, 1),
    "bolditalic": (1, 1),
    "boldoblique": (1, 1),
}
_STYLE_SEPARATORS = re.compile(r"[\s_-]+")


@dataclass(slots=True, frozen=True)
class LayoutConfig:
    """Geometry and typography for one document.

    Coordinates are in points and measured top-down, so ``top_offset`` is the
    baseline of the first body line and ``body_limit`` is the lowest baseline
    a line may occupy.

    Example:
        >>> config = LayoutConfig()
        >>> round(config.body_width, 2)
        498.61
        >>> config.font_name("bold")
        'Helvetica-Bold'
    """

    page_width: float = letter[0]
    page_height: float = letter[1]
    margin: float = 2 * cm
    top_offset: float = 3.2 * cm
    bottom_margin: float = 3 * cm
    font_family: str = "Helvetica"
    regular_style: str = "normal"
    bold_style: str = "bold"
    regular_font_file: str | None = None
    bold_font_file: str | None = None
    font_size: float = 12.0
    line_height: float = 18.0
    paragraph_gap: float = 6.0
    title: str = DEFAULT_TITLE
    title_font_size: float = 12.0
    title_top: float = 55.0
    title_leading: float = 14.0
    rule_y: float = 84.0
    rule_gray: float = 200 / 255
    rule_width: float = 0.8
    watermark: str | Path | None = None
    watermark_size: float = 320.0
    watermark_opacity: float = 0.10
    footer_template: str = "Page {page}"
    footer_font_size: float = 9.0
    footer_offset: float = 26.0
    footer_gray: float = 90 / 255

    @property
    def body_width(self) -> float:
        """Return the usable line width between the two margins."""

        return self.page_width - 2 * self.margin

    @property
    def body_limit(self) -> float:
        """Return the y coordinate where the footer reserve begins."""

        return self.page_height - self.bottom_margin

    def font_name(self, style: str) -> str:
        """Return the font name for ``style`` within the configured family.

        Families known to ReportLab's font mapping (the standard Type 1
        families and anything added with ``registerFontFamily``) resolve
        through ``tt2ps``, so ``Times`` and ``Times-Roman`` both give
        ``Times-Bold`` for bold. Other families use the ``Family-Bold``
        naming convention of TrueType files registered by name.

        Args:
            style: Style identifier such as ``"normal"``, ``"bold"``,
                ``"italic"`` or ``"bold italic"``.
        Returns:
            ReportLab font name, e.g. ``Helvetica-Bold``.
        Raises:
            LayoutConfigError: When ``style`` is not a known style.

        Example:
            >>> LayoutConfig(font_family="Times").font_name("normal")
            'Times-Roman'
            >>> LayoutConfig().font_name("italic")
            'Helvetica-Oblique'
        """

        key = _STYLE_SEPARATORS.sub("", style.lower())
        if key not in STYLE_FLAGS:
            raise LayoutConfigError(f"unknown font style {style!r}")
        bold, italic = STYLE_FLAGS[key]
        try:
            return tt2ps(self.font_family, bold, italic)
        except ValueError:
            suffix = ("Bold" if bold else "") + ("Italic" if italic else "")
            return f"{self.font_family}-{suffix}" if suffix else self.font_family

    @property
    def regular_font(self) -> str:
        return self.font_name(self.regular_style)

    @property
    def bold_font(self) -> str:
        return self.font_name(self.bold_style)

    def footer_text(self, page_number: int) -> str:
        return self.footer_template.format(page=page_number)

    def validate(self) -> "LayoutConfig":
        """Check the geometry before any layout work begins.

        Returns:
            ``self`` so calls can be chained.
        Raises:
            LayoutConfigError: When a dimension is non-positive or the body
                area cannot hold a single line.
        """

        if self.page_width <= 0 or self.page_height <= 0:
            raise LayoutConfigError(
                f"page size must be positive, got {self.page_width}x{self.page_height}"
            )
        if self.margin < 0 or self.bottom_margin < 0 or self.top_offset < 0:
            raise LayoutConfigError("margins and offsets must not be negative")
        if self.body_width <= 0:
            raise LayoutConfigError(
                f"margin {self.margin} leaves no usable width on a {self.page_width} page"
            )
        for name in ("font_size", "line_height", "title_font_size", "footer_font_size"):
            if getattr(self, name) <= 0:
                raise LayoutConfigError(f"{name} must be positive")
        if self.paragraph_gap < 0:
            raise LayoutConfigError("paragraph_gap must not be negative")
        tallest_line = round(self.line_height * SUBTITLE_SPACE_FACTOR)
        if self.top_offset + tallest_line >= self.body_limit:
            raise LayoutConfigError(
                "body area between top_offset and the footer reserve cannot hold a line"
            )
        if not 0.0 <= self.watermark_opacity <= 1.0:
            raise LayoutConfigError("watermark_opacity must be within [0, 1]")
        try:
            self.footer_text(1)
        except (KeyError, IndexError, ValueError) as exc:
            raise LayoutConfigError(
                f"footer_template {self.footer_template!r} is not usable: {exc}"
            ) from exc
        for style in (self.regular_style, self.bold_style):
            self.font_name(style)
        return self
