"""Contract PDF generation: orchestrates normalization, wrapping and pagination."""

from __future__ import annotations

import base64
import logging
from enum import Enum
from typing import List

from ..classify import classify_lines
from ..cleaning import normalize_lines, normalize_spaces
from ..models import Blank, BodyLine, Paragraph, Subtitle
from .pdf_assets import DocumentAssets, load_assets
from .pdf_constants import (
    BLANK_GAP_FACTOR,
    SUBTITLE_ADVANCE_FACTOR,
    SUBTITLE_SPACE_FACTOR,
    UNDERLINE_OFFSET,
    UNDERLINE_WIDTH,
)
from .pdf_header import HeaderFooterRenderer
from .pdf_justify import draw_wrapped_line
from .pdf_pagination import PageFlowController
from .pdf_settings import LayoutConfig
from .pdf_surface import ReportLabSurface, TextSurface
from .pdf_wrap import wrap_body_line

__all__ = [
    "BuilderState",
    "BuilderStateError",
    "DocumentBuilder",
    "EmptyDocumentError",
    "build_contract_pdf",
    "encode_pdf_base64",
    "strip_repeated_title",
]

logger = logging.getLogger(__name__)

MIN_BASE64_LENGTH = 50


class BuilderState(Enum):
    IDLE = "idle"
    HEADER_DRAWN = "header_drawn"
    BODY_STREAMING = "body_streaming"
    FINALIZED = "finalized"


class BuilderStateError(RuntimeError):
    """Raised when a finalized builder is asked to build again."""


class EmptyDocumentError(ValueError):
    """Raised when generated output is too small to be a real document."""


def strip_repeated_title(lines: List[str], title: str) -> List[str]:
    """Drop a leading line that repeats the header title.

    The title is drawn by the page header, so a body whose first non-blank
    line is the same title (ignoring case and spacing) would print it twice.
    Blank lines directly after the dropped title are removed as well.

    Example:
        >>> strip_repeated_title(["", "Contrato", "", "Texto"], "CONTRATO")
        ['Texto']
        >>> strip_repeated_title(["Texto"], "CONTRATO")
        ['Texto']
    """

    wanted = normalize_spaces(title).upper()
    for index, line in enumerate(lines):
        if not line.strip():
            continue
        if not wanted or normalize_spaces(line).upper() != wanted:
            return lines
        rest = lines[index + 1 :]
        while rest and not rest[0].strip():
            rest = rest[1:]
        return rest
    return lines


class DocumentBuilder:
    """Single-use typesetter turning contract text into a paginated PDF.

    Args:
        config: Layout configuration; validated before anything is drawn.
        surface: Drawing backend; a ReportLab canvas by default.
        assets: Pre-resolved fonts/watermark; loaded from ``config`` when omitted.
    Raises:
        LayoutConfigError: When ``config`` cannot describe a usable page.

    Example:
        >>> pdf = DocumentBuilder(LayoutConfig()).build("PRIMERA:\\nTexto del contrato.")
        >>> pdf[:5]
        b'%PDF-'
    """

    def __init__(
        self,
        config: LayoutConfig,
        *,
        surface: TextSurface | None = None,
        assets: DocumentAssets | None = None,
    ) -> None:
        self.config = config.validate()
        self.assets = assets if assets is not None else load_assets(config)
        self.surface = surface if surface is not None else ReportLabSurface(
            config.page_width, config.page_height
        )
        self.renderer = HeaderFooterRenderer(
            surface=self.surface, config=self.config, assets=self.assets
        )
        self.flow = PageFlowController(
            surface=self.surface, config=self.config, renderer=self.renderer
        )
        self.state = BuilderState.IDLE

    def measure_regular(self, text: str) -> float:
        return self.surface.measure_width(text, self.assets.regular_font, self.config.font_size)

    def measure_bold(self, text: str) -> float:
        return self.surface.measure_width(text, self.assets.bold_font, self.config.font_size)

    def paragraphs(self, text: str) -> List[Paragraph]:
        """Normalize, de-duplicate the title and classify ``text``."""

        lines = strip_repeated_title(normalize_lines(text), self.config.title)
        return classify_lines(lines)

    def build(self, text: str) -> bytes:
        """Typeset ``text`` and return the finished PDF bytes.

        Raises:
            BuilderStateError: When the builder has already been used.
        """

        if self.state is not BuilderState.IDLE:
            raise BuilderStateError(f"builder already used (state: {self.state.value})")
        self.renderer.draw_header()
        self.state = BuilderState.HEADER_DRAWN
        for paragraph in self.paragraphs(text):
            self.state = BuilderState.BODY_STREAMING
            self._render(paragraph)
        self.renderer.draw_footer(self.flow.page_number)
        data = self.surface.finish()
        self.state = BuilderState.FINALIZED
        logger.info("Built contract PDF: %d page(s), %d bytes", self.flow.page_number, len(data))
        return data

    def _render(self, paragraph: Paragraph) -> None:
        if isinstance(paragraph, Subtitle):
            self._render_subtitle(paragraph.text)
        elif isinstance(paragraph, BodyLine):
            self._render_body(paragraph.text)
        elif isinstance(paragraph, Blank):
            self.flow.add_gap(round(self.config.line_height * BLANK_GAP_FACTOR))

    def _render_subtitle(self, text: str) -> None:
        config = self.config
        self.flow.ensure_space(round(config.line_height * SUBTITLE_SPACE_FACTOR))
        x, y = config.margin, self.flow.y
        self.surface.set_font(self.assets.bold_font, config.font_size)
        self.surface.draw_text(text, x, y)
        self.surface.set_stroke(0, UNDERLINE_WIDTH)
        self.surface.draw_line(x, y + UNDERLINE_OFFSET, x + self.measure_bold(text), y + UNDERLINE_OFFSET)
        self.renderer.restore_body_font()
        self.flow.advance(round(config.line_height * SUBTITLE_ADVANCE_FACTOR))

    def _render_body(self, text: str) -> None:
        config = self.config
        wrapped = wrap_body_line(text=text, max_width=config.body_width, measure=self.measure_regular)
        for line in wrapped:
            self.flow.ensure_space(config.line_height)
            draw_wrapped_line(
                surface=self.surface,
                line=line,
                x=config.margin,
                y=self.flow.y,
                target_width=config.body_width,
                measure=self.measure_regular,
            )
            self.flow.advance(config.line_height)
        self.flow.add_gap(config.paragraph_gap)


def build_contract_pdf(
    text: str,
    config: LayoutConfig | None = None,
    *,
    surface: TextSurface | None = None,
) -> bytes:
    """Render already-filled contract text into PDF bytes.

    Args:
        text: Contract body with every placeholder substituted.
        config: Optional layout override; defaults to US letter with 2 cm margins.
        surface: Optional drawing backend, mainly for tests.
    Returns:
        The finished document.
    """

    return DocumentBuilder(config or LayoutConfig(), surface=surface).build(text)


def encode_pdf_base64(data: bytes) -> str:
    """Return ``data`` as bare base64 for JSON payloads.

    Raises:
        EmptyDocumentError: When the encoded output is implausibly short.
    """

    encoded = base64.b64encode(data).decode("ascii")
    if len(encoded) < MIN_BASE64_LENGTH:
        raise EmptyDocumentError("generated contract PDF is empty or invalid")
    return encoded
