"""Vertical flow of body content across pages."""

from __future__ import annotations

import logging

from ..models import Cursor
from .pdf_constants import EPSILON
from .pdf_header import HeaderFooterRenderer
from .pdf_settings import LayoutConfig
from .pdf_surface import TextSurface

logger = logging.getLogger(__name__)


class PageFlowController:
    """Own the cursor and break pages before content would cross the footer.

    Args:
        surface: Drawing backend.
        config: Layout configuration.
        renderer: Header/footer renderer invoked around each page break.
    """

    def __init__(
        self,
        *,
        surface: TextSurface,
        config: LayoutConfig,
        renderer: HeaderFooterRenderer,
    ) -> None:
        self.surface = surface
        self.config = config
        self.renderer = renderer
        self.cursor = Cursor(page_number=1, y=config.top_offset)

    @property
    def y(self) -> float:
        return self.cursor.y

    @property
    def page_number(self) -> int:
        return self.cursor.page_number

    @property
    def at_page_top(self) -> bool:
        return self.cursor.y <= self.config.top_offset + EPSILON

    def ensure_space(self, needed: float) -> bool:
        """Break the page when ``needed`` points no longer fit above the footer.

        Args:
            needed: Height the next draw will consume.
        Returns:
            True when a page break was performed.
        """

        if self.cursor.y + needed < self.config.body_limit:
            return False
        self.break_page()
        return True

    def break_page(self) -> None:
        """Finish the current page and start the next one at the top offset."""

        logger.debug(
            "Page break after page %d at y=%.2f (limit %.2f)",
            self.cursor.page_number,
            self.cursor.y,
            self.config.body_limit,
        )
        self.renderer.draw_footer(self.cursor.page_number)
        self.surface.new_page()
        self.cursor.page_number += 1
        self.renderer.draw_header()
        self.cursor.y = self.config.top_offset

    def advance(self, dy: float) -> None:
        self.cursor.y += dy

    def add_gap(self, dy: float) -> None:
        """Insert vertical whitespace without ever forcing a page break.

        Gaps at the top of a page are dropped, and a gap running into the
        footer reserve stops at its edge so the next drawn line breaks.
        """

        if self.at_page_top:
            return
        self.cursor.y = min(self.cursor.y + dy, self.config.body_limit)
