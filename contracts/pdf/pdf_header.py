"""Per-page decorations: title block, rule, watermark and footer."""

from __future__ import annotations

from typing import List

from .pdf_assets import DocumentAssets
from .pdf_settings import LayoutConfig
from .pdf_surface import TextSurface
from .pdf_wrap import wrap_body_line


class HeaderFooterRenderer:
    """Draw the repeating header and footer of every page.

    Every method leaves the surface in the regular body font at body size
    with black fill, so body text drawn afterwards never inherits the bold
    title style or the gray footer color.

    Args:
        surface: Drawing backend.
        config: Layout configuration.
        assets: Resolved fonts and optional watermark.
    """

    def __init__(self, *, surface: TextSurface, config: LayoutConfig, assets: DocumentAssets) -> None:
        self.surface = surface
        self.config = config
        self.assets = assets

    def title_lines(self) -> List[str]:
        """Return the main title wrapped to the body width in the bold font."""

        if not self.config.title.strip():
            return []
        font, size = self.assets.bold_font, self.config.title_font_size
        wrapped = wrap_body_line(
            text=self.config.title,
            max_width=self.config.body_width,
            measure=lambda text: self.surface.measure_width(text, font, size),
        )
        return [line.text for line in wrapped]

    def draw_header(self) -> None:
        self.draw_watermark()
        config = self.config
        self.surface.set_font(self.assets.bold_font, config.title_font_size)
        self.surface.set_fill_gray(0)
        y = config.title_top
        for line in self.title_lines():
            self.surface.draw_text(line, config.page_width / 2, y, align="center")
            y += config.title_leading
        self.surface.set_stroke(config.rule_gray, config.rule_width)
        self.surface.draw_line(config.margin, config.rule_y, config.page_width - config.margin, config.rule_y)
        self.restore_body_font()

    def draw_watermark(self) -> None:
        """Center the watermark on the page; a missing image is skipped."""

        if self.assets.watermark is None:
            return
        config = self.config
        size = config.watermark_size
        self.surface.draw_image(
            self.assets.watermark,
            (config.page_width - size) / 2,
            (config.page_height - size) / 2,
            size,
            size,
            opacity=config.watermark_opacity,
        )

    def draw_footer(self, page_number: int) -> None:
        config = self.config
        self.surface.set_font(self.assets.regular_font, config.footer_font_size)
        self.surface.set_fill_gray(config.footer_gray)
        self.surface.draw_text(
            config.footer_text(page_number),
            config.page_width / 2,
            config.page_height - config.footer_offset,
            align="center",
        )
        self.restore_body_font()

    def restore_body_font(self) -> None:
        self.surface.set_font(self.assets.regular_font, self.config.font_size)
        self.surface.set_fill_gray(0)
