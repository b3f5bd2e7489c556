"""
Shared fixtures: a deterministic drawing surface and a small page layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import pytest

from contracts.pdf.pdf_assets import DocumentAssets
from contracts.pdf.pdf_settings import LayoutConfig

CHAR_WIDTH_FACTOR = 0.5


@dataclass
class Op:
    kind: str
    page: int
    text: str = ""
    x: float = 0.0
    y: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    font: str | None = None
    size: float | None = None
    align: str = "left"
    fill: float = 0.0


class RecordingSurface:
    """TextSurface double: every glyph is ``size * 0.5`` points wide."""

    def __init__(self) -> None:
        self.ops: List[Op] = []
        self.page = 1
        self.font: str | None = None
        self.size: float | None = None
        self.fill = 0.0
        self.finished = 0

    def measure_width(self, text: str, font: str, size: float) -> float:
        return len(text) * size * CHAR_WIDTH_FACTOR

    def set_font(self, font: str, size: float) -> None:
        self.font, self.size = font, size

    def set_fill_gray(self, gray: float) -> None:
        self.fill = gray

    def set_stroke(self, gray: float, width: float) -> None:
        pass

    def draw_text(self, text: str, x: float, y: float, *, align: str = "left") -> None:
        self.ops.append(
            Op("text", self.page, text, x, y, font=self.font, size=self.size, align=align, fill=self.fill)
        )

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.ops.append(Op("line", self.page, x=x1, y=y1, x2=x2, y2=y2))

    def draw_image(self, image, x, y, width, height, *, opacity=1.0) -> None:
        self.ops.append(Op("image", self.page, x=x, y=y, x2=x + width, y2=y + height))

    def new_page(self) -> None:
        self.page += 1
        self.font, self.size, self.fill = None, None, 0.0

    def current_page_number(self) -> int:
        return self.page

    def finish(self) -> bytes:
        self.finished += 1
        return b"%PDF-recorded"

    def texts(self, *, size: float | None = None, page: int | None = None) -> List[Op]:
        return [
            op
            for op in self.ops
            if op.kind == "text"
            and (size is None or op.size == size)
            and (page is None or op.page == page)
        ]


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def config() -> LayoutConfig:
    """A 300x200pt page; body text is 10pt so each character is 5pt wide."""

    return LayoutConfig(
        page_width=300,
        page_height=200,
        margin=20,
        top_offset=40,
        bottom_margin=30,
        font_size=10,
        line_height=12,
        paragraph_gap=4,
        title="TITLE",
        title_font_size=11,
        title_top=15,
        title_leading=10,
        rule_y=25,
        footer_font_size=8,
        footer_offset=12,
    )


@pytest.fixture
def assets() -> DocumentAssets:
    return DocumentAssets(regular_font="Body", bold_font="Body-Bold")
