"""Drawing capability used by the layout engine, plus its ReportLab backend."""

from __future__ import annotations

from io import BytesIO
from typing import Protocol

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas


class TextSurface(Protocol):
    """Measurement and drawing primitives the layout engine relies on.

    All ``y`` coordinates are top-down: ``0`` is the top edge of the page.
    """

    def measure_width(self, text: str, font: str, size: float) -> float: ...

    def set_font(self, font: str, size: float) -> None: ...

    def set_fill_gray(self, gray: float) -> None: ...

    def set_stroke(self, gray: float, width: float) -> None: ...

    def draw_text(self, text: str, x: float, y: float, *, align: str = "left") -> None: ...

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    def draw_image(
        self,
        image: object,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        opacity: float = 1.0,
    ) -> None: ...

    def new_page(self) -> None: ...

    def current_page_number(self) -> int: ...

    def finish(self) -> bytes: ...


class ReportLabSurface:
    """``TextSurface`` backed by a ReportLab canvas writing to memory.

    Args:
        page_width: Page width in points.
        page_height: Page height in points.
        compress: Whether page streams are deflate-compressed.

    Example:
        >>> surface = ReportLabSurface(612, 792)
        >>> surface.current_page_number()
        1
        >>> surface.draw_text("Contrato", 72, 72)
        >>> surface.finish()[:5]
        b'%PDF-'
    """

    def __init__(self, page_width: float, page_height: float, *, compress: bool = True) -> None:
        self.page_width = page_width
        self.page_height = page_height
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(page_width, page_height),
            pageCompression=1 if compress else 0,
        )

    def _flip(self, y: float) -> float:
        return self.page_height - y

    def measure_width(self, text: str, font: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, font, size)

    def set_font(self, font: str, size: float) -> None:
        self._canvas.setFont(font, size)

    def set_fill_gray(self, gray: float) -> None:
        self._canvas.setFillGray(gray)

    def set_stroke(self, gray: float, width: float) -> None:
        self._canvas.setStrokeGray(gray)
        self._canvas.setLineWidth(width)

    def draw_text(self, text: str, x: float, y: float, *, align: str = "left") -> None:
        if align == "center":
            self._canvas.drawCentredString(x, self._flip(y), text)
        elif align == "right":
            self._canvas.drawRightString(x, self._flip(y), text)
        else:
            self._canvas.drawString(x, self._flip(y), text)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._canvas.line(x1, self._flip(y1), x2, self._flip(y2))

    def draw_image(
        self,
        image: ImageReader | str,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        opacity: float = 1.0,
    ) -> None:
        self._canvas.saveState()
        self._canvas.setFillAlpha(opacity)
        self._canvas.setStrokeAlpha(opacity)
        self._canvas.drawImage(
            image,
            x,
            self._flip(y + height),
            width=width,
            height=height,
            mask="auto",
        )
        self._canvas.restoreState()

    def new_page(self) -> None:
        self._canvas.showPage()

    def current_page_number(self) -> int:
        return self._canvas.getPageNumber()

    def finish(self) -> bytes:
        self._canvas.save()
        return self._buffer.getvalue()
