from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import PIL.Image
from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from .styles import FONT_REGULAR, PAGE_HEIGHT, PAGE_WIDTH

logger = logging.getLogger(__name__)

ALIGNMENTS = ("left", "center", "right")


class ImageDecodeError(ValueError):
    """Raised when image bytes cannot be decoded for embedding."""


@dataclass(frozen=True)
class DrawOp:
    kind: str
    args: Tuple


@dataclass
class Page:
    """A page handle. Draw calls are recorded here and replayed on save."""

    number: int
    ops: List[DrawOp] = field(default_factory=list)

    def texts(self) -> List[str]:
        return [op.args[2] for op in self.ops if op.kind == "text"]

    def ops_of(self, kind: str) -> List[DrawOp]:
        return [op for op in self.ops if op.kind == kind]


class PdfBackend:
    """
    Page-description backend on top of ReportLab.

    Coordinates are millimetres from the top-left corner of the page. Every
    draw call lands on the current page; pages stay open until ``to_bytes``
    so earlier pages can be revisited with ``set_page``.
    """

    def __init__(
        self,
        page_width: float = PAGE_WIDTH,
        page_height: float = PAGE_HEIGHT,
        title: str = "",
        author: str = "",
    ) -> None:
        self.page_width = float(page_width)
        self.page_height = float(page_height)
        self.title = title
        self.author = author
        self.pages: List[Page] = []
        self._current: Optional[Page] = None
        self._font: Tuple[str, float] = (FONT_REGULAR, 10.0)
        self._fill: Tuple[float, float, float] = (0.0, 0.0, 0.0)
        self._stroke: Tuple[float, float, float] = (0.0, 0.0, 0.0)
        self._line_width = 0.2

    # -- pages ---------------------------------------------------------

    def add_page(self) -> Page:
        page = Page(number=len(self.pages) + 1)
        self.pages.append(page)
        self._current = page
        # the canvas resets graphics state on every page
        page.ops.append(DrawOp("font", self._font))
        page.ops.append(DrawOp("fill", self._fill))
        page.ops.append(DrawOp("stroke", self._stroke))
        page.ops.append(DrawOp("line_width", (self._line_width,)))
        return page

    @property
    def current_page(self) -> Page:
        if self._current is None:
            raise RuntimeError("No page has been added yet")
        return self._current

    def set_page(self, page: Page) -> None:
        if not any(p is page for p in self.pages):
            raise ValueError(f"Page {page.number} does not belong to this document")
        self._current = page

    @property
    def page_count(self) -> int:
        return len(self.pages)

    # -- state ---------------------------------------------------------

    def _record(self, kind: str, *args) -> None:
        self.current_page.ops.append(DrawOp(kind, tuple(args)))

    def set_font(self, font_name: str, font_size: float) -> None:
        self._font = (font_name, float(font_size))
        self._record("font", *self._font)

    def set_fill_color(self, value: colors.Color) -> None:
        self._fill = tuple(value.rgb())
        self._record("fill", *self._fill)

    def set_stroke_color(self, value: colors.Color) -> None:
        self._stroke = tuple(value.rgb())
        self._record("stroke", *self._stroke)

    def set_line_width(self, width: float) -> None:
        self._line_width = float(width)
        self._record("line_width", self._line_width)

    # -- drawing -------------------------------------------------------

    def measure(self, text: str, font_name: Optional[str] = None, font_size: Optional[float] = None) -> float:
        name = font_name or self._font[0]
        size = self._font[1] if font_size is None else font_size
        return pdfmetrics.stringWidth(text or "", name, size) / mm

    def text(self, x: float, y: float, value: str, align: str = "left") -> None:
        if align not in ALIGNMENTS:
            raise ValueError(f"Unknown text alignment: {align}")
        self._record("text", float(x), float(y), str(value), align)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._record("line", float(x1), float(y1), float(x2), float(y2))

    def rect(self, x: float, y: float, w: float, h: float, fill: bool = False, stroke: bool = True) -> None:
        self._record("rect", float(x), float(y), float(w), float(h), bool(fill), bool(stroke))

    def load_image(self, data: bytes) -> ImageReader:
        if not data:
            raise ImageDecodeError("Empty image data")
        try:
            img = PIL.Image.open(io.BytesIO(data))
            img.load()
        except (OSError, ValueError) as exc:
            raise ImageDecodeError(f"Cannot decode image: {exc}") from exc
        return ImageReader(img)

    def image(self, reader: ImageReader, x: float, y: float, w: float, h: float) -> None:
        self._record("image", reader, float(x), float(y), float(w), float(h))

    # -- output --------------------------------------------------------

    def _replay(self, canv: canvas.Canvas, page: Page) -> None:
        ph = self.page_height
        for op in page.ops:
            a = op.args
            if op.kind == "font":
                canv.setFont(a[0], a[1])
            elif op.kind == "fill":
                canv.setFillColorRGB(*a)
            elif op.kind == "stroke":
                canv.setStrokeColorRGB(*a)
            elif op.kind == "line_width":
                canv.setLineWidth(a[0] * mm)
            elif op.kind == "text":
                x, y, value, align = a
                if align == "center":
                    canv.drawCentredString(x * mm, (ph - y) * mm, value)
                elif align == "right":
                    canv.drawRightString(x * mm, (ph - y) * mm, value)
                else:
                    canv.drawString(x * mm, (ph - y) * mm, value)
            elif op.kind == "line":
                x1, y1, x2, y2 = a
                canv.line(x1 * mm, (ph - y1) * mm, x2 * mm, (ph - y2) * mm)
            elif op.kind == "rect":
                x, y, w, h, fill, stroke = a
                canv.rect(x * mm, (ph - y - h) * mm, w * mm, h * mm, stroke=int(stroke), fill=int(fill))
            elif op.kind == "image":
                reader, x, y, w, h = a
                canv.drawImage(
                    reader,
                    x * mm,
                    (ph - y - h) * mm,
                    w * mm,
                    h * mm,
                    mask="auto",
                    preserveAspectRatio=True,
                    anchor="sw",
                )
            else:
                raise ValueError(f"Unknown draw operation: {op.kind}")

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        # invariant output keeps identical input byte-identical
        canv = canvas.Canvas(buf, pagesize=(self.page_width * mm, self.page_height * mm), invariant=1)
        if self.title:
            canv.setTitle(self.title)
        if self.author:
            canv.setAuthor(self.author)
        for page in self.pages:
            self._replay(canv, page)
            canv.showPage()
        canv.save()
        logger.debug("Serialized %d pages", len(self.pages))
        return buf.getvalue()
