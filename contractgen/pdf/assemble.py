from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .backend import ImageDecodeError, PdfBackend
from .blocks import Document, Section
from .context import RenderContext, new_context
from .finisher import stamp_footers
from .renderers import render_block, render_section_title
from .signature import render_signature_block
from .styles import FONT_BOLD, FONT_REGULAR, SECTION_GAP, color

logger = logging.getLogger(__name__)

LOGO_SIZE = 25.0
HEADER_HEIGHT = 35.0


class DocumentPhase(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_SECTION = "IN_SECTION"
    IN_SIGNATURE_BLOCK = "IN_SIGNATURE_BLOCK"
    FINALIZED = "FINALIZED"


@dataclass(frozen=True)
class RenderedDocument:
    data: bytes
    page_count: int


def format_long_date(value) -> str:
    return f"{value:%B} {value.day}, {value.year}"


class DocumentAssembler:
    """
    Drives one ``Document`` through the layout engine.

    The assembler owns the backend and the render context for the whole run;
    neither is shared or kept once ``finalize`` has returned the bytes.
    """

    def __init__(
        self,
        document: Document,
        logo: Optional[bytes] = None,
        brand_text: str = "",
        backend: Optional[PdfBackend] = None,
    ) -> None:
        self.document = document
        self.logo = logo
        self.brand_text = brand_text
        self.backend = backend or PdfBackend(title=document.header.title, author=document.issuer.entity_name)
        self.ctx: Optional[RenderContext] = None
        self.phase = DocumentPhase.NOT_STARTED
        self.section_index: Optional[int] = None

    # -- header --------------------------------------------------------

    def _draw_logo(self, ctx: RenderContext) -> None:
        pdf = ctx.backend
        if self.logo:
            try:
                pdf.image(pdf.load_image(self.logo), ctx.margin, ctx.y, LOGO_SIZE, LOGO_SIZE)
                return
            except ImageDecodeError as exc:
                logger.warning("Logo could not be embedded, using text mark: %s", exc)
        pdf.set_font(FONT_BOLD, 18)
        pdf.set_fill_color(color("primary"))
        pdf.text(ctx.margin, ctx.y + 15, self.brand_text or self.document.issuer.entity_name)

    def _draw_header(self, ctx: RenderContext) -> None:
        pdf = ctx.backend
        header = self.document.header
        right_x = ctx.margin + ctx.content_width
        center_x = ctx.margin + ctx.content_width / 2

        self._draw_logo(ctx)

        pdf.set_font(FONT_REGULAR, 9)
        pdf.set_fill_color(color("muted_text"))
        pdf.text(right_x, ctx.y + 5, f"Document #: {header.document_id}", align="right")
        pdf.text(right_x, ctx.y + 10, f"Date: {format_long_date(header.issued_on)}", align="right")

        pdf.set_font(FONT_BOLD, 9)
        pdf.set_fill_color(color("signed" if self.document.signed else "draft"))
        pdf.text(right_x, ctx.y + 16, self.document.status, align="right")
        ctx.advance(HEADER_HEIGHT)

        pdf.set_stroke_color(color("border"))
        pdf.set_line_width(0.5)
        pdf.line(ctx.margin, ctx.y, right_x, ctx.y)
        ctx.advance(10)

        pdf.set_font(FONT_BOLD, 24)
        pdf.set_fill_color(color("dark_text"))
        pdf.text(center_x, ctx.y, header.title, align="center")
        ctx.advance(8)

        if header.subtitle:
            pdf.set_font(FONT_REGULAR, 10)
            pdf.set_fill_color(color("muted_text"))
            pdf.text(center_x, ctx.y, header.subtitle, align="center")
        ctx.advance(15)

    # -- phases --------------------------------------------------------

    def _require(self, *allowed: DocumentPhase) -> None:
        if self.phase not in allowed:
            raise RuntimeError(f"Cannot continue from phase {self.phase.value}")

    def begin(self) -> RenderContext:
        self._require(DocumentPhase.NOT_STARTED)
        if self.ctx is not None:
            raise RuntimeError("Document already started")
        self.ctx = new_context(self.backend)
        self._draw_header(self.ctx)
        return self.ctx

    def render_section(self, index: int, section: Section) -> None:
        self._require(DocumentPhase.NOT_STARTED, DocumentPhase.IN_SECTION)
        if self.ctx is None:
            self.begin()
        if self.section_index is not None and index <= self.section_index:
            raise RuntimeError(f"Section {index} rendered out of order")
        self.phase = DocumentPhase.IN_SECTION
        self.section_index = index

        if section.title:
            render_section_title(self.ctx, section.title)
        for block in section.blocks:
            render_block(self.ctx, block)
        self.ctx.advance(SECTION_GAP)

    def render_signature_block(self) -> None:
        self._require(DocumentPhase.NOT_STARTED, DocumentPhase.IN_SECTION)
        if self.ctx is None:
            self.begin()
        self.phase = DocumentPhase.IN_SIGNATURE_BLOCK
        render_signature_block(self.ctx, self.document)

    def finalize(self) -> RenderedDocument:
        self._require(DocumentPhase.IN_SIGNATURE_BLOCK)
        total = stamp_footers(self.backend, self.document.footer_title, self.document.footer_right)
        data = self.backend.to_bytes()
        self.phase = DocumentPhase.FINALIZED
        self.ctx = None
        logger.debug("Rendered %s (%s, %d pages)", self.document.header.document_id, self.document.status, total)
        return RenderedDocument(data=data, page_count=total)

    def run(self) -> RenderedDocument:
        for index, section in enumerate(self.document.sections):
            self.render_section(index, section)
        self.render_signature_block()
        return self.finalize()


def assemble(document: Document, logo: Optional[bytes] = None, brand_text: str = "") -> RenderedDocument:
    return DocumentAssembler(document, logo=logo, brand_text=brand_text).run()
