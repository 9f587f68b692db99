from __future__ import annotations

import logging
from dataclasses import dataclass

from .backend import Page, PdfBackend
from .styles import CONTENT_WIDTH, FOOTER_RESERVE, MARGIN, PAGE_HEIGHT

logger = logging.getLogger(__name__)


@dataclass
class RenderContext:
    """Layout cursor threaded through every render call for one document."""

    backend: PdfBackend
    y: float = MARGIN
    margin: float = MARGIN
    content_width: float = CONTENT_WIDTH
    page_height: float = PAGE_HEIGHT
    footer_reserve: float = FOOTER_RESERVE
    top_margin: float = MARGIN

    @property
    def page(self) -> Page:
        return self.backend.current_page

    @property
    def bottom_limit(self) -> float:
        return self.page_height - self.footer_reserve

    def advance(self, height: float) -> None:
        self.y += height


def new_context(backend: PdfBackend) -> RenderContext:
    backend.add_page()
    return RenderContext(backend=backend, page_height=backend.page_height)


def ensure_room(ctx: RenderContext, needed: float) -> bool:
    """
    Start a new page when ``needed`` millimetres do not fit above the footer
    reserve. Returns True when a page break happened.
    """
    if ctx.y + needed <= ctx.bottom_limit:
        return False
    ctx.backend.add_page()
    ctx.y = ctx.top_margin
    logger.debug("Page break before %.1fmm block, now on page %d", needed, ctx.page.number)
    return True
