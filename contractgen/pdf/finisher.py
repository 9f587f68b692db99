from __future__ import annotations

from .backend import PdfBackend
from .styles import FONT_REGULAR, FOOTER_BASELINE, FOOTER_SIZE, MARGIN, color

FOOTER_DIVIDER_GAP = 5.0


def page_stamp(index: int, total: int) -> str:
    return f"Page {index} / {total}"


def stamp_footers(pdf: PdfBackend, running_title: str, right_text: str = "") -> int:
    """
    Second pass: now that the page count is known, draw the footer on every
    page. Returns the total number of pages stamped.
    """
    pages = list(pdf.pages)
    total = len(pages)
    left_x = MARGIN
    right_x = pdf.page_width - MARGIN
    center_x = pdf.page_width / 2
    divider_y = FOOTER_BASELINE - FOOTER_DIVIDER_GAP

    for index, page in enumerate(pages, start=1):
        pdf.set_page(page)

        pdf.set_stroke_color(color("border"))
        pdf.set_line_width(0.3)
        pdf.line(left_x, divider_y, right_x, divider_y)

        pdf.set_font(FONT_REGULAR, FOOTER_SIZE)
        pdf.set_fill_color(color("muted_text"))
        pdf.text(center_x, FOOTER_BASELINE, page_stamp(index, total), align="center")
        if running_title:
            pdf.text(left_x, FOOTER_BASELINE, running_title)
        if right_text:
            pdf.text(right_x, FOOTER_BASELINE, right_text, align="right")

    return total
