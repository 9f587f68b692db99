from __future__ import annotations

from typing import Dict

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm


# All layout values are millimetres measured from the top-left corner.
# Font sizes stay in points, as the PDF expects them.
PAGE_WIDTH = float(round(A4[0] / mm))
PAGE_HEIGHT = float(round(A4[1] / mm))
MARGIN = 20.0
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
FOOTER_RESERVE = 30.0
FOOTER_BASELINE = PAGE_HEIGHT - 15.0

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"
FONT_BOLD_ITALIC = "Helvetica-BoldOblique"

BODY_SIZE = 9.5
FOOTNOTE_SIZE = 9.0
SUBSECTION_SIZE = 10.0
MINOR_HEADING_SIZE = 9.5
SECTION_TITLE_SIZE = 11.5
FOOTER_SIZE = 8.0

LINE_HEIGHT = 4.5
ROW_HEIGHT = 5.0
BLOCK_GAP = 1.0
SPACER_HEIGHT = 4.0
SECTION_GAP = 4.0

SUBSECTION_ADVANCE = 5.5
MINOR_HEADING_ADVANCE = 5.0
SECTION_TITLE_ADVANCE = 7.0
SECTION_TITLE_RULE_OFFSET = 2.0

BULLET_INDENT = 5.0
BULLET_TEXT_GAP = 3.0
BULLET_GLYPH = "•"
PLACEHOLDER = "_______________"
LABEL_GUTTER = 1.5
CHECKBOX_SIZE = 3.5
CHECKBOX_TEXT_GAP = 2.5
CHECKBOX_ADVANCE = 5.5

PALETTE: Dict[str, str] = {
    "primary": "#3B82F6",
    "dark_text": "#1E293B",
    "muted_text": "#64748B",
    "light_gray": "#F1F5F9",
    "white": "#FFFFFF",
    "border": "#E2E8F0",
    "signed": "#22C55E",
    "draft": "#F59E0B",
}


def _hex(value: str, default=colors.black) -> colors.Color:
    if not value:
        return default
    try:
        return colors.HexColor("#" + str(value).lstrip("#"))
    except ValueError:
        return default


def color(name: str) -> colors.Color:
    return _hex(PALETTE.get(name, ""))
