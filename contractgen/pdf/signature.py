from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from reportlab.lib.utils import ImageReader

from .backend import ImageDecodeError, PdfBackend
from .blocks import Document, SignatureParty
from .context import RenderContext, ensure_room
from .styles import FONT_BOLD, FONT_ITALIC, FONT_REGULAR, FOOTER_SIZE, PLACEHOLDER, color

logger = logging.getLogger(__name__)

COLUMN_GUTTER = 10.0
RULE_MAX_WIDTH = 80.0
IMAGE_MAX_WIDTH = 60.0

# Row offsets from the shared baseline; both columns use the same table.
ENTITY_OFFSET = 0.0
ROLE_OFFSET = 4.0
SIGNATURE_AREA_OFFSET = 6.0
SIGNATURE_AREA_HEIGHT = 16.0
SIGNATURE_RULE_OFFSET = 24.0
NAME_OFFSET = 35.0
TITLE_OFFSET = 47.0
DATE_OFFSET = 59.0
SIGNED_NOTE_OFFSET = 70.0
COLUMN_HEIGHT = 72.0

VALUE_TO_RULE = 1.5
RULE_TO_CAPTION = 4.0

LEAD_GAP = 5.0
DIVIDER_TO_HEADING = 12.0
HEADING_TO_COLUMNS = 10.0
BLOCK_HEIGHT = LEAD_GAP + DIVIDER_TO_HEADING + HEADING_TO_COLUMNS + COLUMN_HEIGHT


def _fit_font(pdf: PdfBackend, text: str, font_name: str, base_size: float, max_width: float) -> float:
    """Shrink the font size until ``text`` fits ``max_width``."""
    size = float(base_size)
    while size > 7.0:
        if pdf.measure(text, font_name, size) <= max_width:
            return size
        size -= 0.5
    return 7.0


def _or_placeholder(value: str) -> str:
    return (value or "").strip() or PLACEHOLDER


def format_signed_at(value: datetime) -> str:
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{value:%B} {value.day}, {value.year} at {hour}:{value:%M} {meridiem}"


def column_positions(ctx: RenderContext) -> tuple[float, float, float]:
    column_width = (ctx.content_width - COLUMN_GUTTER) / 2
    left_x = ctx.margin
    right_x = ctx.margin + column_width + COLUMN_GUTTER
    return left_x, right_x, column_width


def _captioned_rule(pdf: PdfBackend, x: float, y: float, width: float, value: Optional[str], caption: str) -> None:
    """Value on the line (when given), the rule itself, then a caption below."""
    rule_w = min(width, RULE_MAX_WIDTH)
    if value is not None:
        text = _or_placeholder(value)
        size = _fit_font(pdf, text, FONT_REGULAR, 10, rule_w)
        pdf.set_font(FONT_REGULAR, size)
        pdf.set_fill_color(color("dark_text"))
        pdf.text(x, y - VALUE_TO_RULE, text)

    pdf.set_stroke_color(color("dark_text"))
    pdf.set_line_width(0.3)
    pdf.line(x, y, x + rule_w, y)

    pdf.set_font(FONT_REGULAR, FOOTER_SIZE)
    pdf.set_fill_color(color("muted_text"))
    pdf.text(x, y + RULE_TO_CAPTION, caption)


def _draw_signature_image(pdf: PdfBackend, data: bytes, x: float, top: float, width: float) -> None:
    try:
        reader: ImageReader = pdf.load_image(data)
    except ImageDecodeError as exc:
        logger.warning("Signature image could not be embedded: %s", exc)
        pdf.set_font(FONT_ITALIC, FOOTER_SIZE)
        pdf.set_fill_color(color("muted_text"))
        pdf.text(x, top + SIGNATURE_AREA_HEIGHT - 2.0, "[Signature image unavailable]")
        return
    pdf.image(reader, x, top, min(width, IMAGE_MAX_WIDTH), SIGNATURE_AREA_HEIGHT)


def _draw_column(
    ctx: RenderContext,
    x: float,
    base_y: float,
    width: float,
    party: SignatureParty,
    role: str,
    signature_image: Optional[bytes] = None,
    signed_note: str = "",
) -> None:
    pdf = ctx.backend

    entity = _or_placeholder(party.entity_name)
    pdf.set_font(FONT_BOLD, _fit_font(pdf, entity, FONT_BOLD, 10, width))
    pdf.set_fill_color(color("dark_text"))
    pdf.text(x, base_y + ENTITY_OFFSET, entity)

    pdf.set_font(FONT_REGULAR, FOOTER_SIZE)
    pdf.set_fill_color(color("muted_text"))
    pdf.text(x, base_y + ROLE_OFFSET, role)

    if signature_image is not None:
        _draw_signature_image(pdf, signature_image, x, base_y + SIGNATURE_AREA_OFFSET, width)

    _captioned_rule(pdf, x, base_y + SIGNATURE_RULE_OFFSET, width, None, "Signature")
    _captioned_rule(pdf, x, base_y + NAME_OFFSET + VALUE_TO_RULE, width, party.signer_name, "Name")
    _captioned_rule(pdf, x, base_y + TITLE_OFFSET + VALUE_TO_RULE, width, party.signer_title, "Title")
    _captioned_rule(pdf, x, base_y + DATE_OFFSET + VALUE_TO_RULE, width, party.signed_on, "Date")

    if signed_note:
        pdf.set_font(FONT_ITALIC, FOOTER_SIZE)
        pdf.set_fill_color(color("muted_text"))
        pdf.text(x, base_y + SIGNED_NOTE_OFFSET, signed_note)


def render_signature_block(ctx: RenderContext, document: Document) -> float:
    """
    Draw the closing divider, heading and both signature columns.

    The whole block is deferred to a new page when it does not fit; the check
    happens once, before either column draws. Returns the shared baseline.
    """
    ensure_room(ctx, BLOCK_HEIGHT)
    pdf = ctx.backend

    ctx.advance(LEAD_GAP)
    pdf.set_stroke_color(color("border"))
    pdf.set_line_width(0.5)
    pdf.line(ctx.margin, ctx.y, ctx.margin + ctx.content_width, ctx.y)
    ctx.advance(DIVIDER_TO_HEADING)

    pdf.set_font(FONT_BOLD, 12)
    pdf.set_fill_color(color("dark_text"))
    pdf.text(ctx.margin, ctx.y, document.closing_title)
    ctx.advance(HEADING_TO_COLUMNS)

    base_y = ctx.y
    left_x, right_x, column_width = column_positions(ctx)

    _draw_column(ctx, left_x, base_y, column_width, document.issuer, "Provider")

    signature = document.signature
    signed_note = ""
    if signature is not None and signature.signed_at is not None:
        signed_note = f"Digitally signed: {format_signed_at(signature.signed_at)}"
    _draw_column(
        ctx,
        right_x,
        base_y,
        column_width,
        document.counterparty,
        "Client",
        signature_image=signature.image if signature is not None else None,
        signed_note=signed_note,
    )

    ctx.y = base_y + COLUMN_HEIGHT
    return base_y
