from __future__ import annotations

from typing import List

from .blocks import (
    BulletList,
    CheckboxLine,
    ContentBlock,
    Footnote,
    LabelValue,
    MinorHeading,
    Paragraph,
    Spacer,
    SubsectionHeading,
)
from .context import RenderContext, ensure_room
from .styles import (
    BLOCK_GAP,
    BODY_SIZE,
    BULLET_GLYPH,
    BULLET_INDENT,
    BULLET_TEXT_GAP,
    CHECKBOX_ADVANCE,
    CHECKBOX_SIZE,
    CHECKBOX_TEXT_GAP,
    FONT_BOLD,
    FONT_BOLD_ITALIC,
    FONT_ITALIC,
    FONT_REGULAR,
    FOOTNOTE_SIZE,
    LABEL_GUTTER,
    LINE_HEIGHT,
    MINOR_HEADING_ADVANCE,
    MINOR_HEADING_SIZE,
    ROW_HEIGHT,
    SECTION_TITLE_ADVANCE,
    SECTION_TITLE_RULE_OFFSET,
    SECTION_TITLE_SIZE,
    SUBSECTION_ADVANCE,
    SUBSECTION_SIZE,
    color,
)
from .wrap import wrap_text

# tallest first row any block can start with
FOLLOWING_ROW = max(ROW_HEIGHT, CHECKBOX_ADVANCE)


def _wrap(ctx: RenderContext, text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    return wrap_text(text, font_name, font_size, max_width, ctx.backend.measure)


def _rows_height(lines: List[str], first: float) -> float:
    return first + (len(lines) - 1) * LINE_HEIGHT


def heading_room(advance: float) -> float:
    # the heading plus the first row after it, so a heading never ends a page
    return advance + FOLLOWING_ROW


def section_title_room() -> float:
    # a title may be followed directly by a subsection heading and its first row
    return SECTION_TITLE_ADVANCE + heading_room(SUBSECTION_ADVANCE)


def _flow_lines(ctx: RenderContext, lines: List[str], x: float) -> None:
    pdf = ctx.backend
    for line in lines:
        ensure_room(ctx, ROW_HEIGHT)
        pdf.text(x, ctx.y, line)
        ctx.advance(LINE_HEIGHT)


def render_section_title(ctx: RenderContext, title: str) -> None:
    ensure_room(ctx, section_title_room())
    pdf = ctx.backend

    pdf.set_font(FONT_BOLD, SECTION_TITLE_SIZE)
    pdf.set_fill_color(color("primary"))
    pdf.text(ctx.margin, ctx.y, title.upper())
    ctx.advance(SECTION_TITLE_RULE_OFFSET)

    pdf.set_stroke_color(color("primary"))
    pdf.set_line_width(0.4)
    pdf.line(ctx.margin, ctx.y, ctx.margin + ctx.content_width, ctx.y)
    ctx.advance(SECTION_TITLE_ADVANCE - SECTION_TITLE_RULE_OFFSET)


def render_paragraph(ctx: RenderContext, block: Paragraph) -> None:
    pdf = ctx.backend
    pdf.set_font(FONT_REGULAR, BODY_SIZE)
    pdf.set_fill_color(color("dark_text"))
    _flow_lines(ctx, _wrap(ctx, block.text, FONT_REGULAR, BODY_SIZE, ctx.content_width), ctx.margin)
    ctx.advance(BLOCK_GAP)


def _render_heading(ctx: RenderContext, text: str, font_name: str, font_size: float, advance: float) -> None:
    ensure_room(ctx, heading_room(advance))
    pdf = ctx.backend
    pdf.set_font(font_name, font_size)
    pdf.set_fill_color(color("dark_text"))
    pdf.text(ctx.margin, ctx.y, text)
    ctx.advance(advance)


def render_subsection_heading(ctx: RenderContext, block: SubsectionHeading) -> None:
    _render_heading(ctx, block.text, FONT_BOLD, SUBSECTION_SIZE, SUBSECTION_ADVANCE)


def render_minor_heading(ctx: RenderContext, block: MinorHeading) -> None:
    _render_heading(ctx, block.text, FONT_BOLD_ITALIC, MINOR_HEADING_SIZE, MINOR_HEADING_ADVANCE)


def render_label_value(ctx: RenderContext, block: LabelValue) -> None:
    pdf = ctx.backend
    label_w = pdf.measure(block.label, FONT_BOLD, BODY_SIZE)
    value_x = ctx.margin + label_w + LABEL_GUTTER
    value_lines = _wrap(ctx, block.value, FONT_REGULAR, BODY_SIZE, ctx.margin + ctx.content_width - value_x)

    ensure_room(ctx, _rows_height(value_lines, ROW_HEIGHT))

    pdf.set_font(FONT_BOLD, BODY_SIZE)
    pdf.set_fill_color(color("dark_text"))
    pdf.text(ctx.margin, ctx.y, block.label)

    pdf.set_font(FONT_REGULAR, BODY_SIZE)
    for i, line in enumerate(value_lines):
        pdf.text(value_x, ctx.y + i * LINE_HEIGHT, line)
    ctx.advance(_rows_height(value_lines, ROW_HEIGHT))


def render_bullet_list(ctx: RenderContext, block: BulletList) -> None:
    pdf = ctx.backend
    bullet_x = ctx.margin + BULLET_INDENT
    text_x = bullet_x + BULLET_TEXT_GAP
    text_w = ctx.content_width - BULLET_INDENT - BULLET_TEXT_GAP

    pdf.set_font(FONT_REGULAR, BODY_SIZE)
    pdf.set_fill_color(color("dark_text"))

    for item in block.items:
        lines = _wrap(ctx, item, FONT_REGULAR, BODY_SIZE, text_w)
        for i, line in enumerate(lines):
            ensure_room(ctx, ROW_HEIGHT)
            if i == 0:
                pdf.text(bullet_x, ctx.y, BULLET_GLYPH)
            pdf.text(text_x, ctx.y, line)
            ctx.advance(LINE_HEIGHT)
    ctx.advance(BLOCK_GAP)


def _draw_check_mark(ctx: RenderContext, box_x: float, box_y: float) -> None:
    pdf = ctx.backend
    pdf.set_stroke_color(color("primary"))
    pdf.set_line_width(0.5)
    s = CHECKBOX_SIZE
    pdf.line(box_x + s * 0.2, box_y + s * 0.55, box_x + s * 0.42, box_y + s * 0.8)
    pdf.line(box_x + s * 0.42, box_y + s * 0.8, box_x + s * 0.82, box_y + s * 0.2)


def render_checkbox_line(ctx: RenderContext, block: CheckboxLine) -> None:
    pdf = ctx.backend
    box_x = ctx.margin + BULLET_INDENT
    text_x = box_x + CHECKBOX_SIZE + CHECKBOX_TEXT_GAP
    lines = _wrap(ctx, block.text, FONT_REGULAR, BODY_SIZE, ctx.margin + ctx.content_width - text_x)

    ensure_room(ctx, _rows_height(lines, CHECKBOX_ADVANCE))

    box_y = ctx.y - 3.0
    pdf.set_stroke_color(color("dark_text"))
    pdf.set_line_width(0.3)
    pdf.rect(box_x, box_y, CHECKBOX_SIZE, CHECKBOX_SIZE)
    if block.checked:
        _draw_check_mark(ctx, box_x, box_y)

    pdf.set_font(FONT_REGULAR, BODY_SIZE)
    pdf.set_fill_color(color("dark_text"))
    for i, line in enumerate(lines):
        pdf.text(text_x, ctx.y + i * LINE_HEIGHT, line)
    ctx.advance(_rows_height(lines, CHECKBOX_ADVANCE))


def render_footnote(ctx: RenderContext, block: Footnote) -> None:
    pdf = ctx.backend
    pdf.set_font(FONT_ITALIC, FOOTNOTE_SIZE)
    pdf.set_fill_color(color("muted_text"))
    _flow_lines(ctx, _wrap(ctx, block.text, FONT_ITALIC, FOOTNOTE_SIZE, ctx.content_width), ctx.margin)
    ctx.advance(BLOCK_GAP)


def render_spacer(ctx: RenderContext, block: Spacer) -> None:
    # no room check: the next block decides whether it needs a new page
    ctx.advance(block.height)


def render_block(ctx: RenderContext, block: ContentBlock) -> None:
    match block:
        case Paragraph():
            render_paragraph(ctx, block)
        case SubsectionHeading():
            render_subsection_heading(ctx, block)
        case MinorHeading():
            render_minor_heading(ctx, block)
        case LabelValue():
            render_label_value(ctx, block)
        case BulletList():
            render_bullet_list(ctx, block)
        case CheckboxLine():
            render_checkbox_line(ctx, block)
        case Footnote():
            render_footnote(ctx, block)
        case Spacer():
            render_spacer(ctx, block)
        case _:
            raise TypeError(f"Unsupported content block: {type(block).__name__}")
