from __future__ import annotations

import pytest

from contractgen.pdf.backend import PdfBackend
from contractgen.pdf.blocks import (
    BulletList,
    CheckboxLine,
    Footnote,
    LabelValue,
    MinorHeading,
    Paragraph,
    Section,
    Spacer,
    SubsectionHeading,
)
from contractgen.pdf.context import RenderContext, new_context
from contractgen.pdf.renderers import render_block, render_section_title
from contractgen.pdf.styles import (
    BLOCK_GAP,
    BULLET_GLYPH,
    BULLET_INDENT,
    BULLET_TEXT_GAP,
    LINE_HEIGHT,
    MARGIN,
    SPACER_HEIGHT,
    SUBSECTION_ADVANCE,
)

LONG_TEXT = (
    "Client shall designate a point of contact for the duration of the pilot and shall make "
    "reasonable efforts to ensure staff are trained on the ordering workflow before go-live."
)


@pytest.fixture
def ctx() -> RenderContext:
    return new_context(PdfBackend())


def all_texts(ctx: RenderContext) -> list:
    return [text for page in ctx.backend.pages for text in page.texts()]


def test_paragraph_advances_by_its_lines(ctx) -> None:
    render_block(ctx, Paragraph("Short paragraph"))
    assert "Short paragraph" in ctx.page.texts()
    assert ctx.y == pytest.approx(MARGIN + LINE_HEIGHT + BLOCK_GAP)


def test_long_paragraph_wraps_inside_content_width(ctx) -> None:
    render_block(ctx, Paragraph(LONG_TEXT))
    lines = ctx.page.texts()
    assert len(lines) > 1
    assert " ".join(lines) == LONG_TEXT
    for line in lines:
        assert ctx.backend.measure(line, "Helvetica", 9.5) <= ctx.content_width


def test_cursor_never_moves_backwards(ctx) -> None:
    blocks = [
        SubsectionHeading("2.1 Covered Outlets"),
        Paragraph(LONG_TEXT),
        LabelValue("Start Date:", "October 19, 2026"),
        CheckboxLine(True, "No fees apply during the Pilot Term."),
        Footnote(LONG_TEXT),
        Spacer(),
    ]
    last = ctx.y
    for block in blocks:
        render_block(ctx, block)
        assert ctx.y >= last
        last = ctx.y


def test_section_title_is_upper_case(ctx) -> None:
    render_section_title(ctx, "1. Pilot Purpose")
    assert "1. PILOT PURPOSE" in ctx.page.texts()
    assert len(ctx.page.ops_of("line")) == 1


def test_heading_moves_with_following_row(ctx) -> None:
    ctx.y = ctx.bottom_limit - SUBSECTION_ADVANCE - 1
    render_block(ctx, SubsectionHeading("4.1 Client Responsibilities"))
    assert ctx.backend.page_count == 2
    assert "4.1 Client Responsibilities" in ctx.backend.pages[1].texts()
    assert "4.1 Client Responsibilities" not in ctx.backend.pages[0].texts()


def test_section_title_moves_with_following_subsection(ctx) -> None:
    ctx.y = ctx.bottom_limit - 13
    render_section_title(ctx, "4. Responsibilities")
    render_block(ctx, SubsectionHeading("4.1 Client Responsibilities"))
    first, second = ctx.backend.pages
    assert first.texts() == []
    assert second.texts() == ["4. RESPONSIBILITIES", "4.1 Client Responsibilities"]


def test_section_title_and_subsection_fit_exactly(ctx) -> None:
    ctx.y = ctx.bottom_limit - 18
    render_section_title(ctx, "4. Responsibilities")
    render_block(ctx, SubsectionHeading("4.1 Client Responsibilities"))
    assert ctx.backend.page_count == 1
    assert ctx.page.texts() == ["4. RESPONSIBILITIES", "4.1 Client Responsibilities"]


def test_minor_heading_moves_with_following_checkbox(ctx) -> None:
    ctx.y = ctx.bottom_limit - 10.2
    render_block(ctx, MinorHeading("5.1 No Fees"))
    render_block(ctx, CheckboxLine(True, "No fees apply during the Pilot Term."))
    first, second = ctx.backend.pages
    assert first.texts() == []
    assert second.texts() == ["5.1 No Fees", "No fees apply during the Pilot Term."]


def test_subsection_heading_moves_with_following_checkbox(ctx) -> None:
    ctx.y = ctx.bottom_limit - 10.8
    render_block(ctx, SubsectionHeading("2.3 Hardware Selection"))
    render_block(ctx, CheckboxLine(False, "No Daze Hardware Required"))
    first, second = ctx.backend.pages
    assert first.texts() == []
    assert second.texts() == ["2.3 Hardware Selection", "No Daze Hardware Required"]


def test_minor_heading_renders(ctx) -> None:
    render_block(ctx, MinorHeading("5.1 No Fees"))
    assert "5.1 No Fees" in ctx.page.texts()


def test_label_value_row_is_atomic(ctx) -> None:
    ctx.y = ctx.bottom_limit - 3
    render_block(ctx, LabelValue("Email:", "ops@example.com"))
    first, second = ctx.backend.pages
    assert first.texts() == []
    assert second.texts() == ["Email:", "ops@example.com"]


def test_long_label_value_stays_on_one_page(ctx) -> None:
    ctx.y = ctx.bottom_limit - 8
    render_block(ctx, LabelValue("Address:", LONG_TEXT))
    assert ctx.backend.page_count == 2
    assert ctx.backend.pages[0].texts() == []
    texts = ctx.backend.pages[1].texts()
    assert texts[0] == "Address:"
    assert " ".join(texts[1:]) == LONG_TEXT


def test_checkbox_line_is_atomic(ctx) -> None:
    ctx.y = ctx.bottom_limit - 2
    render_block(ctx, CheckboxLine(False, "No Daze Hardware Required"))
    first, second = ctx.backend.pages
    assert first.ops_of("rect") == []
    assert len(second.ops_of("rect")) == 1
    assert "No Daze Hardware Required" in second.texts()


def test_checked_box_draws_mark(ctx) -> None:
    render_block(ctx, CheckboxLine(True, "Selected"))
    assert len(ctx.page.ops_of("line")) == 2


def test_unchecked_box_has_no_mark(ctx) -> None:
    render_block(ctx, CheckboxLine(False, "Not selected"))
    assert ctx.page.ops_of("line") == []
    assert len(ctx.page.ops_of("rect")) == 1


def test_one_glyph_per_bullet_item(ctx) -> None:
    items = ["Short item", LONG_TEXT, "Another"]
    render_block(ctx, BulletList(items))
    texts = ctx.page.texts()
    assert texts.count(BULLET_GLYPH) == 3


def test_long_bullet_list_spans_pages_without_losing_lines(ctx) -> None:
    items = [f"Outlet {n:02d}: {LONG_TEXT}" for n in range(50)]
    render_block(ctx, BulletList(items))
    assert ctx.backend.page_count > 1

    text_x = ctx.margin + BULLET_INDENT + BULLET_TEXT_GAP
    glyphs = 0
    body_lines = []
    for page in ctx.backend.pages:
        for op in page.ops_of("text"):
            x, y, value, _ = op.args
            assert y <= ctx.bottom_limit
            if value == BULLET_GLYPH:
                glyphs += 1
            elif x == pytest.approx(text_x):
                body_lines.append(value)
    assert glyphs == 50
    assert " ".join(body_lines) == " ".join(items)


def test_footnote_renders_in_italic(ctx) -> None:
    render_block(ctx, Footnote("Daze acts solely as a payment facilitation agent."))
    fonts = [op.args[0] for op in ctx.page.ops_of("font")]
    assert "Helvetica-Oblique" in fonts
    assert "Daze acts solely as a payment facilitation agent." in ctx.page.texts()


def test_spacer_only_moves_cursor(ctx) -> None:
    before = len(ctx.page.ops)
    render_block(ctx, Spacer())
    assert ctx.y == pytest.approx(MARGIN + SPACER_HEIGHT)
    assert len(ctx.page.ops) == before
    render_block(ctx, Spacer(3))
    assert ctx.y == pytest.approx(MARGIN + SPACER_HEIGHT + 3)


def test_unknown_block_is_rejected(ctx) -> None:
    with pytest.raises(TypeError):
        render_block(ctx, "plain string")


def test_section_rejects_unknown_block() -> None:
    with pytest.raises(TypeError):
        Section(title="Bad", blocks=[Paragraph("ok"), {"type": "table"}])


def test_page_count_grows_with_content() -> None:
    counts = []
    for n in (1, 20, 60):
        ctx = new_context(PdfBackend())
        for _ in range(n):
            render_block(ctx, Paragraph(LONG_TEXT))
        counts.append(ctx.backend.page_count)
    assert counts == sorted(counts)
    assert counts[-1] > counts[0]
