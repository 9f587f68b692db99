from __future__ import annotations

import io
import unittest

import PIL.Image

from contractgen.pdf.backend import ImageDecodeError, PdfBackend
from contractgen.pdf.context import ensure_room, new_context
from contractgen.pdf.styles import MARGIN, color


def png_bytes(size=(40, 20)) -> bytes:
    buf = io.BytesIO()
    PIL.Image.new("RGB", size, "white").save(buf, format="PNG")
    return buf.getvalue()


class BackendTests(unittest.TestCase):
    def setUp(self) -> None:
        self.pdf = PdfBackend()

    def test_current_page_requires_a_page(self) -> None:
        with self.assertRaises(RuntimeError):
            self.pdf.current_page

    def test_unknown_alignment_rejected(self) -> None:
        self.pdf.add_page()
        with self.assertRaises(ValueError):
            self.pdf.text(10, 10, "x", align="justify")

    def test_set_page_rejects_foreign_page(self) -> None:
        other = PdfBackend()
        page = other.add_page()
        self.pdf.add_page()
        with self.assertRaises(ValueError):
            self.pdf.set_page(page)

    def test_new_page_carries_graphics_state(self) -> None:
        self.pdf.add_page()
        self.pdf.set_font("Helvetica-Bold", 12)
        self.pdf.set_fill_color(color("primary"))
        page = self.pdf.add_page()
        self.assertEqual(page.ops[0].args, ("Helvetica-Bold", 12.0))
        self.assertEqual(page.ops[1].args, tuple(color("primary").rgb()))

    def test_draws_land_on_selected_page(self) -> None:
        first = self.pdf.add_page()
        second = self.pdf.add_page()
        self.pdf.set_page(first)
        self.pdf.text(10, 10, "back on one")
        self.assertIn("back on one", first.texts())
        self.assertNotIn("back on one", second.texts())

    def test_measure_scales_with_size(self) -> None:
        small = self.pdf.measure("Pilot Agreement", "Helvetica", 8)
        large = self.pdf.measure("Pilot Agreement", "Helvetica", 16)
        self.assertGreater(small, 0)
        self.assertAlmostEqual(large, small * 2)

    def test_load_image_rejects_garbage(self) -> None:
        with self.assertRaises(ImageDecodeError):
            self.pdf.load_image(b"")
        with self.assertRaises(ImageDecodeError):
            self.pdf.load_image(b"not an image at all")

    def test_to_bytes_writes_pdf_with_image(self) -> None:
        self.pdf.add_page()
        self.pdf.text(20, 20, "Hello")
        self.pdf.image(self.pdf.load_image(png_bytes()), 20, 30, 40, 20)
        self.pdf.add_page()
        data = self.pdf.to_bytes()
        self.assertTrue(data.startswith(b"%PDF"))


class ContextTests(unittest.TestCase):
    def test_ensure_room_keeps_page_when_block_fits(self) -> None:
        ctx = new_context(PdfBackend())
        self.assertEqual(ctx.y, MARGIN)
        self.assertFalse(ensure_room(ctx, 10))
        ctx.y = ctx.bottom_limit - 5
        self.assertFalse(ensure_room(ctx, 5))
        self.assertEqual(ctx.backend.page_count, 1)

    def test_ensure_room_breaks_and_resets_cursor(self) -> None:
        ctx = new_context(PdfBackend())
        ctx.y = ctx.bottom_limit - 2
        self.assertTrue(ensure_room(ctx, 5))
        self.assertEqual(ctx.y, MARGIN)
        self.assertEqual(ctx.backend.page_count, 2)
        self.assertIs(ctx.page, ctx.backend.pages[-1])


if __name__ == "__main__":
    unittest.main()
