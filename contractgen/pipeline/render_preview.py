from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

import fitz  # PyMuPDF

from ..storage import artifact_path


def _pick_preview_pages(page_count: int, limit: int = 3) -> List[int]:
    # first page plus the last one, which carries the signature block
    if page_count <= 0:
        return []
    if page_count <= limit:
        return list(range(page_count))
    return [0, 1, page_count - 1][:limit]


def _render_page_to_png(doc: fitz.Document, page_index: int, out_path: Path, min_px: int = 1600) -> None:
    page = doc.load_page(page_index)
    rect = page.rect
    zoom = max(2.0, min_px / float(min(rect.width, rect.height)))
    pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    pix.save(str(out_path))


def render_previews(
    slug: str,
    pdf_path: Path,
    base_dir: Path | None = None,
    pages: Sequence[int] | None = None,
) -> List[Path]:
    previews: List[Path] = []
    with fitz.open(str(pdf_path)) as doc:
        indexes = list(pages) if pages is not None else _pick_preview_pages(doc.page_count)
        for n, index in enumerate(indexes, start=1):
            out_path = artifact_path(slug, "preview", base_dir=base_dir, index=n)
            _render_page_to_png(doc, index, out_path)
            previews.append(out_path)
    return previews
