from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from .. import config
from ..models import AgreementRecord, init_db
from ..storage import artifact_path, record_document, write_document
from .generate import generate_agreement
from .ingest import slug_from_name
from .render_preview import render_previews
from .sections import field_value

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    ready: List[Path] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def _write_error(slug: str, message: str) -> None:
    error_path = artifact_path(slug, "error", base_dir=config.OUT_DIR)
    error_path.write_text(message, encoding="utf-8")


def process_record(
    record: AgreementRecord,
    signature: Optional[bytes] = None,
    signed_at: Optional[datetime] = None,
    previews: bool = False,
) -> Path:
    entity_name = field_value(record, "legal_entity_name")
    slug = slug_from_name(entity_name)
    result = generate_agreement(record, signature=signature, signed_at=signed_at)
    path = write_document(slug, result.filename, result.data, base_dir=config.OUT_DIR)
    record_document(
        document_id=result.document_id,
        entity_name=entity_name,
        slug=slug,
        path=path,
        signed=result.signed,
        page_count=result.page_count,
    )
    if previews:
        render_previews(slug, path, base_dir=config.OUT_DIR)
    return path


def run_batch(
    records: Iterable[AgreementRecord],
    signature: Optional[bytes] = None,
    signed_at: Optional[datetime] = None,
    previews: bool = False,
) -> BatchResult:
    init_db()
    results = BatchResult()
    for record in records:
        slug = slug_from_name(field_value(record, "legal_entity_name"))
        try:
            path = process_record(record, signature=signature, signed_at=signed_at, previews=previews)
        except Exception as exc:
            logger.exception("Agreement generation failed for %s", slug)
            _write_error(slug, str(exc))
            results.failed.append(slug)
            continue
        results.ready.append(path)
    return results
