from __future__ import annotations

import hashlib
from pathlib import Path
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from . import config
from .models import GeneratedDocument, get_session


ARTIFACT_NAMES = {
    "preview": "preview_{index}.png",
    "error": "error.log",
}


def document_dir(slug: str, base_dir: Path | None = None) -> Path:
    root = base_dir or config.OUT_DIR
    path = root / slug
    path.mkdir(parents=True, exist_ok=True)
    return path


def artifact_path(slug: str, artifact_type: str, base_dir: Path | None = None, **fmt) -> Path:
    filename = ARTIFACT_NAMES[artifact_type].format(**fmt)
    return document_dir(slug, base_dir=base_dir) / filename


def write_document(slug: str, filename: str, data: bytes, base_dir: Path | None = None) -> Path:
    path = document_dir(slug, base_dir=base_dir) / filename
    path.write_bytes(data)
    return path


def record_document(
    document_id: str,
    entity_name: str,
    slug: str,
    path: Path,
    signed: bool,
    page_count: int,
) -> GeneratedDocument:
    row = GeneratedDocument(
        document_id=document_id,
        entity_name=entity_name,
        slug=slug,
        filename=path.name,
        path=str(path.relative_to(config.OUT_DIR)),
        signed=signed,
        page_count=page_count,
        sha256=hashlib.sha256(path.read_bytes()).hexdigest(),
    )
    with get_session() as session:
        session.add(row)
        session.commit()
        session.refresh(row)
    return row


def list_documents(slug: str | None = None) -> List[GeneratedDocument]:
    try:
        with get_session() as session:
            statement = select(GeneratedDocument)
            if slug:
                statement = statement.where(GeneratedDocument.slug == slug)
            return list(session.exec(statement))
    except SQLAlchemyError:
        return []
