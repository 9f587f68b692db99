from __future__ import annotations

import base64
import binascii
import csv
import hashlib
import json
import re
from pathlib import Path
from typing import List

from pydantic import ValidationError
from slugify import slugify

from ..models import AgreementRecord


LIST_FIELDS = {"covered_outlets"}


def slug_from_name(name: str) -> str:
    slug = slugify(name or "")
    slug = re.sub(r"[^a-z0-9-]+", "-", slug.lower()).strip("-")
    if not slug:
        slug = hashlib.md5((name or "").encode("utf-8")).hexdigest()[:12]
    if ".." in slug or "/" in slug or "\\" in slug:
        raise ValueError("Invalid slug generated from name")
    return slug


def _split_pipe(value: str) -> List[str]:
    return [item.strip() for item in (value or "").split("|") if item.strip()]


def _clean_row(row: dict) -> dict:
    cleaned: dict = {}
    for key, value in row.items():
        if key is None:
            continue
        key = key.strip()
        value = (value or "").strip()
        if key in LIST_FIELDS:
            cleaned[key] = _split_pipe(value)
        elif value:
            cleaned[key] = value
    return cleaned


def _load_json_rows(path: Path) -> List[dict]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list) and all(isinstance(item, dict) for item in payload):
        return payload
    raise ValueError(f"{path} must hold an object or a list of objects")


def _load_csv_rows(path: Path) -> List[dict]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            raise ValueError("CSV has no header")
        return [_clean_row(row) for row in reader if any((value or "").strip() for value in row.values())]


def load_records(path: Path) -> List[AgreementRecord]:
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")
    if path.suffix.lower() == ".csv":
        rows = _load_csv_rows(path)
    else:
        rows = _load_json_rows(path)
    if not rows:
        raise ValueError(f"{path} has no records")

    records: List[AgreementRecord] = []
    for index, row in enumerate(rows, start=1):
        try:
            records.append(AgreementRecord.model_validate(row))
        except ValidationError as exc:
            raise ValueError(f"Record {index} in {path.name} is invalid: {exc}") from exc
    return records


def decode_data_url(value: str) -> bytes:
    if not value or not value.startswith("data:"):
        raise ValueError("Invalid data URL format")
    meta, _, data = value.partition(",")
    if not meta or not data:
        raise ValueError("Malformed data URL")
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Malformed data URL payload: {exc}") from exc


def load_signature(value: str | Path | bytes | None) -> bytes | None:
    """Signature image from raw bytes, a data URL, or a file path."""
    if value is None:
        return None
    if isinstance(value, bytes):
        return value
    if isinstance(value, str) and value.startswith("data:"):
        return decode_data_url(value)
    path = Path(value)
    if not path.exists():
        raise FileNotFoundError(f"Signature image not found: {path}")
    return path.read_bytes()
