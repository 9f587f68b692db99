from __future__ import annotations

import hashlib
import json
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .. import config
from ..models import AgreementRecord
from ..pdf.assemble import assemble, format_long_date
from ..pdf.blocks import Document, DocumentHeader, SignatureParty, SignaturePayload
from .sections import build_sections, field_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedAgreement:
    data: bytes
    filename: str
    page_count: int
    signed: bool
    document_id: str


def sanitize_entity_name(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


def suggested_filename(entity_name: str, signed: bool) -> str:
    suffix = "_SIGNED" if signed else "_DRAFT"
    return f"{config.FILENAME_PREFIX}{sanitize_entity_name(entity_name)}{suffix}.pdf"


def default_document_id(record: AgreementRecord) -> str:
    # derived from the record so identical input yields identical output
    payload = json.dumps(record.model_dump(mode="json"), sort_keys=True)
    digest = hashlib.sha1(payload.encode("utf-8")).hexdigest()[:8].upper()
    return f"{config.DOCUMENT_ID_PREFIX}{digest}"


def build_document(
    record: AgreementRecord,
    signature: Optional[bytes] = None,
    signed_at: Optional[datetime] = None,
    document_id: Optional[str] = None,
    issued_on: Optional[date] = None,
) -> Document:
    entity_name = field_value(record, "legal_entity_name")
    signed = signature is not None

    if signed_at is not None:
        issued = signed_at.date()
    else:
        issued = issued_on or date.today()

    header = DocumentHeader(
        document_id=document_id or default_document_id(record),
        issued_on=issued,
        title=config.DOCUMENT_TITLE,
        subtitle=f"Between {config.ISSUER_NAME} and {entity_name}",
    )
    issuer = SignatureParty(
        entity_name=config.ISSUER_NAME,
        signer_name=config.ISSUER_SIGNER_NAME,
        signer_title=config.ISSUER_SIGNER_TITLE,
    )
    counterparty = SignatureParty(
        entity_name=(record.legal_entity_name or "").strip(),
        signer_name=(record.authorized_signer_name or "").strip(),
        signer_title=(record.authorized_signer_title or "").strip(),
        signed_on=format_long_date(signed_at) if signed and signed_at is not None else "",
    )
    return Document(
        header=header,
        sections=build_sections(record),
        issuer=issuer,
        counterparty=counterparty,
        signature=SignaturePayload(image=signature, signed_at=signed_at) if signed else None,
        footer_title=config.FOOTER_TITLE,
        footer_right=config.ISSUER_NAME,
    )


def generate_agreement(
    record: AgreementRecord,
    signature: Optional[bytes] = None,
    signed_at: Optional[datetime] = None,
    document_id: Optional[str] = None,
    issued_on: Optional[date] = None,
    logo: Optional[bytes] = None,
) -> GeneratedAgreement:
    document = build_document(
        record,
        signature=signature,
        signed_at=signed_at,
        document_id=document_id,
        issued_on=issued_on,
    )
    rendered = assemble(document, logo=logo if logo is not None else config.load_logo(), brand_text=config.ISSUER_SHORT_NAME)
    filename = suggested_filename(field_value(record, "legal_entity_name"), document.signed)
    logger.info("Generated %s (%d pages)", filename, rendered.page_count)
    return GeneratedAgreement(
        data=rendered.data,
        filename=filename,
        page_count=rendered.page_count,
        signed=document.signed,
        document_id=document.header.document_id,
    )
