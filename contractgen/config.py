from __future__ import annotations

from pathlib import Path


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"
DB_PATH = OUT_DIR / "contracts.db"
LOGO_PATH = BASE_DIR / "assets" / "brand" / "logo.png"

ISSUER_NAME = "Daze Technologies Corp."
ISSUER_SHORT_NAME = "DAZE"
ISSUER_SIGNER_NAME = ""
ISSUER_SIGNER_TITLE = ""

DOCUMENT_TITLE = "PILOT AGREEMENT"
DOCUMENT_ID_PREFIX = "PA-"
FILENAME_PREFIX = "Daze_Pilot_Agreement_"
FOOTER_TITLE = "CONFIDENTIAL"

# Field placeholders printed when the record leaves a value empty.
PLACEHOLDERS = {
    "legal_entity_name": "[Client Legal Name]",
    "dba_name": "[DBA]",
    "billing_address": "[Address]",
    "authorized_signer_name": "[Primary Contact]",
    "authorized_signer_title": "[Title]",
    "contact_email": "[Email]",
}


def load_logo() -> bytes | None:
    if not LOGO_PATH.exists():
        return None
    return LOGO_PATH.read_bytes()


def set_out_dir(path: Path) -> None:
    global OUT_DIR, DB_PATH
    OUT_DIR = path
    DB_PATH = OUT_DIR / "contracts.db"
