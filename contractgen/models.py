from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional

from sqlmodel import Field, Session, SQLModel, create_engine

from . import config


class HardwareOption(str, Enum):
    NONE = "none"
    DAZE_PROVIDED = "daze_provided"


class PricingModel(str, Enum):
    NONE = "none"
    SUBSCRIPTION = "subscription"
    DAZE_REV_SHARE = "daze_rev_share"
    CLIENT_REV_SHARE = "client_rev_share"


class AgreementRecord(SQLModel):
    """Field values for one pilot agreement. Every field is optional."""

    property_name: Optional[str] = None
    legal_entity_name: Optional[str] = None
    dba_name: Optional[str] = None
    billing_address: Optional[str] = None
    authorized_signer_name: Optional[str] = None
    authorized_signer_title: Optional[str] = None
    contact_email: Optional[str] = None

    covered_outlets: List[str] = Field(default_factory=list)
    hardware_option: Optional[HardwareOption] = None
    num_tablets: Optional[str] = None
    mounts_stands: Optional[str] = None

    start_date: Optional[date] = None
    pilot_term_days: Optional[int] = None

    pricing_model: Optional[PricingModel] = None
    pricing_amount: Optional[str] = None

    pos_system: Optional[str] = None
    pos_version: Optional[str] = None
    pos_api_key: Optional[str] = None
    pos_contact: Optional[str] = None


class GeneratedDocument(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    document_id: str = Field(index=True)
    entity_name: str
    slug: str = Field(index=True)
    filename: str
    path: str
    signed: bool = False
    page_count: int = 0
    sha256: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


engine = create_engine(f"sqlite:///{config.DB_PATH}")


def reset_engine() -> None:
    global engine
    engine = create_engine(f"sqlite:///{config.DB_PATH}")


def init_db() -> None:
    config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    return Session(engine, expire_on_commit=False)
