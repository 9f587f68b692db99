from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple, Union

from .styles import SPACER_HEIGHT


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class SubsectionHeading:
    text: str


@dataclass(frozen=True)
class MinorHeading:
    text: str


@dataclass(frozen=True)
class LabelValue:
    label: str
    value: str


@dataclass(frozen=True)
class BulletList:
    items: Tuple[str, ...]

    def __post_init__(self) -> None:
        # accept any iterable of strings but store it immutably
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class CheckboxLine:
    checked: bool
    text: str


@dataclass(frozen=True)
class Footnote:
    text: str


@dataclass(frozen=True)
class Spacer:
    height: float = SPACER_HEIGHT


ContentBlock = Union[
    Paragraph,
    SubsectionHeading,
    MinorHeading,
    LabelValue,
    BulletList,
    CheckboxLine,
    Footnote,
    Spacer,
]

BLOCK_TYPES = (
    Paragraph,
    SubsectionHeading,
    MinorHeading,
    LabelValue,
    BulletList,
    CheckboxLine,
    Footnote,
    Spacer,
)


@dataclass(frozen=True)
class Section:
    title: str = ""
    blocks: Tuple[ContentBlock, ...] = ()

    def __post_init__(self) -> None:
        blocks = tuple(self.blocks)
        for block in blocks:
            if not isinstance(block, BLOCK_TYPES):
                raise TypeError(f"Unsupported content block: {type(block).__name__}")
        object.__setattr__(self, "blocks", blocks)


@dataclass(frozen=True)
class DocumentHeader:
    document_id: str
    issued_on: date
    title: str
    subtitle: str = ""


@dataclass(frozen=True)
class SignaturePayload:
    image: bytes
    signed_at: Optional[datetime] = None


@dataclass(frozen=True)
class SignatureParty:
    """One column of the signature block. Empty values print as placeholders."""

    entity_name: str
    signer_name: str = ""
    signer_title: str = ""
    signed_on: str = ""


@dataclass(frozen=True)
class Document:
    header: DocumentHeader
    sections: Tuple[Section, ...]
    issuer: SignatureParty
    counterparty: SignatureParty
    signature: Optional[SignaturePayload] = None
    closing_title: str = "AUTHORIZED SIGNATURES"
    footer_title: str = ""
    footer_right: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))

    @property
    def signed(self) -> bool:
        return self.signature is not None

    @property
    def status(self) -> str:
        return "SIGNED" if self.signed else "DRAFT"
