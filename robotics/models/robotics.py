"""Robotics dispatch data models."""

import mimetypes
from dataclasses import dataclass, field
from typing import List, Optional

from .ccd import SscsCaseData


@dataclass
class RoboticsWrapper:
    """
    Everything the mapper needs to build one robotics payload.

    Attributes:
        sscs_case_data: The appeal case record (read only)
        ccd_case_id: Numeric CCD case id, emitted as ``caseId``
        venue_name: Hearing venue resolved from the appellant's postcode
        evidence_present: Evidence flag copied from the case record
    """
    sscs_case_data: SscsCaseData
    ccd_case_id: Optional[int]
    venue_name: Optional[str]
    evidence_present: Optional[str] = None


@dataclass
class AirlookupBenefitToVenue:
    """Hearing venues for a postcode, one per benefit type."""
    pip_venue: str
    esa_venue: str


@dataclass(frozen=True)
class EmailAttachment:
    """
    A file attached to the robotics email.

    Attributes:
        kind: "json" for the payload, "pdf" for the rendered appeal, "file" for evidence
        filename: Name the recipient sees
        content: Raw file bytes
        content_type: MIME type of the content
    """
    kind: str  # "json" | "pdf" | "file"
    filename: str
    content: bytes
    content_type: str

    @classmethod
    def json(cls, content: bytes, filename: str) -> "EmailAttachment":
        return cls(kind="json", filename=filename, content=content, content_type="application/json")

    @classmethod
    def pdf(cls, content: bytes, filename: str) -> "EmailAttachment":
        return cls(kind="pdf", filename=filename, content=content, content_type="application/pdf")

    @classmethod
    def file(cls, content: bytes, filename: str) -> "EmailAttachment":
        content_type, _ = mimetypes.guess_type(filename)
        return cls(
            kind="file",
            filename=filename,
            content=content,
            content_type=content_type or "application/octet-stream",
        )


@dataclass
class Email:
    """
    An outgoing email.

    Attributes:
        sender: From address
        to: Recipient address
        subject: Subject line (the appellant's unique id for robotics mail)
        message: Plain text body
        attachments: Files in send order
    """
    sender: str
    to: str
    subject: str
    message: str
    attachments: List[EmailAttachment] = field(default_factory=list)


@dataclass
class IdamTokens:
    """User and service credentials used for document store and CCD calls."""
    idam_oauth2_token: str
    service_authorization: str
    user_id: str = ""
    email: str = ""


@dataclass
class UploadedDocument:
    """Location of a document stored in the document management store."""
    url: str
    binary_url: str
    filename: str
