"""Attachment list assembly for robotics emails."""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from ..models.robotics import EmailAttachment

logger = logging.getLogger(__name__)


def serialize_payload(payload: Dict[str, Any]) -> bytes:
    """Serialize a robotics payload the way it is attached and uploaded."""
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def build_attachments(
    payload: Dict[str, Any],
    pdf: Optional[bytes],
    unique_id: str,
    additional_evidence: Optional[Mapping[Optional[str], Optional[bytes]]] = None
) -> List[EmailAttachment]:
    """
    Assemble attachments in robot order.

    The payload always comes first as ``<unique_id>.txt``, the rendered
    appeal second as ``<unique_id>.pdf`` when given, then each evidence file
    under its own name in the mapping's iteration order. Evidence entries
    with no name or no content are skipped.

    Args:
        payload: Validated robotics JSON
        pdf: Rendered appeal document, or None
        unique_id: Appellant unique id used as the file stem
        additional_evidence: Evidence filename to content

    Returns:
        Ordered list of attachments
    """
    attachments = [EmailAttachment.json(serialize_payload(payload), f"{unique_id}.txt")]

    if pdf is not None:
        attachments.append(EmailAttachment.pdf(pdf, f"{unique_id}.pdf"))

    for filename, content in (additional_evidence or {}).items():
        if not filename or not content:
            logger.warning(f"Skipping evidence attachment with missing name or content: {filename!r}")
            continue
        attachments.append(EmailAttachment.file(content, filename))

    return attachments
