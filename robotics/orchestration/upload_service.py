"""Stores a robotics payload against its case in CCD."""

import logging
from typing import Any, Dict

from ..models.ccd import DocumentLink, SscsCaseData, SscsCaseDetails
from ..models.robotics import IdamTokens
from ..plugins.ccd_client import CcdService
from ..plugins.document_store import DocumentStoreClient
from ..utils.errors import TransportError
from .attachments import serialize_payload

logger = logging.getLogger(__name__)

ATTACH_ROBOTICS_JSON_EVENT = "attachRoboticsJson"


class RoboticsJsonUploadService:
    """
    Uploads the payload to the document store, then points the case at it.

    The write-back is best effort: if the upload fails the case is left
    untouched and the failure is only logged.
    """

    def __init__(self, document_store: DocumentStoreClient, ccd_service: CcdService):
        self.document_store = document_store
        self.ccd_service = ccd_service

    def update_case_with_robotics_json(
        self,
        robotics_json: Dict[str, Any],
        case_data: SscsCaseData,
        case_details: SscsCaseDetails,
        idam_tokens: IdamTokens
    ) -> None:
        """
        Upload the payload and update the case to reference it.

        Args:
            robotics_json: Validated payload (never modified)
            case_data: Case data to update
            case_details: Case metadata; its id addresses the case
            idam_tokens: Caller credentials

        Raises:
            TransportError: If the CCD update itself fails
        """
        case_id = case_details.id
        filename = f"robotics_{case_id}.json"

        try:
            document = self.document_store.upload(
                idam_tokens.idam_oauth2_token,
                idam_tokens.service_authorization,
                filename,
                serialize_payload(robotics_json),
            )
        except TransportError as e:
            logger.error(f"Case {case_id}: robotics JSON upload failed, case not updated: {e}")
            return

        case_data.robotics_json = DocumentLink(
            document_url=document.url,
            document_binary_url=document.binary_url,
            document_filename=document.filename,
        )
        self.ccd_service.update_case(
            case_data,
            case_id,
            ATTACH_ROBOTICS_JSON_EVENT,
            "Attach robotics JSON",
            "Robotics JSON attached to case",
            idam_tokens,
        )
        logger.info(f"Case {case_id}: robotics JSON attached as {document.filename}")
