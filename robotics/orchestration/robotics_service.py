"""Dispatch orchestrator: case record in, robotics email out."""

import logging
from typing import Any, Dict, Mapping, Optional

from ..mapping.robotics_mapper import RoboticsJsonMapper
from ..mapping.validator import RoboticsJsonValidator
from ..models.ccd import Appellant, SscsCaseData, SscsCaseDetails
from ..models.robotics import IdamTokens, RoboticsWrapper
from ..plugins.airlookup import AirLookupService
from ..plugins.email_service import EmailService, RoboticsEmailTemplate
from ..utils.errors import MappingError
from .attachments import build_attachments
from .upload_service import RoboticsJsonUploadService

logger = logging.getLogger(__name__)

GLASGOW = "GLASGOW"


class RoboticsService:
    """
    Sends one appeal case to the robotics mailbox.

    Steps run in a fixed order: venue lookup, mapping, validation,
    attachment assembly, email. A mapping or validation failure stops the
    dispatch before anything is sent. Writing the payload back to CCD is a
    separate call (``attach_robotics_json_to_case``).

    Attributes:
        air_lookup_service: Postcode to venue resolver
        email_service: Unique id generator and email transport
        robotics_json_mapper: Case record to payload mapper
        robotics_json_validator: Payload schema validator
        robotics_email_template: Builds the outgoing email
        robotics_json_upload_service: CCD write-back
        scottish_rpc_name: Regional processing centre name that marks Scottish cases
    """

    def __init__(
        self,
        air_lookup_service: AirLookupService,
        email_service: EmailService,
        robotics_json_mapper: RoboticsJsonMapper,
        robotics_json_validator: RoboticsJsonValidator,
        robotics_email_template: RoboticsEmailTemplate,
        robotics_json_upload_service: RoboticsJsonUploadService,
        scottish_rpc_name: str = GLASGOW
    ):
        self.air_lookup_service = air_lookup_service
        self.email_service = email_service
        self.robotics_json_mapper = robotics_json_mapper
        self.robotics_json_validator = robotics_json_validator
        self.robotics_email_template = robotics_email_template
        self.robotics_json_upload_service = robotics_json_upload_service
        self.scottish_rpc_name = scottish_rpc_name

    def send_case_to_robotics(
        self,
        case_data: SscsCaseData,
        case_id: int,
        postcode: str,
        pdf: Optional[bytes],
        additional_evidence: Optional[Mapping[Optional[str], Optional[bytes]]] = None
    ) -> Dict[str, Any]:
        """
        Build, validate and email the robotics JSON for a case.

        Args:
            case_data: Appeal case record
            case_id: CCD case id
            postcode: Appellant postcode used for the venue lookup
            pdf: Rendered appeal document, or None
            additional_evidence: Evidence filename to content, attached in order

        Returns:
            The validated robotics JSON

        Raises:
            MappingError: If the case record lacks a required sub-structure
            RoboticsValidationError: If the payload breaks the robotics schema
            TransportError: If the email cannot be sent
        """
        benefit_code = _benefit_code(case_data)
        venue = self.air_lookup_service.lookup_air_venue_name_by_postcode(postcode)
        venue_name = venue.esa_venue if benefit_code.lower() == "esa" else venue.pip_venue

        robotics_json = self.create_robotics(RoboticsWrapper(
            sscs_case_data=case_data,
            ccd_case_id=case_id,
            venue_name=venue_name,
            evidence_present=case_data.evidence_present,
        ))

        logger.info(
            f"Case {case_id} Robotics JSON successfully created for benefit type {benefit_code}"
        )

        is_scottish = self.is_scottish(case_data)
        self._send_json_by_email(
            case_data.appeal.appellant, robotics_json, pdf, additional_evidence, is_scottish
        )
        logger.info(
            f"Case {case_id} Robotics JSON email sent successfully for benefit type "
            f"{benefit_code} isScottish {is_scottish}"
        )

        return robotics_json

    def create_robotics(self, wrapper: RoboticsWrapper) -> Dict[str, Any]:
        """Map then validate; either step may raise and abort the dispatch."""
        robotics_json = self.robotics_json_mapper.map(wrapper)
        self.robotics_json_validator.validate(robotics_json)
        return robotics_json

    def is_scottish(self, case_data: SscsCaseData) -> bool:
        rpc = case_data.regional_processing_center
        if rpc is None or rpc.name is None:
            return False
        return rpc.name.upper() == self.scottish_rpc_name.upper()

    def attach_robotics_json_to_case(
        self,
        robotics_json: Dict[str, Any],
        case_data: SscsCaseData,
        idam_tokens: IdamTokens,
        case_details: SscsCaseDetails
    ) -> None:
        """
        Store the robotics JSON against the case in CCD.

        Skipped, with a log line, when the case has no CCD id yet.
        """
        logger.info(f"Sending case {case_details.id} to Robotics")

        if case_details.id is None:
            logger.info("CCD caseId is empty - skipping step to update CCD with Robotics JSON")
            return

        logger.info(f"CCD caseId is {case_details.id}, proceeding to update case with Robotics JSON")
        case_data.ccd_case_id = str(case_details.id)
        self.robotics_json_upload_service.update_case_with_robotics_json(
            robotics_json, case_data, case_details, idam_tokens
        )

    def _send_json_by_email(
        self,
        appellant: Appellant,
        robotics_json: Dict[str, Any],
        pdf: Optional[bytes],
        additional_evidence: Optional[Mapping[Optional[str], Optional[bytes]]],
        is_scottish: bool
    ) -> None:
        logger.info("Generating unique email id")
        unique_id = self.email_service.generate_unique_email_id(appellant)

        logger.info("Add attachments")
        attachments = build_attachments(robotics_json, pdf, unique_id, additional_evidence)

        logger.info("Send email")
        self.email_service.send_email(
            self.robotics_email_template.generate_email(unique_id, attachments, is_scottish)
        )


def _benefit_code(case_data: SscsCaseData) -> str:
    appeal = case_data.appeal
    if appeal is None or appeal.benefit_type is None or appeal.benefit_type.code is None:
        raise MappingError.missing_field("appeal.benefitType.code")
    return appeal.benefit_type.code
