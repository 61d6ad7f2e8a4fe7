"""
Main entry point for sending cases to robotics.

This module wires the robotics service from configuration and exposes
send_case_to_robotics and attach_robotics_json_to_case for callers such as
the FastAPI server.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional
from dotenv import load_dotenv

from .mapping.robotics_mapper import RoboticsJsonMapper
from .mapping.validator import RoboticsJsonValidator
from .models.ccd import SscsCaseData, SscsCaseDetails
from .models.robotics import IdamTokens
from .orchestration.robotics_service import RoboticsService
from .orchestration.upload_service import RoboticsJsonUploadService
from .plugins.airlookup import AirLookupService
from .plugins.ccd_client import CcdService
from .plugins.document_store import DocumentStoreClient
from .plugins.email_service import EmailService, RoboticsEmailTemplate
from .utils.config import Config
from .utils.errors import ErrorContext, ErrorType, RoboticsError
from .utils.logging import setup_logging, with_case_context

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Global instances (initialized on first use)
_config: Optional[Config] = None
_service: Optional[RoboticsService] = None


def build_service(config: Config) -> RoboticsService:
    """Build a RoboticsService and its collaborators from configuration."""
    document_store = DocumentStoreClient(
        base_url=config.document_store.url,
        timeout=config.document_store.timeout,
        classification=config.document_store.classification,
    )
    ccd_service = CcdService(
        base_url=config.ccd.url,
        jurisdiction=config.ccd.jurisdiction,
        case_type=config.ccd.case_type,
        timeout=config.ccd.timeout,
    )

    return RoboticsService(
        air_lookup_service=AirLookupService(
            csv_path=config.venues.lookup_path,
            default_venue=config.venues.default_venue,
        ),
        email_service=EmailService(
            region=config.aws.region,
            connect_timeout=config.aws.connect_timeout,
            read_timeout=config.aws.read_timeout,
        ),
        robotics_json_mapper=RoboticsJsonMapper(),
        robotics_json_validator=RoboticsJsonValidator(config.robotics.schema_path),
        robotics_email_template=RoboticsEmailTemplate(
            sender=config.email.sender,
            to=config.email.to,
            scottish_to=config.email.scottish_to,
            message=config.email.message,
        ),
        robotics_json_upload_service=RoboticsJsonUploadService(document_store, ccd_service),
        scottish_rpc_name=config.robotics.scottish_rpc_name,
    )


def _initialize_system() -> None:
    """
    Load configuration, set up logging and build the robotics service.

    Runs once, on the first call that needs the service.
    """
    global _config, _service

    if _service is not None:
        return

    try:
        _config = Config.load()
        setup_logging(
            level=_config.logging.level,
            log_format=_config.logging.format,
            log_file=_config.logging.file or None,
        )
        logger.info(f"Configuration loaded: region={_config.aws.region}")

        _service = build_service(_config)
        logger.info("Robotics service initialized")

    except RoboticsError:
        raise
    except Exception as e:
        logger.error(f"System initialization failed: {str(e)}", exc_info=True)
        raise RoboticsError(
            ErrorContext(
                error_type=ErrorType.INITIALIZATION_FAILED,
                message=f"Failed to initialize robotics dispatch: {str(e)}",
                recoverable=False,
                original_exception=e
            )
        ) from e


def get_service() -> RoboticsService:
    _initialize_system()
    return _service


@with_case_context
def send_case_to_robotics(
    case_data: SscsCaseData,
    case_id: int,
    postcode: str,
    pdf: Optional[bytes] = None,
    additional_evidence: Optional[Mapping[Optional[str], Optional[bytes]]] = None
) -> Dict[str, Any]:
    """
    Send one case to robotics.

    Args:
        case_data: Appeal case record
        case_id: CCD case id
        postcode: Appellant postcode for the venue lookup
        pdf: Rendered appeal document, or None
        additional_evidence: Evidence filename to content

    Returns:
        The robotics JSON that was emailed

    Raises:
        MappingError, RoboticsValidationError: No payload could be produced
        TransportError: The email could not be sent
    """
    return get_service().send_case_to_robotics(
        case_data, case_id, postcode, pdf, additional_evidence or {}
    )


def attach_robotics_json_to_case(
    robotics_json: Dict[str, Any],
    case_data: SscsCaseData,
    idam_tokens: IdamTokens,
    case_details: SscsCaseDetails
) -> None:
    """Store the robotics JSON against its CCD case (best effort)."""
    get_service().attach_robotics_json_to_case(robotics_json, case_data, idam_tokens, case_details)
