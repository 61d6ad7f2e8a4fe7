"""Client for the Core Case Data (CCD) data store API."""

import logging
from typing import Any, Dict, Optional

import requests

from ..models.ccd import SscsCaseData, SscsCaseDetails
from ..models.robotics import IdamTokens
from ..utils.errors import ErrorType, MappingError, TransportError, handle_transport_error

logger = logging.getLogger(__name__)


class CcdService:
    """
    Updates cases through CCD caseworker events.

    An update is two calls: start the event to get a token, then submit the
    event with the new case data.
    """

    def __init__(
        self,
        base_url: str,
        jurisdiction: str = "SSCS",
        case_type: str = "Benefit",
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.jurisdiction = jurisdiction
        self.case_type = case_type
        self.timeout = timeout
        self._session = session or requests.Session()
        logger.info(
            f"Initialized CcdService: url={self.base_url}, "
            f"jurisdiction={jurisdiction}, case_type={case_type}"
        )

    def _case_url(self, idam_tokens: IdamTokens, case_id: int) -> str:
        return (
            f"{self.base_url}/caseworkers/{idam_tokens.user_id}"
            f"/jurisdictions/{self.jurisdiction}/case-types/{self.case_type}/cases/{case_id}"
        )

    @staticmethod
    def _headers(idam_tokens: IdamTokens) -> Dict[str, str]:
        return {
            "Authorization": idam_tokens.idam_oauth2_token,
            "ServiceAuthorization": idam_tokens.service_authorization,
            "Content-Type": "application/json",
        }

    def _call(self, method: str, url: str, operation: str, idam_tokens: IdamTokens, **kwargs) -> Dict[str, Any]:
        try:
            response = self._session.request(
                method, url, headers=self._headers(idam_tokens), timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            handle_transport_error(
                error=e,
                error_type=ErrorType.CASE_UPDATE_FAILED,
                operation=operation,
                logger=logger,
            )

        if response.status_code >= 400:
            raise TransportError.http_status(
                ErrorType.CASE_UPDATE_FAILED, operation, response.status_code, response.text
            )

        try:
            body = response.json()
        except ValueError as e:
            handle_transport_error(
                error=e,
                error_type=ErrorType.CASE_UPDATE_FAILED,
                operation=f"{operation}: reading response",
                logger=logger,
            )
        if not isinstance(body, dict):
            raise TransportError.from_exception(
                ErrorType.CASE_UPDATE_FAILED,
                operation,
                ValueError(f"expected a JSON object, got {type(body).__name__}"),
            )
        return body

    def start_event(self, case_id: int, event_type: str, idam_tokens: IdamTokens) -> str:
        url = f"{self._case_url(idam_tokens, case_id)}/event-triggers/{event_type}/token"
        body = self._call("GET", url, f"Starting event {event_type} on case {case_id}", idam_tokens)
        return body.get("token", "")

    def update_case(
        self,
        case_data: SscsCaseData,
        case_id: int,
        event_type: str,
        summary: str,
        description: str,
        idam_tokens: IdamTokens
    ) -> SscsCaseDetails:
        """
        Submit a caseworker event that replaces the case data.

        Args:
            case_data: Case data to store
            case_id: CCD case id
            event_type: CCD event id (e.g. "attachRoboticsJson")
            summary: Event summary shown in case history
            description: Event description shown in case history
            idam_tokens: Caller credentials

        Returns:
            The updated case as returned by CCD

        Raises:
            TransportError: If either CCD call fails
        """
        event_token = self.start_event(case_id, event_type, idam_tokens)
        payload = {
            "data": case_data.to_ccd(),
            "event": {
                "id": event_type,
                "summary": summary,
                "description": description,
            },
            "event_token": event_token,
            "ignore_warning": False,
        }
        body = self._call(
            "POST",
            f"{self._case_url(idam_tokens, case_id)}/events",
            f"Submitting event {event_type} on case {case_id}",
            idam_tokens,
            json=payload,
        )
        logger.info(f"Case {case_id} updated with event {event_type}")
        try:
            return SscsCaseDetails.from_ccd(body)
        except MappingError as e:
            # The event is already stored; only the echoed case could not be read
            raise TransportError.from_exception(
                ErrorType.CASE_UPDATE_FAILED,
                f"Reading case {case_id} after event {event_type}",
                e,
            ) from e
