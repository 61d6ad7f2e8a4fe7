"""Client for the document management store."""

import logging
from typing import Any, Optional

import requests

from ..models.robotics import UploadedDocument
from ..utils.errors import ErrorType, TransportError, handle_transport_error

logger = logging.getLogger(__name__)


class DocumentStoreClient:
    """
    Uploads files to the document management store over HTTP.

    Attributes:
        base_url: Store root URL
        timeout: Request timeout in seconds
        classification: Security classification sent with each upload
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        classification: str = "RESTRICTED",
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.classification = classification
        self._session = session or requests.Session()
        logger.info(f"Initialized DocumentStoreClient: url={self.base_url}")

    def upload(
        self,
        auth_token: str,
        service_token: str,
        filename: str,
        content: bytes,
        content_type: str = "application/json"
    ) -> UploadedDocument:
        """
        Upload one file.

        Args:
            auth_token: User OAuth2 bearer token
            service_token: Service-to-service token
            filename: Name to store the file under
            content: File bytes
            content_type: MIME type of the file

        Returns:
            UploadedDocument with the self and binary links

        Raises:
            TransportError: If the store cannot be reached or rejects the upload
        """
        url = f"{self.base_url}/documents"
        headers = {
            "Authorization": auth_token,
            "ServiceAuthorization": service_token,
        }
        operation = f"Uploading {filename} to document store"
        try:
            response = self._session.post(
                url,
                headers=headers,
                files=[("files", (filename, content, content_type))],
                data={"classification": self.classification},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            handle_transport_error(
                error=e,
                error_type=ErrorType.DOCUMENT_UPLOAD_FAILED,
                operation=operation,
                logger=logger,
                recoverable=True,
                fallback_action="Skip case update",
            )

        if response.status_code >= 400:
            raise TransportError.http_status(
                ErrorType.DOCUMENT_UPLOAD_FAILED, operation, response.status_code, response.text
            )

        try:
            uploaded = _parse_document(response.json(), filename)
        except (ValueError, AttributeError, TypeError) as e:
            handle_transport_error(
                error=e,
                error_type=ErrorType.DOCUMENT_UPLOAD_FAILED,
                operation=f"{operation}: reading response",
                logger=logger,
                recoverable=True,
                fallback_action="Skip case update",
            )

        logger.info(f"Uploaded {filename} to document store: {uploaded.url}")
        return uploaded


def _parse_document(body: Any, filename: str) -> UploadedDocument:
    """Read the first stored document's links from an upload response (HAL JSON)."""
    if not isinstance(body, dict):
        raise ValueError(f"expected a JSON object, got {type(body).__name__}")
    documents = (body.get("_embedded") or {}).get("documents") or []
    if not documents:
        raise ValueError("response contained no documents")

    document = documents[0]
    links = document.get("_links") or {}
    url = (links.get("self") or {}).get("href")
    if not url:
        raise ValueError("document has no self link")
    return UploadedDocument(
        url=url,
        binary_url=(links.get("binary") or {}).get("href", ""),
        filename=document.get("originalDocumentName") or filename,
    )
