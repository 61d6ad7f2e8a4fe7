"""External collaborators: venue lookup, email, document store, CCD and PDF rendering."""

from .airlookup import AirLookupService
from .case_renderer import render_case_pdf
from .ccd_client import CcdService
from .document_store import DocumentStoreClient
from .email_service import EmailService, RoboticsEmailTemplate

__all__ = [
    'AirLookupService',
    'render_case_pdf',
    'CcdService',
    'DocumentStoreClient',
    'EmailService',
    'RoboticsEmailTemplate'
]
