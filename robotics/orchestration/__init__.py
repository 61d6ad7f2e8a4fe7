"""Dispatch orchestration: attachments, robotics email and CCD write-back."""

from .attachments import build_attachments, serialize_payload
from .robotics_service import RoboticsService
from .upload_service import RoboticsJsonUploadService

__all__ = [
    "build_attachments",
    "serialize_payload",
    "RoboticsService",
    "RoboticsJsonUploadService"
]
