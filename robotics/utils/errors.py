"""Exceptions raised while building and dispatching robotics payloads."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(Enum):
    # No payload can be produced
    MAPPING_FAILED = "MAPPING_FAILED"
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # A collaborator call failed
    EMAIL_SEND_FAILED = "EMAIL_SEND_FAILED"
    DOCUMENT_UPLOAD_FAILED = "DOCUMENT_UPLOAD_FAILED"
    CASE_UPDATE_FAILED = "CASE_UPDATE_FAILED"

    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"
    INITIALIZATION_FAILED = "INITIALIZATION_FAILED"


@dataclass
class ErrorContext:
    """
    What went wrong during a dispatch, in a form fit for logs and API responses.

    Attributes:
        error_type: Failure category
        message: Human-readable summary
        recoverable: True when the caller may carry on without the result
        fallback_action: What the caller did instead, if anything
        details: Structured extras (field path, HTTP status, schema errors)
        original_exception: Library exception that triggered the failure
    """

    error_type: ErrorType
    message: str
    recoverable: bool
    fallback_action: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    original_exception: Optional[Exception] = None

    def to_dict(self) -> Dict[str, Any]:
        cause = self.original_exception
        return {
            "error_type": self.error_type.value,
            "message": self.message,
            "recoverable": self.recoverable,
            "fallback_action": self.fallback_action,
            "details": dict(self.details or {}),
            "original_exception": None if cause is None else f"{type(cause).__name__}: {cause}",
        }


class RoboticsError(Exception):
    """Base class for dispatch failures; ``context`` carries the detail."""

    def __init__(self, context: ErrorContext):
        super().__init__(context.message)
        self.context = context

    def __str__(self) -> str:
        text = f"{self.context.error_type.value}: {self.context.message}"
        if self.context.fallback_action:
            text = f"{text} (Fallback: {self.context.fallback_action})"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return self.context.to_dict()


class MappingError(RoboticsError):
    """Raised when a case record is missing a sub-structure the payload needs."""

    @classmethod
    def missing_field(cls, path: str) -> "MappingError":
        """
        Create error for a required field or sub-object that is absent.

        Args:
            path: Dotted path of the missing field (e.g. "appeal.appellant.name")

        Returns:
            MappingError instance
        """
        context = ErrorContext(
            error_type=ErrorType.MAPPING_FAILED,
            message=f"Cannot build robotics JSON: '{path}' is missing",
            recoverable=False,
            details={"field": path}
        )
        return cls(context)

    @classmethod
    def malformed(cls, path: str, error: Exception) -> "MappingError":
        """
        Create error for a field that is present but cannot be read.

        Args:
            path: Dotted path of the malformed field
            error: Original exception

        Returns:
            MappingError instance
        """
        context = ErrorContext(
            error_type=ErrorType.MAPPING_FAILED,
            message=f"Cannot build robotics JSON: '{path}' is malformed: {str(error)}",
            recoverable=False,
            details={"field": path},
            original_exception=error
        )
        return cls(context)


class RoboticsValidationError(RoboticsError):
    """Raised when a mapped payload breaks the robotics schema."""

    @classmethod
    def from_messages(cls, messages: list) -> "RoboticsValidationError":
        context = ErrorContext(
            error_type=ErrorType.VALIDATION_FAILED,
            message=f"Invalid robotics JSON: {'; '.join(messages)}",
            recoverable=False,
            details={"errors": list(messages)}
        )
        return cls(context)


# Either failure means no payload can be produced for the case.
PayloadError = (MappingError, RoboticsValidationError)


class TransportError(RoboticsError):
    """Exception for email, document store and case store call failures."""

    @classmethod
    def from_exception(
        cls,
        error_type: ErrorType,
        operation: str,
        error: Exception,
        recoverable: bool = False,
        fallback_action: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> "TransportError":
        """
        Wrap a client library exception.

        Args:
            error_type: One of the transport error types
            operation: What was being attempted, e.g. "Sending email 'Bloggs_123'"
            error: Original exception (requests, botocore)
            recoverable: Whether the caller may carry on
            fallback_action: What the caller does instead
            details: Optional extra details

        Returns:
            TransportError instance
        """
        context = ErrorContext(
            error_type=error_type,
            message=f"{operation} failed: {str(error)}",
            recoverable=recoverable,
            fallback_action=fallback_action,
            details=dict(details or {}, operation=operation),
            original_exception=error
        )
        return cls(context)

    @classmethod
    def http_status(
        cls,
        error_type: ErrorType,
        operation: str,
        status_code: int,
        body: str = ""
    ) -> "TransportError":
        """
        Create error for a rejected HTTP call.

        Args:
            error_type: One of the transport error types
            operation: What was being attempted, e.g. "Sending email 'Bloggs_123'"
            status_code: HTTP status returned
            body: Response body (truncated)

        Returns:
            TransportError instance
        """
        context = ErrorContext(
            error_type=error_type,
            message=f"{operation} failed with HTTP {status_code}",
            recoverable=False,
            details={"operation": operation, "status_code": status_code, "body": body[:256]}
        )
        return cls(context)


class ConfigurationError(RoboticsError):
    """Exception for missing or invalid configuration."""

    @classmethod
    def missing(cls, key: str) -> "ConfigurationError":
        context = ErrorContext(
            error_type=ErrorType.CONFIG_MISSING,
            message=f"Missing configuration value '{key}'",
            recoverable=False,
            details={"key": key}
        )
        return cls(context)

    @classmethod
    def invalid(cls, key: str, reason: str) -> "ConfigurationError":
        context = ErrorContext(
            error_type=ErrorType.CONFIG_INVALID,
            message=f"Invalid configuration value '{key}': {reason}",
            recoverable=False,
            details={"key": key}
        )
        return cls(context)


def handle_transport_error(
    error: Exception,
    error_type: ErrorType,
    operation: str,
    logger,
    recoverable: bool = False,
    fallback_action: Optional[str] = None
) -> None:
    """
    Log a transport failure and raise it as a TransportError.

    Args:
        error: Original exception from the client library
        error_type: Transport error type
        operation: What was being attempted, e.g. "Sending email 'Bloggs_123'"
        logger: Module logger to report through
        recoverable: Whether the caller may carry on without the result
        fallback_action: What the caller does instead

    Raises:
        TransportError: Wrapped error with context
    """
    transport_error = TransportError.from_exception(
        error_type=error_type,
        operation=operation,
        error=error,
        recoverable=recoverable,
        fallback_action=fallback_action
    )

    if transport_error.context.recoverable:
        logger.warning(f"Recoverable transport error: {transport_error}")
    else:
        logger.error(f"Non-recoverable transport error: {transport_error}")

    raise transport_error from error
