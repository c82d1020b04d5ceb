"""
Custom exception classes for the SocialX gateway
Provides specific exception types for different error scenarios
"""

from typing import Optional, Dict, Any


class SocialXException(Exception):
    """Base exception class for SocialX application"""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ResourceNotFoundError(SocialXException):
    """Raised when requested resource is not found"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        if resource_id:
            message = f"{resource_type} with ID '{resource_id}' not found"
        else:
            message = f"{resource_type} not found"

        super().__init__(
            message=message,
            error_code="RESOURCE_NOT_FOUND",
            status_code=404,
            details=details,
        )


class ValidationError(SocialXException):
    """Raised when request data validation fails"""

    def __init__(
        self,
        message: str = "Request validation failed",
        field_errors: Optional[Dict[str, str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        if field_errors:
            details = details or {}
            details["field_errors"] = field_errors

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=422,
            details=details,
        )


class RouteParameterError(ValidationError):
    """Raised when a route template is built without one of its parameters"""

    def __init__(self, template: str, parameter: str):
        super().__init__(
            message=f"Route '{template}' requires parameter '{parameter}'",
            field_errors={parameter: "Missing route parameter"},
            details={"template": template},
        )
        self.template = template
        self.parameter = parameter


class ServiceUnavailableError(SocialXException):
    """Raised when service is temporarily unavailable"""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        service: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        if service:
            message = f"{service} service temporarily unavailable"

        super().__init__(
            message=message,
            error_code="SERVICE_UNAVAILABLE",
            status_code=503,
            details=details,
        )


class UpstreamError(SocialXException):
    """Raised when the backend behind the API proxy cannot be reached"""

    def __init__(
        self,
        message: str = "Upstream service request failed",
        upstream: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        if upstream:
            details = details or {}
            details["upstream"] = upstream

        super().__init__(
            message=message,
            error_code="BAD_GATEWAY",
            status_code=502,
            details=details,
        )


class UpstreamTimeoutError(SocialXException):
    """Raised when the backend behind the API proxy does not answer in time"""

    def __init__(
        self,
        message: str = "Upstream service timed out",
        upstream: Optional[str] = None,
        timeout: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if upstream:
            details["upstream"] = upstream
        if timeout is not None:
            details["timeout"] = timeout

        super().__init__(
            message=message,
            error_code="GATEWAY_TIMEOUT",
            status_code=504,
            details=details,
        )
