import traceback
from typing import Dict, Any, List, Optional


# Define common HTTP status codes to avoid dependency on FastAPI
HTTP_400_BAD_REQUEST = 400
HTTP_500_INTERNAL_SERVER_ERROR = 500
HTTP_503_SERVICE_UNAVAILABLE = 503

# Context keys never exposed in error responses
SENSITIVE_KEYS = ["password", "token", "secret", "key"]


class ImgixSignerError(Exception):
    """Base exception class for imgix-signer.

    This provides a standardized way to handle errors with detailed context.
    """
    def __init__(self,
                 message: str,
                 error_code: str = "internal_error",
                 http_status: int = HTTP_500_INTERNAL_SERVER_ERROR,
                 context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        self.message = message
        self.error_code = error_code
        self.http_status = http_status
        self.context = context or {}
        self.original_exception = original_exception
        self.traceback = traceback.format_exc() if original_exception else None

        # Add original exception details to context if available
        if original_exception:
            self.context.update({
                "original_error_type": type(original_exception).__name__,
                "original_error": str(original_exception)
            })

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for API responses."""
        result = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }

        # Include non-sensitive context information
        safe_context = {}
        for key, value in self.context.items():
            if key not in SENSITIVE_KEYS and value is not None:
                safe_context[key] = value

        if safe_context:
            result["details"] = safe_context

        return result


class ConfigurationMissingError(ImgixSignerError):
    """Error when the default imgix source is requested but not configured."""
    def __init__(self, missing: List[str], context: Optional[Dict[str, Any]] = None):
        context = context or {}
        context["missing"] = list(missing)
        super().__init__(
            message=f"imgix source is not configured. Set {', '.join(missing)}.",
            error_code="configuration_missing",
            http_status=HTTP_503_SERVICE_UNAVAILABLE,
            context=context
        )


class InvalidInputError(ImgixSignerError):
    """Error for a path or parameters of unexpected shape."""
    def __init__(self, message: str, field: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        if field:
            context = context or {}
            context["field"] = field
            message = f"Invalid value for '{field}': {message}"

        super().__init__(
            message=message,
            error_code="invalid_input",
            http_status=HTTP_400_BAD_REQUEST,
            context=context
        )


def get_error_response(error: Exception) -> Dict[str, Any]:
    """Convert any exception to a standardized API response.

    Args:
        error: The exception to convert

    Returns:
        A dictionary with error details suitable for API responses
    """
    if isinstance(error, ImgixSignerError):
        return error.to_dict()

    # Convert standard exceptions to our format
    return ImgixSignerError(
        message=str(error),
        error_code="internal_error",
        original_exception=error
    ).to_dict()
