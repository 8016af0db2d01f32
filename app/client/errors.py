"""
Client-side error types.

- FormValidationError: input rejected before any request is sent
- ApiError: non-2xx response or network failure (status_code is None)
- UnauthorizedError: 401 from any call; the session has already been cleared
"""
from typing import Any


class CRMClientError(Exception):
    """Base class for errors raised by the CRM client"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormValidationError(CRMClientError):
    """Raised when required input is missing or invalid; nothing was sent"""
    pass


class ApiError(CRMClientError):
    """Raised for HTTP error responses and network failures"""

    def __init__(self, status_code: int | None, message: str, data: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.data = data


class UnauthorizedError(ApiError):
    """Raised on 401; handled globally by clearing the session"""

    def __init__(self, message: str = "Unauthorized: Please login again"):
        super().__init__(401, message)


def error_message(error: Exception, fallback: str = "An error occurred") -> str:
    """
    Human-readable message for a failed request.

    Prefers the server's ``detail``; FastAPI validation errors (a list of
    ``{"loc", "msg", ...}`` objects) are flattened into one line.
    """
    data = getattr(error, "data", None)
    if isinstance(data, dict) and data.get("detail"):
        detail = data["detail"]
        if isinstance(detail, str):
            return detail
        if isinstance(detail, dict):
            detail = list(detail.values())
        messages = []
        for item in detail:
            if isinstance(item, dict) and "msg" in item:
                messages.append(str(item["msg"]))
            elif isinstance(item, (list, tuple)):
                messages.extend(str(part) for part in item)
            else:
                messages.append(str(item))
        return ", ".join(messages)

    if isinstance(error, CRMClientError) and error.message:
        return error.message
    return fallback
