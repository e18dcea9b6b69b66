"""
Common exceptions for snapboard.

Every error carries an HTTP ``status_code`` so the API layer can translate
it into a single ``{"error": message}`` response.
"""

from typing import Optional


class SnapBoardError(Exception):
    """Base exception for all snapboard errors."""
    status_code = 500


class ConfigurationError(SnapBoardError):
    """Raised when a required credential or setting is missing or invalid."""
    status_code = 500


class UploadError(SnapBoardError):
    """Raised when an uploaded image is rejected before processing."""
    status_code = 400


class AuthError(SnapBoardError):
    """Raised when a remote service rejects our credentials."""
    status_code = 401


class PermissionDeniedError(SnapBoardError):
    """Raised when credentials are valid but lack access to the resource."""
    status_code = 403


class RateLimitError(SnapBoardError):
    """Raised when a remote service keeps rate limiting us."""
    status_code = 429

    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class UnavailableError(SnapBoardError):
    """Raised when a remote service is down or unreachable."""
    status_code = 503


class BackendError(SnapBoardError):
    """Raised for any other remote failure; wraps the raw message."""
    status_code = 502


class VisionParseError(SnapBoardError):
    """Raised when a vision reply does not contain recoverable JSON."""
    status_code = 502

    def __init__(self, reason: str, snippet: str):
        super().__init__(f"Failed to parse vision response: {reason} (reply started with: {snippet!r})")
        self.reason = reason
        self.snippet = snippet


class ConversionCancelledError(SnapBoardError):
    """Raised when a conversion is cancelled between pipeline phases."""
    status_code = 504
