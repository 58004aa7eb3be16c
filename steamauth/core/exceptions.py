"""
Custom exceptions for steamauth.

This module defines exception classes raised by the authentication core.
"""
from typing import Optional


class SteamAuthException(Exception):
    """Base exception for all steamauth errors."""
    pass


class ConfigurationError(SteamAuthException):
    """Raised when configuration is missing or invalid."""
    pass


class TransportError(SteamAuthException):
    """Raised when the session transport cannot be created or used."""
    pass


class SentryIOError(SteamAuthException):
    """Raised when the sentry file cannot be read or written."""
    
    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        errno: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            path: Sentry file path
            errno: OS error number (if available)
        """
        self.path = path
        self.errno = errno
        super().__init__(message)


class LoginFailedError(SteamAuthException):
    """Raised for a login outcome that is neither success nor a challenge."""
    
    def __init__(self, result: int, extended_result: Optional[int] = None) -> None:
        from .api.results import EResult
        
        self.result = result
        self.extended_result = extended_result
        message = f"Unable to logon: {EResult.describe(result)}"
        if extended_result is not None:
            message += f" / {EResult.describe(extended_result)}"
        super().__init__(message)


class TicketError(SteamAuthException):
    """Raised when the auth session ticket cannot be obtained."""
    pass
