"""
Custom exceptions for wiki_racer.
"""
from typing import Optional


class WikiRacerException(Exception):
    """Base exception for the application."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class FetchFailed(WikiRacerException):
    """Raised when an operation still fails after its last retry attempt."""
    def __init__(self, message: str, last_error: Optional[BaseException] = None, node: Optional[str] = None):
        self.last_error = last_error
        self.node = node
        super().__init__(message)


class InvalidEndpoint(WikiRacerException):
    """Raised when a start or end page is not usable for a race."""
    pass
