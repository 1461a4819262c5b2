"""Error taxonomy shared by every store and service"""

from typing import Optional


class AbraError(Exception):
    """Base class for errors raised by the scheduling core"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AbraError):
    """A request field was malformed or outside its allowed set"""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f'Invalid or missing "{field}" field.')
        self.field = field


class NotFoundError(AbraError):
    """A job, client, rule or schedule slot does not exist"""


class StorageError(AbraError):
    """The backing store could not be read or written"""
