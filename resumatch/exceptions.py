"""
Exception classes for the ResuMatch API.

Only input-contract violations are exceptions. A regex that finds nothing or
a missing resume section is a low score, never an error.
"""
from typing import Any, Dict, Optional


class ResuMatchError(Exception):
    """Base exception for ResuMatch"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/response"""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InputError(ResuMatchError):
    """Raised when the caller's input cannot be analyzed"""

    status_code = 400


class UnsupportedFormatError(InputError):
    """Raised when a file is neither PDF, DOCX, DOC nor TXT"""

    status_code = 415

    def __init__(self, message: str, mime_type: Optional[str] = None, file_name: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if mime_type:
            details["mime_type"] = mime_type
        if file_name:
            details["file_name"] = file_name
        super().__init__(message, error_code="UNSUPPORTED_FORMAT", details=details, **kwargs)


class EmptyDocumentError(InputError):
    """Raised when a document yields no text after trimming"""

    status_code = 422

    def __init__(self, message: str, document_format: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if document_format:
            details["format"] = document_format
        super().__init__(message, error_code="EMPTY_DOCUMENT", details=details, **kwargs)


class DocumentDecodeError(InputError):
    """Raised when the bytes cannot be read as the declared format"""

    status_code = 422

    def __init__(self, message: str, document_format: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if document_format:
            details["format"] = document_format
        super().__init__(message, error_code="DOCUMENT_DECODE_ERROR", details=details, **kwargs)


class InsufficientJobDescriptionError(InputError):
    """Raised when the job description is too short to analyze"""

    status_code = 400

    def __init__(self, message: str, length: Optional[int] = None, minimum: Optional[int] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if length is not None:
            details["length"] = length
        if minimum is not None:
            details["minimum"] = minimum
        super().__init__(message, error_code="INSUFFICIENT_JOB_DESCRIPTION", details=details, **kwargs)


class FileTooLargeError(InputError):
    """Raised when an upload exceeds the configured size limit"""

    status_code = 413

    def __init__(self, message: str, size_bytes: Optional[int] = None, limit_bytes: Optional[int] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if size_bytes is not None:
            details["size_bytes"] = size_bytes
        if limit_bytes is not None:
            details["limit_bytes"] = limit_bytes
        super().__init__(message, error_code="FILE_TOO_LARGE", details=details, **kwargs)
