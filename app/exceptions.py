"""
Error taxonomy for the file processing server.

Every request-level failure is raised as a `ServiceError` subclass. The
application registers a single handler that renders `to_payload()` with
the class' `status_code`, so handlers never build error responses by hand.
"""

from typing import Any, Dict, List, Optional

from fastapi import status

from app.utils.clock import utc_timestamp


class ServiceError(Exception):
    """Base class for errors that map onto one HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, **extra: Any) -> None:
        self.message = message or self.message
        self.extra = extra
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


class MissingFileError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "No file uploaded."

    def __init__(self) -> None:
        super().__init__(timestamp=utc_timestamp())


class UnsupportedTypeError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Unsupported file type."

    def __init__(self, supported_types: List[str]) -> None:
        super().__init__(supportedTypes=list(supported_types))


class MalformedUploadError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Malformed multipart body."

    def __init__(self, details: str) -> None:
        super().__init__(details=details)


class FileTooLargeError(ServiceError):
    status_code = 413
    message = "File too large. Max size is 10MB."

    def __init__(self, max_size: int) -> None:
        super().__init__(f"File too large. Max size is {max_size // (1024 * 1024)}MB.")
        self.max_size = max_size


class ExtractionFailedError(ServiceError):
    """Raised when DOCX or PDF parsing blows up inside the library."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, document_label: str, details: str) -> None:
        super().__init__(f"Failed to process {document_label} file.", details=details)


class NoTextExtractedError(ServiceError):
    status_code = 422
    message = "No text extracted."

    def __init__(self, extracted_length: int) -> None:
        super().__init__(extractedLength=extracted_length)


class AnalysisFailedError(ServiceError):
    message = "Failed to analyze input."

    def __init__(self, details: str) -> None:
        super().__init__(details=details)


class UnexpectedError(ServiceError):
    message = "Unexpected error during file processing."

    def __init__(self, details: str) -> None:
        super().__init__(details=details)
