#!/usr/bin/env python3
"""
Upload Endpoint

Accepts a DOCX or PDF upload, extracts its plain text and returns the
text together with lightweight metadata about the processing run.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from app.exceptions import (
    ExtractionFailedError,
    MissingFileError,
    NoTextExtractedError,
    ServiceError,
    UnexpectedError,
    UnsupportedTypeError,
)
from app.models.parser import (
    ExtractionErrorKind,
    ExtractionFailure,
    extract_async,
)
from app.models.upload_models import UploadedFile, UploadMetadata, UploadResponse
from app.utils.clock import elapsed_ms, utc_timestamp
from app.utils.multipart_reader import read_file_field
from config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])

UPLOAD_REQUEST_BODY = {
    "requestBody": {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {"file": {"type": "string", "format": "binary"}},
                }
            }
        }
    }
}


async def read_upload(request: Request) -> Optional[UploadedFile]:
    """
    Buffer the `file` form field in memory, enforcing `MAX_FILE_SIZE`.

    The body is parsed as it streams in, so oversized files are rejected
    before the rest of the upload is read and before any extraction.
    """
    return await read_file_field(request, "file", settings.MAX_FILE_SIZE)


def _failure_to_error(failure: ExtractionFailure) -> ServiceError:
    if failure.kind is ExtractionErrorKind.UNSUPPORTED_TYPE:
        return UnsupportedTypeError(failure.supported_types)
    label = "DOCX" if failure.kind is ExtractionErrorKind.DOCX_FAILURE else "PDF"
    return ExtractionFailedError(label, failure.message)


# =====================================================
# Upload Document Endpoint
# =====================================================
@router.post(
    "",
    summary="Upload a document and extract its text",
    response_description="Extracted text and processing metadata",
    response_model=UploadResponse,
    openapi_extra=UPLOAD_REQUEST_BODY,
)
async def upload_document(
    request: Request,
    upload: Optional[UploadedFile] = Depends(read_upload),
) -> UploadResponse:
    """
    Extracts the plain text of an uploaded `.docx` or `.pdf` file.

    Failures map onto:
    - 400 when no file was sent, the body is not valid multipart, or the
      extension is not supported
    - 413 when the file is larger than `MAX_FILE_SIZE`
    - 422 when the document contains no text
    - 500 when the extraction library fails
    """
    # 1. Validate presence
    if upload is None:
        raise MissingFileError()

    logger.info("Processing file: %s (%d bytes)", upload.filename, upload.size)

    try:
        # 2. Extract text
        outcome = await extract_async(upload.buffer, upload.filename)
        if isinstance(outcome, ExtractionFailure):
            raise _failure_to_error(outcome)

        # 3. Reject documents with nothing readable
        text = outcome.text
        if not text.strip():
            logger.warning("No text extracted from %s", upload.filename)
            raise NoTextExtractedError(len(text))

        # 4. Shape the response
        processing_time = elapsed_ms(request.state.started_at)
        logger.info("Processed %s in %dms", upload.filename, processing_time)

        return UploadResponse(
            text=text,
            metadata=UploadMetadata(
                original_name=upload.filename,
                file_size=upload.size,
                extracted_length=len(text),
                processing_time=processing_time,
                timestamp=utc_timestamp(),
            ),
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Unexpected error while processing %s", upload.filename)
        raise UnexpectedError(str(e)) from e
