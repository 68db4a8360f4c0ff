"""
Streaming multipart reader for single-file uploads.

The request body is fed straight into python-multipart's push parser and
only the requested file field is kept, in memory. Nothing is spooled to a
temporary file, and the stream stops being read as soon as the file grows
past the size ceiling.
"""

import logging
from typing import Dict, List, Optional

import python_multipart
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import parse_options_header
from starlette.requests import Request

from app.exceptions import FileTooLargeError, MalformedUploadError
from app.models.upload_models import UploadedFile

logger = logging.getLogger(__name__)

# Boundaries, part headers and small sibling fields around the file itself.
MULTIPART_OVERHEAD = 64 * 1024


class FilePartCollector:
    """python-multipart callbacks that collect the first file part named `field_name`."""

    def __init__(self, field_name: str, max_size: int) -> None:
        self.field_name = field_name
        self.max_size = max_size
        self.filename: Optional[str] = None
        self.size = 0
        self._chunks: List[bytes] = []
        self._headers: Dict[bytes, bytes] = {}
        self._header_field = b""
        self._header_value = b""
        self._collecting = False

    def callbacks(self) -> dict:
        return {
            "on_part_begin": self.on_part_begin,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
        }

    def on_part_begin(self) -> None:
        self._headers = {}

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[self._header_field.lower()] = self._header_value
        self._header_field = b""
        self._header_value = b""

    def on_headers_finished(self) -> None:
        _, options = parse_options_header(self._headers.get(b"content-disposition", b""))
        name = options.get(b"name", b"").decode("utf-8", errors="replace")
        if self.filename is not None or name != self.field_name or b"filename" not in options:
            return
        self.filename = options[b"filename"].decode("utf-8", errors="replace")
        self._collecting = True

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        if not self._collecting:
            return
        self.size += end - start
        if self.size > self.max_size:
            logger.warning(
                "Rejected %s: exceeds %d byte limit", self.filename, self.max_size
            )
            raise FileTooLargeError(self.max_size)
        self._chunks.append(data[start:end])

    def on_part_end(self) -> None:
        self._collecting = False

    def to_upload(self) -> Optional[UploadedFile]:
        # Browsers send an empty, nameless part when no file was picked.
        if self.filename is None or (not self.filename and not self.size):
            return None
        return UploadedFile(buffer=b"".join(self._chunks), filename=self.filename, size=self.size)


async def read_file_field(request: Request, field_name: str, max_size: int) -> Optional[UploadedFile]:
    """
    Read one file field from a multipart request without touching disk.

    Args:
        request (Request): Incoming request; its body is consumed as a stream.
        field_name (str): Form field holding the file.
        max_size (int): Largest accepted file, in bytes.

    Returns:
        Optional[UploadedFile]: The buffered file, or None when the request
        carries no such file (including non-multipart bodies).

    Raises:
        FileTooLargeError: The declared body length or the streamed file
            crosses `max_size`; the rest of the body is never read.
        MalformedUploadError: The multipart body cannot be parsed.
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_size + MULTIPART_OVERHEAD:
        logger.warning("Rejected upload: declared %s bytes, limit %d", declared, max_size)
        raise FileTooLargeError(max_size)

    content_type, params = parse_options_header(request.headers.get("content-type", ""))
    if content_type.lower() != b"multipart/form-data":
        return None
    boundary = params.get(b"boundary")
    if not boundary:
        raise MalformedUploadError("Missing multipart boundary.")

    collector = FilePartCollector(field_name, max_size)
    parser = python_multipart.MultipartParser(boundary, collector.callbacks())
    try:
        async for chunk in request.stream():
            if chunk:
                parser.write(chunk)
        parser.finalize()
    except MultipartParseError as e:
        raise MalformedUploadError(str(e)) from e

    return collector.to_upload()
