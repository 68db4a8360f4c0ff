from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class UploadedFile:
    buffer: bytes
    filename: str
    size: int


class UploadMetadata(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    original_name: str
    file_size: int
    extracted_length: int
    processing_time: int
    timestamp: str


class UploadResponse(BaseModel):
    text: str
    metadata: UploadMetadata
