from typing import Literal

from pydantic import BaseModel, Field


class PresignRequest(BaseModel):
    kind: Literal["logo", "resume"]
    filename: str = Field(min_length=1, max_length=255)
    content_type: str = Field(min_length=1, max_length=100)


class PresignResponse(BaseModel):
    url: str
    fields: dict[str, str]
    file_url: str
    max_bytes: int
