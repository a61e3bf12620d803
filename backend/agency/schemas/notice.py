from datetime import datetime
from typing import Optional
from pydantic import Field
from .common import CamelModel


class NoticeIn(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)


class NoticeUpdate(CamelModel):
    id: int
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)


class NoticeOut(CamelModel):
    id: int
    title: str
    content: str
    created_at: datetime
