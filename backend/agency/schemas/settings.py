from pydantic import Field
from .common import CamelModel


class SettingUpdate(CamelModel):
    key: str = Field(min_length=1, max_length=255)
    value: str
