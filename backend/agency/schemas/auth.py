from datetime import datetime
from pydantic import Field
from ..models.user import Role
from .common import CamelModel


class AdminLoginIn(CamelModel):
    passcode: str = Field(min_length=1)


class UserOut(CamelModel):
    id: int
    open_id: str
    name: str | None = None
    email: str | None = None
    login_method: str | None = None
    role: Role
    created_at: datetime
    updated_at: datetime
    last_signed_in: datetime
