from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Nomi snake_case in Python, camelCase sul filo (artistId, performanceDate...)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class IdIn(CamelModel):
    id: int


class SuccessOut(CamelModel):
    success: bool = True


def to_local_naive(v: datetime) -> datetime:
    # il DB salva ora locale senza fuso: gli orari con offset vengono convertiti
    if v.tzinfo is not None:
        return v.astimezone().replace(tzinfo=None)
    return v
