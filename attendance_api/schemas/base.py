# attendance-server/attendance_api/schemas/base.py
from datetime import datetime, timezone
from typing import Annotated
from pydantic import AfterValidator, BaseModel
from pydantic.alias_generators import to_camel

def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive; they are always stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]

class CamelModel(BaseModel):
    """ Serializes as camelCase for the browser client; accepts either case on input. """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
