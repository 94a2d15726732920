from datetime import datetime
from typing import Annotated, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")

# largest value an INTEGER key column accepts on every supported backend
MAX_DB_INT = 2**31 - 1

RecordId = Annotated[int, Field(ge=1, le=MAX_DB_INT)]


class Envelope(BaseModel, Generic[DataT]):
    """Shape of every JSON response: {success, data?, error?}."""

    success: bool = True
    data: Optional[DataT] = None
    error: Optional[str] = None


class MessageData(BaseModel):
    message: str


class HealthData(BaseModel):
    status: str
    timestamp: datetime


def error_body(message: str) -> dict:
    return {"success": False, "error": message}
