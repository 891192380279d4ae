from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from datetime import date, datetime
from typing import Any, Optional

class CheckinCreate(BaseModel):
    # types are checked by the ingestor so its error order and codes apply
    student_id: Any = Field(default=None, alias="studentId")
    emotion: Any = None  # happy | neutral | normal | stressed | sleepy
    note: Any = None

class CheckinOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    student_id: UUID
    emotion: str
    note: Optional[str] = None
    checkin_date: date
    created_at: datetime

class CheckinResponse(BaseModel):
    success: bool
    message: str
    data: Optional[CheckinOut] = None
