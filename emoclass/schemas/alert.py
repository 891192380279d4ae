from pydantic import BaseModel, Field
from typing import Any, Optional

class CheckAlertIn(BaseModel):
    student_id: Any = Field(default=None, alias="studentId")

class CheckAlertOut(BaseModel):
    success: bool = True
    alert: bool
    alert_type: Optional[str] = None
    priority: Optional[str] = None
    sent: bool = False
    student: Optional[str] = None
    class_name: Optional[str] = Field(default=None, serialization_alias="class")
    message: str
