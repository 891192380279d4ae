from pydantic import BaseModel
from datetime import datetime
from uuid import UUID
from typing import Optional

from emoclass.schemas.classroom import StudentOut

class StudentAttention(BaseModel):
    student_id: UUID
    student_name: str
    emotion: str
    note: Optional[str] = None
    timestamp: datetime

class ClassDashboardOut(BaseModel):
    class_id: UUID
    class_name: str
    date: str
    stats: dict
    emotion_distribution: list[dict]
    students_needing_attention: list[StudentAttention]
    weekly_trend: dict
    students: list[StudentOut]
