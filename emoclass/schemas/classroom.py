from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from datetime import datetime

class ClassCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)

class ClassOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    created_at: datetime

class StudentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)

class StudentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    class_id: UUID
