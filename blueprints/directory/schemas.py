from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .validators import MAX_SCORE_LIMIT

class _In(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email", "description", mode="before", check_fields=False)
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

class _Out(BaseModel):
    model_config = ConfigDict(from_attributes=True)

# ---------- Students ----------
class StudentIn(_In):
    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)

class StudentOut(_Out):
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None

# ---------- Classes ----------
class ClassIn(_In):
    class_name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None

class ClassOut(_Out):
    id: int
    class_name: str
    description: Optional[str] = None

# ---------- Assignments ----------
class AssignmentIn(_In):
    class_id: int
    assignment_name: str = Field(min_length=1, max_length=255)
    assignment_type: str = Field(min_length=1, max_length=100)
    maximum_score: float = Field(gt=0, le=MAX_SCORE_LIMIT, allow_inf_nan=False)
    due_date: Optional[datetime] = None

class AssignmentOut(_Out):
    id: int
    class_id: int
    assignment_name: str
    assignment_type: str
    maximum_score: float
    due_date: Optional[datetime] = None
