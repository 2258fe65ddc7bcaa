from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field

# ---------- Enrollments ----------
class EnrollmentIn(BaseModel):
    student_id: int
    class_id: int

class EnrollmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    student_id: int
    class_id: int

# ---------- Scores ----------
class ScoreIn(BaseModel):
    student_id: int
    assignment_id: int
    score: float = Field(ge=0, allow_inf_nan=False)

class ScoreUpdate(BaseModel):
    score: float = Field(ge=0, allow_inf_nan=False)

class ScoreOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    student_id: int
    assignment_id: int
    score: float
