from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, ConfigDict

from . import bp
from . import services as svc
from blueprints.core.http import dump, dump_list, int_arg, ok

class OverallGradeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    student_id: int
    class_id: int
    # None: по паре ещё нет ни одного балла
    percentage: Optional[float] = None
    letter_grade: Optional[str] = None

# Только чтение: записывает итоговые оценки исключительно пересчёт.
@bp.get("/overall-grades")
def api_overall_grades_list():
    rows = svc.list_overall_grades(student_id=int_arg("student_id"), class_id=int_arg("class_id"))
    return ok(dump_list(OverallGradeOut, rows))

@bp.get("/overall-grades/<int:student_id>/<int:class_id>")
def api_overall_grade_get(student_id: int, class_id: int):
    row = svc.get_overall_grade(student_id, class_id)
    if row is None:
        return ok(OverallGradeOut(student_id=student_id, class_id=class_id).model_dump(mode="json"))
    return ok(dump(OverallGradeOut, row))

@bp.get("/dashboard")
def api_dashboard():
    return ok(svc.dashboard_summary())
