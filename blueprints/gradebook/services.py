from __future__ import annotations
import logging
from typing import Optional

from errors import InvalidInput, NotFound, NotUnique
from extensions import db
from models import Assignment, Enrollment, Score

from blueprints.core.unit_of_work import atomic
from blueprints.directory.services import get_assignment, get_class, get_student
from blueprints.directory.validators import require_non_negative
from blueprints.grades.services import refresh_pair

log = logging.getLogger(__name__)

# ---------- Enrollments ----------
def enroll(*, student_id: int, class_id: int) -> Enrollment:
    with atomic("enroll"):
        get_student(student_id)
        get_class(class_id)
        if db.session.get(Enrollment, (student_id, class_id)) is not None:
            raise NotUnique(f"Student {student_id} is already enrolled in class {class_id}")
        en = Enrollment(student_id=student_id, class_id=class_id)
        db.session.add(en)
        # новый участник без баллов: итоговая оценка не определена
    return en

def get_enrollment(student_id: int, class_id: int) -> Enrollment:
    en = db.session.get(Enrollment, (student_id, class_id))
    if en is None:
        raise NotFound(f"Student {student_id} is not enrolled in class {class_id}")
    return en

def list_enrollments(*, student_id: Optional[int] = None, class_id: Optional[int] = None) -> list[Enrollment]:
    q = Enrollment.query
    if student_id is not None:
        q = q.filter(Enrollment.student_id == student_id)
    if class_id is not None:
        q = q.filter(Enrollment.class_id == class_id)
    return q.order_by(Enrollment.student_id.asc(), Enrollment.class_id.asc()).all()

def unenroll(*, student_id: int, class_id: int) -> None:
    """Снять студента с курса вместе с его баллами по заданиям этого курса."""
    with atomic("unenroll"):
        en = get_enrollment(student_id, class_id)
        scores = (
            Score.query.join(Assignment, Assignment.id == Score.assignment_id)
            .filter(Score.student_id == student_id, Assignment.class_id == class_id)
            .all()
        )
        for s in scores:
            db.session.delete(s)
        db.session.delete(en)
        refresh_pair(student_id, class_id)
        log.info("student %s unenrolled from class %s, %s scores removed", student_id, class_id, len(scores))

# ---------- Scores ----------
def _checked_value(value: float, assignment: Assignment) -> float:
    value = require_non_negative(value, "score")
    if value > assignment.maximum_score:
        raise InvalidInput(
            f"score {value:g} exceeds maximum_score {assignment.maximum_score:g} of assignment {assignment.id}"
        )
    return value

def create_score(*, student_id: int, assignment_id: int, score: float) -> Score:
    with atomic("create_score"):
        get_student(student_id)
        a = get_assignment(assignment_id)
        if db.session.get(Score, (student_id, assignment_id)) is not None:
            raise NotUnique(f"Score for student {student_id} on assignment {assignment_id} already exists")
        get_enrollment(student_id, a.class_id)
        sc = Score(student_id=student_id, assignment_id=assignment_id, score=_checked_value(score, a))
        db.session.add(sc)
        refresh_pair(student_id, a.class_id)
    return sc

def get_score(student_id: int, assignment_id: int) -> Score:
    sc = db.session.get(Score, (student_id, assignment_id))
    if sc is None:
        raise NotFound(f"Score for student {student_id} on assignment {assignment_id} not found")
    return sc

def list_scores(*, student_id: Optional[int] = None, assignment_id: Optional[int] = None) -> list[Score]:
    q = Score.query
    if student_id is not None:
        q = q.filter(Score.student_id == student_id)
    if assignment_id is not None:
        q = q.filter(Score.assignment_id == assignment_id)
    return q.order_by(Score.student_id.asc(), Score.assignment_id.asc()).all()

def update_score(student_id: int, assignment_id: int, *, score: float) -> Score:
    with atomic("update_score"):
        sc = get_score(student_id, assignment_id)
        a = sc.assignment
        sc.score = _checked_value(score, a)
        refresh_pair(student_id, a.class_id)
    return sc

def delete_score(student_id: int, assignment_id: int) -> None:
    with atomic("delete_score"):
        sc = get_score(student_id, assignment_id)
        class_id = sc.assignment.class_id
        db.session.delete(sc)
        refresh_pair(student_id, class_id)
