"""Хранилище записей: студенты, классы, задания.

Удаление всегда каскадное: вместе с записью уходят её записи на курс, баллы и
итоговые оценки; затронутые итоговые оценки пересчитываются в той же транзакции.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func

from errors import InvalidInput, NotFound
from extensions import db
from models import Assignment, Enrollment, SchoolClass, Score, Student

from blueprints.core.unit_of_work import atomic
from blueprints.grades.services import refresh_class, refresh_pair
from .validators import optional_text, require_name, require_positive

log = logging.getLogger(__name__)

def _get_or_404(model, ident, label: str):
    obj = db.session.get(model, ident)
    if obj is None:
        raise NotFound(f"{label} {ident} not found")
    return obj

# ---------- Students ----------
def create_student(*, first_name: str, last_name: str, email: Optional[str] = None) -> Student:
    with atomic("create_student"):
        st = Student(
            first_name=require_name(first_name, "first_name"),
            last_name=require_name(last_name, "last_name"),
            email=optional_text(email),
        )
        db.session.add(st)
    return st

def get_student(student_id: int) -> Student:
    return _get_or_404(Student, student_id, "Student")

def list_students() -> list[Student]:
    return Student.query.order_by(Student.id.asc()).all()

def update_student(student_id: int, *, first_name: str, last_name: str, email: Optional[str] = None) -> Student:
    with atomic("update_student"):
        st = get_student(student_id)
        st.first_name = require_name(first_name, "first_name")
        st.last_name = require_name(last_name, "last_name")
        st.email = optional_text(email)
    return st

def delete_student(student_id: int) -> None:
    with atomic("delete_student"):
        st = get_student(student_id)
        # enrollments, scores, overall grades уходят каскадом ORM
        db.session.delete(st)

# ---------- Classes ----------
def create_class(*, class_name: str, description: Optional[str] = None) -> SchoolClass:
    with atomic("create_class"):
        sc = SchoolClass(class_name=require_name(class_name, "class_name"), description=optional_text(description))
        db.session.add(sc)
    return sc

def get_class(class_id: int) -> SchoolClass:
    return _get_or_404(SchoolClass, class_id, "Class")

def list_classes() -> list[SchoolClass]:
    return SchoolClass.query.order_by(SchoolClass.id.asc()).all()

def update_class(class_id: int, *, class_name: str, description: Optional[str] = None) -> SchoolClass:
    with atomic("update_class"):
        sc = get_class(class_id)
        sc.class_name = require_name(class_name, "class_name")
        sc.description = optional_text(description)
    return sc

def delete_class(class_id: int) -> None:
    with atomic("delete_class"):
        sc = get_class(class_id)
        db.session.delete(sc)

# ---------- Assignments ----------
def create_assignment(*, class_id: int, assignment_name: str, assignment_type: str,
                      maximum_score: float, due_date: Optional[datetime] = None) -> Assignment:
    with atomic("create_assignment"):
        get_class(class_id)
        a = Assignment(
            class_id=class_id,
            assignment_name=require_name(assignment_name, "assignment_name"),
            assignment_type=require_name(assignment_type, "assignment_type"),
            maximum_score=require_positive(maximum_score, "maximum_score"),
            due_date=due_date,
        )
        db.session.add(a)
        # задание без баллов на итоговые оценки не влияет
    return a

def get_assignment(assignment_id: int) -> Assignment:
    return _get_or_404(Assignment, assignment_id, "Assignment")

def list_assignments(*, class_id: Optional[int] = None) -> list[Assignment]:
    q = Assignment.query
    if class_id is not None:
        q = q.filter(Assignment.class_id == class_id)
    return q.order_by(Assignment.id.asc()).all()

def update_assignment(assignment_id: int, *, class_id: int, assignment_name: str, assignment_type: str,
                      maximum_score: float, due_date: Optional[datetime] = None) -> Assignment:
    with atomic("update_assignment"):
        a = get_assignment(assignment_id)
        get_class(class_id)
        maximum_score = require_positive(maximum_score, "maximum_score")

        top = db.session.query(func.max(Score.score)).filter(Score.assignment_id == a.id).scalar()
        if top is not None and top > maximum_score:
            raise InvalidInput(f"maximum_score {maximum_score:g} is below recorded score {top:g}")

        old_class_id = a.class_id
        if class_id != old_class_id:
            scored = [sid for (sid,) in db.session.query(Score.student_id).filter(Score.assignment_id == a.id)]
            missing = [sid for sid in scored if db.session.get(Enrollment, (sid, class_id)) is None]
            if missing:
                raise InvalidInput(
                    f"students {sorted(missing)} have scores on assignment {a.id} but are not enrolled in class {class_id}"
                )

        a.class_id = class_id
        a.assignment_name = require_name(assignment_name, "assignment_name")
        a.assignment_type = require_name(assignment_type, "assignment_type")
        a.maximum_score = maximum_score
        a.due_date = due_date

        refresh_class(class_id)
        if old_class_id != class_id:
            refresh_class(old_class_id)
    return a

def delete_assignment(assignment_id: int) -> None:
    with atomic("delete_assignment"):
        a = get_assignment(assignment_id)
        class_id = a.class_id
        affected = sorted({s.student_id for s in a.scores})
        db.session.delete(a)
        for sid in affected:
            refresh_pair(sid, class_id)
        log.info("assignment %s deleted, %s overall grades refreshed", assignment_id, len(affected))
