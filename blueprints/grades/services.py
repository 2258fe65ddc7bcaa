"""Итоговые оценки (OverallGrade): расчёт, пересчёт и чтение.

Стратегия «жадная»: каждая операция, меняющая баллы, максимальный балл задания,
класс задания или запись на курс, в той же транзакции пересчитывает и сохраняет
затронутые пары (student, class). Чтение только читает сохранённые строки.

Пустой набор баллов даёт «не определено»: строки нет, функции возвращают None.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence, Tuple

from flask import current_app
from sqlalchemy import func

from errors import NotFound
from extensions import db
from models import Assignment, Enrollment, OverallGrade, SchoolClass, Score, Student

from blueprints.core.unit_of_work import atomic

log = logging.getLogger(__name__)

GradeScale = Sequence[Tuple[float, str]]

# ===== DTO =====
@dataclass(frozen=True)
class GradeResult:
    student_id: int
    class_id: int
    percentage: float
    letter_grade: str

# ===== шкала =====
def validate_grade_scale(scale: GradeScale) -> GradeScale:
    """Шкала должна быть непустой, строго убывающей и покрывать 0 (тогда она тотальна на [0, 100])."""
    if not scale:
        raise ValueError("GRADE_SCALE must not be empty")
    bounds = [float(lower) for lower, _ in scale]
    for hi, lo in zip(bounds, bounds[1:]):
        if lo >= hi:
            raise ValueError("GRADE_SCALE thresholds must be strictly descending")
    if bounds[-1] > 0:
        raise ValueError("GRADE_SCALE lowest threshold must be <= 0")
    for _, letter in scale:
        if not str(letter).strip():
            raise ValueError("GRADE_SCALE letters must be non-empty")
    return scale

def letter_for(percentage: float, scale: Optional[GradeScale] = None) -> str:
    if scale is None:
        scale = current_app.config["GRADE_SCALE"]
    for lower, letter in scale:
        if percentage >= lower:
            return letter
    # ниже последней границы (отрицательный процент сюда не попадает при валидных баллах)
    return scale[-1][1]

def compute_percentage(pairs: Iterable[Tuple[float, float]], precision: int = 2) -> Optional[float]:
    """pairs: (балл, максимальный балл) только по оценённым заданиям."""
    pairs = list(pairs)
    if not pairs:
        return None
    earned = math.fsum(score for score, _ in pairs)
    possible = math.fsum(maximum for _, maximum in pairs)
    return round(100.0 * (earned / possible), precision)

# ===== расчёт =====
def _scored_pairs(student_id: int, class_id: int) -> list[Tuple[float, float]]:
    rows = (
        db.session.query(Score.score, Assignment.maximum_score)
        .join(Assignment, Assignment.id == Score.assignment_id)
        .filter(Score.student_id == student_id, Assignment.class_id == class_id)
        .order_by(Assignment.id.asc())
        .all()
    )
    return [(float(s), float(m)) for s, m in rows]

def _evaluate(student_id: int, class_id: int) -> Optional[GradeResult]:
    precision = int(current_app.config.get("GRADE_PERCENT_PRECISION", 2))
    pct = compute_percentage(_scored_pairs(student_id, class_id), precision)
    if pct is None:
        return None
    return GradeResult(student_id=student_id, class_id=class_id, percentage=pct, letter_grade=letter_for(pct))

def _require_enrollment(student_id: int, class_id: int) -> None:
    if db.session.get(Enrollment, (student_id, class_id)) is None:
        raise NotFound(f"Student {student_id} is not enrolled in class {class_id}")

def compute_overall_grade(student_id: int, class_id: int) -> Optional[GradeResult]:
    """Чистый расчёт по текущим данным, без записи."""
    _require_enrollment(student_id, class_id)
    return _evaluate(student_id, class_id)

# ===== пересчёт (вызывается только внутри atomic) =====
def refresh_pair(student_id: int, class_id: int) -> Optional[GradeResult]:
    """Приводит сохранённую строку пары к текущим баллам. Без записи на курс строки нет."""
    db.session.flush()
    row = db.session.get(OverallGrade, (student_id, class_id))
    enrolled = db.session.get(Enrollment, (student_id, class_id)) is not None
    result = _evaluate(student_id, class_id) if enrolled else None

    if result is None:
        if row is not None:
            db.session.delete(row)
        log.debug("overall grade cleared student=%s class=%s", student_id, class_id)
        return None

    if row is None:
        row = OverallGrade(student_id=student_id, class_id=class_id)
        db.session.add(row)
    row.percentage = result.percentage
    row.letter_grade = result.letter_grade
    log.debug("overall grade student=%s class=%s -> %.2f %s",
              student_id, class_id, result.percentage, result.letter_grade)
    return result

def refresh_class(class_id: int) -> None:
    student_ids = [sid for (sid,) in db.session.query(Enrollment.student_id)
                   .filter(Enrollment.class_id == class_id)
                   .order_by(Enrollment.student_id.asc())]
    for sid in student_ids:
        refresh_pair(sid, class_id)

def recompute_all() -> int:
    """Полная пересборка таблицы итоговых оценок из базовых данных. Возвращает число строк."""
    with atomic("recompute_all"):
        pairs = [
            (sid, cid) for sid, cid in db.session.query(Enrollment.student_id, Enrollment.class_id)
            .order_by(Enrollment.student_id.asc(), Enrollment.class_id.asc())
        ]
        enrolled = set(pairs)
        # осиротевшие строки (например, после ручной правки БД)
        for row in db.session.query(OverallGrade).all():
            if (row.student_id, row.class_id) not in enrolled:
                db.session.delete(row)
        written = 0
        for sid, cid in pairs:
            if refresh_pair(sid, cid) is not None:
                written += 1
    log.info("recomputed overall grades: %s rows", written)
    return written

# ===== чтение =====
def get_overall_grade(student_id: int, class_id: int) -> Optional[OverallGrade]:
    _require_enrollment(student_id, class_id)
    return db.session.get(OverallGrade, (student_id, class_id))

def list_overall_grades(*, student_id: Optional[int] = None, class_id: Optional[int] = None) -> list[OverallGrade]:
    q = db.session.query(OverallGrade)
    if student_id is not None:
        q = q.filter(OverallGrade.student_id == student_id)
    if class_id is not None:
        q = q.filter(OverallGrade.class_id == class_id)
    return q.order_by(OverallGrade.student_id.asc(), OverallGrade.class_id.asc()).all()

def _upcoming_assignments(start: datetime, end: datetime) -> list[dict]:
    """Задания со сроком сдачи в [start, end], ближайшие первыми."""
    rows = (
        db.session.query(Assignment, SchoolClass.class_name)
        .join(SchoolClass, SchoolClass.id == Assignment.class_id)
        .filter(Assignment.due_date.is_not(None), Assignment.due_date >= start, Assignment.due_date <= end)
        .order_by(Assignment.due_date.asc(), Assignment.id.asc())
        .all()
    )
    return [
        {
            "assignment_id": a.id,
            "assignment_name": a.assignment_name,
            "class_id": a.class_id,
            "class_name": class_name,
            "due_date": a.due_date.isoformat(),
        }
        for a, class_name in rows
    ]

def dashboard_summary(now: Optional[datetime] = None) -> dict:
    threshold = float(current_app.config.get("AT_RISK_THRESHOLD", 70.0))
    window_days = int(current_app.config.get("UPCOMING_WINDOW_DAYS", 7))
    now = now or datetime.now()
    grades = list_overall_grades()

    average = None
    if grades:
        average = round(math.fsum(g.percentage for g in grades) / len(grades), 1)

    at_risk = []
    for g in grades:
        if g.percentage < threshold:
            at_risk.append({
                "student_id": g.student_id,
                "student_name": g.student.full_name,
                "class_id": g.class_id,
                "class_name": g.school_class.class_name,
                "percentage": g.percentage,
                "letter_grade": g.letter_grade,
            })

    busiest = (
        db.session.query(SchoolClass.id, SchoolClass.class_name, func.count(Assignment.id).label("n"))
        .join(Assignment, Assignment.class_id == SchoolClass.id)
        .group_by(SchoolClass.id, SchoolClass.class_name)
        .order_by(func.count(Assignment.id).desc(), SchoolClass.id.asc())
        .first()
    )

    return {
        "total_students": db.session.query(func.count(Student.id)).scalar(),
        "total_classes": db.session.query(func.count(SchoolClass.id)).scalar(),
        "total_assignments": db.session.query(func.count(Assignment.id)).scalar(),
        "average_percentage": average,
        "at_risk_threshold": threshold,
        "at_risk": at_risk,
        "most_assignments_class": (
            {"class_id": busiest.id, "class_name": busiest.class_name, "count": busiest.n}
            if busiest else None
        ),
        "upcoming_window_days": window_days,
        "upcoming": _upcoming_assignments(now, now + timedelta(days=window_days)),
    }
