"""
Idempotent seed-скрипт с демо-журналом.
Запуск:
  flask --app app seed-demo
  python seed.py --reset   # дропнуть и пересоздать БД + демо-данные
"""
from __future__ import annotations
import argparse
from datetime import datetime

from extensions import db
from models import Assignment, Enrollment, SchoolClass, Score, Student
from blueprints.directory import services as directory
from blueprints.gradebook import services as gradebook

STUDENTS = [
    ("Ada", "Lovelace", "ada@example.com"),
    ("Alan", "Turing", None),
    ("Grace", "Hopper", "grace@example.com"),
]

CLASSES = [
    ("Mathematics", "Algebra and geometry"),
    ("Computer Science", None),
]

# (класс, название, тип, максимум, срок)
ASSIGNMENTS = [
    ("Mathematics", "Quiz 1", "quiz", 50.0, datetime(2025, 9, 12, 9, 0)),
    ("Mathematics", "Midterm", "exam", 100.0, datetime(2025, 10, 20, 9, 0)),
    ("Computer Science", "Lab 1", "lab", 20.0, None),
]

# (студент, задание, балл)
SCORES = [
    ("Lovelace", "Quiz 1", 47.0),
    ("Lovelace", "Midterm", 92.0),
    ("Turing", "Quiz 1", 31.0),
    ("Turing", "Lab 1", 20.0),
    ("Hopper", "Midterm", 64.5),
]

def _student(last_name: str) -> Student | None:
    return Student.query.filter_by(last_name=last_name).first()

def _class(name: str) -> SchoolClass | None:
    return SchoolClass.query.filter_by(class_name=name).first()

def _assignment(name: str) -> Assignment | None:
    return Assignment.query.filter_by(assignment_name=name).first()

def seed_demo() -> dict:
    """Создаёт недостающее; существующие записи не трогает. Всё идёт через сервисы, чтобы пересчитались итоги."""
    created = {"students": 0, "classes": 0, "assignments": 0, "enrollments": 0, "scores": 0}

    for first, last, email in STUDENTS:
        if not _student(last):
            directory.create_student(first_name=first, last_name=last, email=email)
            created["students"] += 1

    for name, description in CLASSES:
        if not _class(name):
            directory.create_class(class_name=name, description=description)
            created["classes"] += 1

    for cls_name, name, typ, maximum, due in ASSIGNMENTS:
        if not _assignment(name):
            directory.create_assignment(class_id=_class(cls_name).id, assignment_name=name,
                                        assignment_type=typ, maximum_score=maximum, due_date=due)
            created["assignments"] += 1

    for last, a_name, value in SCORES:
        st, a = _student(last), _assignment(a_name)
        if db.session.get(Enrollment, (st.id, a.class_id)) is None:
            gradebook.enroll(student_id=st.id, class_id=a.class_id)
            created["enrollments"] += 1
        if db.session.get(Score, (st.id, a.id)) is None:
            gradebook.create_score(student_id=st.id, assignment_id=a.id, score=value)
            created["scores"] += 1

    return created

if __name__ == "__main__":
    from app import create_app

    parser = argparse.ArgumentParser()
    parser.add_argument("--reset", action="store_true", help="drop and recreate all tables first")
    args = parser.parse_args()

    app = create_app("dev")
    with app.app_context():
        if args.reset:
            db.drop_all()
        db.create_all()
        print("Seeded:", seed_demo())
