from datetime import datetime

from sqlalchemy import ForeignKey, Float, DateTime, Index, Text
from sqlalchemy.orm import relationship, Mapped, mapped_column

from extensions import db


# ---------- Core Entities ----------
class Student(db.Model):
    id: Mapped[int] = mapped_column(primary_key=True)
    first_name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(db.String(255))

    enrollments = relationship("Enrollment", back_populates="student", cascade="all, delete")
    scores = relationship("Score", back_populates="student", cascade="all, delete")
    overall_grades = relationship("OverallGrade", back_populates="student", cascade="all, delete")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Student {self.full_name}>"


class SchoolClass(db.Model):
    __tablename__ = "school_class"

    id: Mapped[int] = mapped_column(primary_key=True)
    class_name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    enrollments = relationship("Enrollment", back_populates="school_class", cascade="all, delete")
    assignments = relationship("Assignment", back_populates="school_class", cascade="all, delete")
    overall_grades = relationship("OverallGrade", back_populates="school_class", cascade="all, delete")

    def __repr__(self):
        return f"<SchoolClass {self.class_name}>"


class Enrollment(db.Model):
    student_id: Mapped[int] = mapped_column(ForeignKey("student.id", ondelete="CASCADE"), primary_key=True)
    class_id: Mapped[int] = mapped_column(ForeignKey("school_class.id", ondelete="CASCADE"), primary_key=True)

    student = relationship("Student", back_populates="enrollments")
    school_class = relationship("SchoolClass", back_populates="enrollments")

    __table_args__ = (
        Index("ix_enrollment_class", "class_id"),
    )


class Assignment(db.Model):
    id: Mapped[int] = mapped_column(primary_key=True)
    class_id: Mapped[int] = mapped_column(ForeignKey("school_class.id", ondelete="CASCADE"), nullable=False, index=True)
    assignment_name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    assignment_type: Mapped[str] = mapped_column(db.String(100), nullable=False)
    maximum_score: Mapped[float] = mapped_column(Float, nullable=False)
    due_date: Mapped[datetime | None] = mapped_column(DateTime)

    school_class = relationship("SchoolClass", back_populates="assignments")
    scores = relationship("Score", back_populates="assignment", cascade="all, delete")

    def __repr__(self):
        return f"<Assignment {self.assignment_name}>"


class Score(db.Model):
    student_id: Mapped[int] = mapped_column(ForeignKey("student.id", ondelete="CASCADE"), primary_key=True)
    assignment_id: Mapped[int] = mapped_column(ForeignKey("assignment.id", ondelete="CASCADE"), primary_key=True)
    score: Mapped[float] = mapped_column(Float, nullable=False)

    student = relationship("Student", back_populates="scores")
    assignment = relationship("Assignment", back_populates="scores")

    __table_args__ = (
        Index("ix_score_assignment", "assignment_id"),
    )


# ---------- Derived ----------
class OverallGrade(db.Model):
    """Пишется только движком пересчёта (blueprints.grades.services)."""
    student_id: Mapped[int] = mapped_column(ForeignKey("student.id", ondelete="CASCADE"), primary_key=True)
    class_id: Mapped[int] = mapped_column(ForeignKey("school_class.id", ondelete="CASCADE"), primary_key=True)
    percentage: Mapped[float] = mapped_column(Float, nullable=False)
    letter_grade: Mapped[str] = mapped_column(db.String(8), nullable=False)

    student = relationship("Student", back_populates="overall_grades")
    school_class = relationship("SchoolClass", back_populates="overall_grades")

    __table_args__ = (
        Index("ix_overall_grade_class", "class_id"),
    )
