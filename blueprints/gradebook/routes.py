from __future__ import annotations

from flask import url_for

from . import bp
from . import services as svc
from .schemas import EnrollmentIn, EnrollmentOut, ScoreIn, ScoreOut, ScoreUpdate
from blueprints.core.http import created, dump, dump_list, int_arg, no_content, ok, parse_body

# ---- Enrollments ----
@bp.get("/enrollments")
def api_enrollments_list():
    rows = svc.list_enrollments(student_id=int_arg("student_id"), class_id=int_arg("class_id"))
    return ok(dump_list(EnrollmentOut, rows))

@bp.post("/enrollments")
def api_enrollments_create():
    parsed = parse_body(EnrollmentIn)
    en = svc.enroll(student_id=parsed.student_id, class_id=parsed.class_id)
    return created(
        url_for("gradebook.api_enrollments_list", student_id=en.student_id, class_id=en.class_id),
        dump(EnrollmentOut, en),
    )

@bp.delete("/enrollments/<int:student_id>/<int:class_id>")
def api_enrollments_delete(student_id: int, class_id: int):
    svc.unenroll(student_id=student_id, class_id=class_id)
    return no_content()

# ---- Scores ----
@bp.get("/scores")
def api_scores_list():
    rows = svc.list_scores(student_id=int_arg("student_id"), assignment_id=int_arg("assignment_id"))
    return ok(dump_list(ScoreOut, rows))

@bp.post("/scores")
def api_scores_create():
    parsed = parse_body(ScoreIn)
    sc = svc.create_score(student_id=parsed.student_id, assignment_id=parsed.assignment_id, score=parsed.score)
    return created(
        url_for("gradebook.api_scores_get", student_id=sc.student_id, assignment_id=sc.assignment_id),
        dump(ScoreOut, sc),
    )

@bp.get("/scores/<int:student_id>/<int:assignment_id>")
def api_scores_get(student_id: int, assignment_id: int):
    return ok(dump(ScoreOut, svc.get_score(student_id, assignment_id)))

@bp.put("/scores/<int:student_id>/<int:assignment_id>")
def api_scores_update(student_id: int, assignment_id: int):
    parsed = parse_body(ScoreUpdate)
    return ok(dump(ScoreOut, svc.update_score(student_id, assignment_id, score=parsed.score)))

@bp.delete("/scores/<int:student_id>/<int:assignment_id>")
def api_scores_delete(student_id: int, assignment_id: int):
    svc.delete_score(student_id, assignment_id)
    return no_content()
