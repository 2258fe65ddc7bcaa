from __future__ import annotations

from flask import url_for

from . import bp
from . import services as svc
from .schemas import (
    AssignmentIn, AssignmentOut,
    ClassIn, ClassOut,
    StudentIn, StudentOut,
)
from blueprints.core.http import created, dump, dump_list, int_arg, no_content, ok, parse_body

# ----------------------- CRUD JSON API -----------------------
# Каждый ресурс: list(GET), create(POST), get(GET), update(PUT), delete(DELETE).
# URL: /api/v1/<resource>[/<id>]

# ---- Students ----
@bp.get("/students")
def api_students_list():
    return ok(dump_list(StudentOut, svc.list_students()))

@bp.post("/students")
def api_students_create():
    parsed = parse_body(StudentIn)
    st = svc.create_student(**parsed.model_dump())
    return created(url_for("directory.api_students_get", id=st.id), dump(StudentOut, st))

@bp.get("/students/<int:id>")
def api_students_get(id: int):
    return ok(dump(StudentOut, svc.get_student(id)))

@bp.put("/students/<int:id>")
def api_students_update(id: int):
    parsed = parse_body(StudentIn)
    return ok(dump(StudentOut, svc.update_student(id, **parsed.model_dump())))

@bp.delete("/students/<int:id>")
def api_students_delete(id: int):
    svc.delete_student(id)
    return no_content()

# ---- Classes ----
@bp.get("/classes")
def api_classes_list():
    return ok(dump_list(ClassOut, svc.list_classes()))

@bp.post("/classes")
def api_classes_create():
    parsed = parse_body(ClassIn)
    sc = svc.create_class(**parsed.model_dump())
    return created(url_for("directory.api_classes_get", id=sc.id), dump(ClassOut, sc))

@bp.get("/classes/<int:id>")
def api_classes_get(id: int):
    return ok(dump(ClassOut, svc.get_class(id)))

@bp.put("/classes/<int:id>")
def api_classes_update(id: int):
    parsed = parse_body(ClassIn)
    return ok(dump(ClassOut, svc.update_class(id, **parsed.model_dump())))

@bp.delete("/classes/<int:id>")
def api_classes_delete(id: int):
    svc.delete_class(id)
    return no_content()

# ---- Assignments ----
@bp.get("/assignments")
def api_assignments_list():
    return ok(dump_list(AssignmentOut, svc.list_assignments(class_id=int_arg("class_id"))))

@bp.post("/assignments")
def api_assignments_create():
    parsed = parse_body(AssignmentIn)
    a = svc.create_assignment(**parsed.model_dump())
    return created(url_for("directory.api_assignments_get", id=a.id), dump(AssignmentOut, a))

@bp.get("/assignments/<int:id>")
def api_assignments_get(id: int):
    return ok(dump(AssignmentOut, svc.get_assignment(id)))

@bp.put("/assignments/<int:id>")
def api_assignments_update(id: int):
    parsed = parse_body(AssignmentIn)
    return ok(dump(AssignmentOut, svc.update_assignment(id, **parsed.model_dump())))

@bp.delete("/assignments/<int:id>")
def api_assignments_delete(id: int):
    svc.delete_assignment(id)
    return no_content()
