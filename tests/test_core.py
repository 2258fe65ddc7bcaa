from __future__ import annotations
import json
import logging

import pytest

from app import create_app
from extensions import db
from models import OverallGrade, Score
from blueprints.core.routes import JSONFormatter

def test_health_ok():
    app = create_app("test")
    with app.test_client() as c:
        rv = c.get("/health")
        assert rv.status_code == 200
        assert rv.get_json()["status"] == "ok"

def test_bad_grade_scale_fails_fast():
    with pytest.raises(ValueError):
        create_app("test", {"GRADE_SCALE": ((90.0, "A"), (60.0, "D"))})

def test_json_formatter_includes_request_fields():
    rec = logging.LogRecord("x", logging.INFO, __file__, 1, "request handled", None, None)
    rec.path, rec.status = "/health", 200
    payload = json.loads(JSONFormatter().format(rec))
    assert payload["msg"] == "request handled"
    assert payload["path"] == "/health" and payload["status"] == 200
    assert payload["ts"].endswith("Z")

def test_seed_and_recompute_commands(app_ctx):
    runner = app_ctx.test_cli_runner()
    r = runner.invoke(args=["init-db"])
    assert r.exit_code == 0

    r = runner.invoke(args=["seed-demo"])
    assert r.exit_code == 0, r.output
    assert Score.query.count() == 5
    stored = {(g.student_id, g.class_id): (g.percentage, g.letter_grade) for g in OverallGrade.query.all()}
    assert len(stored) == 4

    # повторный запуск ничего не дублирует
    r = runner.invoke(args=["seed-demo"])
    assert r.exit_code == 0
    assert Score.query.count() == 5

    # ручная порча таблицы чинится пересчётом
    row = OverallGrade.query.first()
    row.percentage = 0.0
    db.session.commit()
    r = runner.invoke(args=["recompute-grades"])
    assert r.exit_code == 0
    assert "4" in r.output
    db.session.expire_all()
    assert {(g.student_id, g.class_id): (g.percentage, g.letter_grade) for g in OverallGrade.query.all()} == stored
