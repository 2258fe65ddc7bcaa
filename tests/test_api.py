from __future__ import annotations

def _make_class_c(client):
    cid = client.post("/api/v1/classes", json={"class_name": "C", "description": ""}).get_json()["id"]
    a = client.post("/api/v1/assignments", json={
        "class_id": cid, "assignment_name": "A", "assignment_type": "exam", "maximum_score": 100,
        "due_date": "2025-11-01T09:00:00",
    }).get_json()["id"]
    b = client.post("/api/v1/assignments", json={
        "class_id": cid, "assignment_name": "B", "assignment_type": "quiz", "maximum_score": 50,
    }).get_json()["id"]
    x = client.post("/api/v1/students", json={"first_name": "X", "last_name": "One"}).get_json()["id"]
    y = client.post("/api/v1/students", json={"first_name": "Y", "last_name": "Two", "email": "y@example.com"}).get_json()["id"]
    for sid in (x, y):
        r = client.post("/api/v1/enrollments", json={"student_id": sid, "class_id": cid})
        assert r.status_code == 201
    return cid, a, b, x, y

def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json()["status"] == "ok"

def test_student_crud(client):
    r = client.post("/api/v1/students", json={"first_name": "Ada", "last_name": "Lovelace"})
    assert r.status_code == 201
    js = r.get_json()
    assert js == {"id": 1, "first_name": "Ada", "last_name": "Lovelace", "email": None}
    assert r.headers["Location"].endswith("/api/v1/students/1")

    r = client.put("/api/v1/students/1", json={"first_name": "Ada", "last_name": "King", "email": "ada@example.com"})
    assert r.status_code == 200
    assert r.get_json()["email"] == "ada@example.com"

    r = client.get("/api/v1/students")
    assert r.get_json()["meta"]["total"] == 1

    assert client.delete("/api/v1/students/1").status_code == 204
    r = client.get("/api/v1/students/1")
    assert r.status_code == 404
    assert r.get_json()["error"] == "not_found"

def test_validation_errors_are_invalid_input(client):
    r = client.post("/api/v1/students", json={"first_name": " ", "last_name": "X"})
    assert r.status_code == 422
    assert r.get_json()["error"] == "invalid_input"

    cid = client.post("/api/v1/classes", json={"class_name": "C"}).get_json()["id"]
    r = client.post("/api/v1/assignments", json={
        "class_id": cid, "assignment_name": "A", "assignment_type": "t", "maximum_score": 0,
    })
    assert r.status_code == 422
    assert "maximum_score" in r.get_json()["detail"]

    r = client.post("/api/v1/assignments", json={
        "class_id": cid, "assignment_name": "A", "assignment_type": "t", "maximum_score": 1e308,
    })
    assert r.status_code == 422
    assert r.get_json()["error"] == "invalid_input"

    r = client.get("/api/v1/assignments?class_id=abc")
    assert r.status_code == 422

def test_assignment_due_date_round_trip(client):
    cid, a, b, _, _ = _make_class_c(client)
    assert client.get(f"/api/v1/assignments/{a}").get_json()["due_date"] == "2025-11-01T09:00:00"
    assert client.get(f"/api/v1/assignments/{b}").get_json()["due_date"] is None
    items = client.get(f"/api/v1/assignments?class_id={cid}").get_json()["items"]
    assert [i["id"] for i in items] == [a, b]

def test_scenario_via_api(client):
    cid, a, b, x, y = _make_class_c(client)
    for sid, aid, val in ((x, a, 90), (x, b, 40), (y, a, 45)):
        r = client.post("/api/v1/scores", json={"student_id": sid, "assignment_id": aid, "score": val})
        assert r.status_code == 201

    items = client.get("/api/v1/overall-grades").get_json()["items"]
    assert items == [
        {"student_id": x, "class_id": cid, "percentage": 86.67, "letter_grade": "B"},
        {"student_id": y, "class_id": cid, "percentage": 45.0, "letter_grade": "F"},
    ]
    r = client.get(f"/api/v1/overall-grades/{y}/{cid}")
    assert r.get_json()["letter_grade"] == "F"

def test_overall_grade_undefined_and_not_found(client):
    cid, _, _, x, _ = _make_class_c(client)
    r = client.get(f"/api/v1/overall-grades/{x}/{cid}")
    assert r.status_code == 200
    assert r.get_json() == {"student_id": x, "class_id": cid, "percentage": None, "letter_grade": None}

    r = client.get(f"/api/v1/overall-grades/{x}/{cid + 1}")
    assert r.status_code == 404

def test_no_write_route_for_overall_grades(client):
    cid, _, _, x, _ = _make_class_c(client)
    r = client.post("/api/v1/overall-grades", json={"student_id": x, "class_id": cid, "percentage": 100, "letter_grade": "A"})
    assert r.status_code == 405
    r = client.put(f"/api/v1/overall-grades/{x}/{cid}", json={"percentage": 100})
    assert r.status_code == 405

def test_duplicates_are_conflicts(client):
    cid, a, _, x, _ = _make_class_c(client)
    r = client.post("/api/v1/enrollments", json={"student_id": x, "class_id": cid})
    assert r.status_code == 409
    assert r.get_json()["error"] == "not_unique"

    client.post("/api/v1/scores", json={"student_id": x, "assignment_id": a, "score": 10})
    r = client.post("/api/v1/scores", json={"student_id": x, "assignment_id": a, "score": 20})
    assert r.status_code == 409
    r = client.put(f"/api/v1/scores/{x}/{a}", json={"score": 20})
    assert r.status_code == 200
    assert r.get_json()["score"] == 20
    assert client.get(f"/api/v1/overall-grades/{x}/{cid}").get_json()["percentage"] == 20.0

def test_delete_score_and_unenroll(client):
    cid, a, _, x, _ = _make_class_c(client)
    client.post("/api/v1/scores", json={"student_id": x, "assignment_id": a, "score": 70})
    assert client.delete(f"/api/v1/scores/{x}/{a}").status_code == 204
    assert client.get(f"/api/v1/overall-grades/{x}/{cid}").get_json()["percentage"] is None
    assert client.delete(f"/api/v1/scores/{x}/{a}").status_code == 404

    assert client.delete(f"/api/v1/enrollments/{x}/{cid}").status_code == 204
    assert client.get(f"/api/v1/enrollments?class_id={cid}").get_json()["meta"]["total"] == 1
    assert client.delete(f"/api/v1/enrollments/{x}/{cid}").status_code == 404

def test_delete_assignment_cascades_via_api(client):
    cid, a, b, x, _ = _make_class_c(client)
    client.post("/api/v1/scores", json={"student_id": x, "assignment_id": a, "score": 90})
    client.post("/api/v1/scores", json={"student_id": x, "assignment_id": b, "score": 40})
    assert client.delete(f"/api/v1/assignments/{a}").status_code == 204
    assert client.get(f"/api/v1/scores?student_id={x}").get_json()["meta"]["total"] == 1
    assert client.get(f"/api/v1/overall-grades/{x}/{cid}").get_json()["percentage"] == 80.0

def test_dashboard(client):
    cid, a, _, x, y = _make_class_c(client)
    client.post("/api/v1/scores", json={"student_id": x, "assignment_id": a, "score": 95})
    client.post("/api/v1/scores", json={"student_id": y, "assignment_id": a, "score": 50})
    js = client.get("/api/v1/dashboard").get_json()
    assert js["average_percentage"] == 72.5
    assert [r["class_name"] for r in js["at_risk"]] == ["C"]
    assert js["at_risk"][0]["student_name"] == "Y Two"
