import pytest

from src.hr_console.hr_console.employees.model import Employee
from src.hr_console.hr_console.main import create_app


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    container.employees_repo.create(Employee(employee_id="emp-1", name="Asha", email="asha@example.com"))
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, uid, role):
    with client.session_transaction() as sess:
        sess["uid"] = uid
        sess["email"] = f"{uid}@example.com"
        sess["role"] = role


def test_requires_sign_in(client):
    resp = client.post("/api/attendance/clock-in")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_hr_routes_reject_employees(client):
    _login(client, "emp-1", "employee")
    assert client.get("/api/employees").status_code == 403


def test_clock_in_and_out(client):
    _login(client, "emp-1", "employee")

    assert client.post("/api/attendance/clock-in", json={"location": "HQ"}).status_code == 201
    assert client.post("/api/attendance/clock-in").status_code == 400
    resp = client.post("/api/attendance/clock-out", json={"location": "Client site"})

    assert resp.status_code == 200
    session = resp.get_json()["record"]["sessions"][0]
    assert session["logout"]
    assert session["login_location"] == "HQ"
    assert session["logout_location"] == "Client site"


def test_employee_cannot_read_someone_elses_month(client):
    _login(client, "emp-2", "employee")
    resp = client.get("/api/attendance/emp-1/month/2024-03")
    assert resp.status_code == 403


def test_leave_flow_over_http(client, container):
    _login(client, "emp-1", "employee")
    resp = client.post("/api/leaves", json={"date": "2024-03-08", "reason": "Trip"})
    assert resp.status_code == 201

    _login(client, "hr-1", "admin")
    assert client.post("/api/summaries/emp-1/2024-03/generate").status_code == 200

    listing = client.get("/api/leaves?month=2024-03").get_json()
    assert [r["employee_id"] for r in listing["pending"]] == ["emp-1"]

    missing_comment = client.post("/api/leaves/emp-1/2024-03-08/accept", json={})
    assert missing_comment.status_code == 400

    accepted = client.post("/api/leaves/emp-1/2024-03-08/accept", json={"comment": "ok"})
    assert accepted.status_code == 200
    assert accepted.get_json()["adjustment"]["marked_as"] == "present"

    summary = client.get("/api/summaries/emp-1/2024-03").get_json()["summary"]
    assert summary["carry_forward_leaves"] == 1
    assert summary["present_days"] == 1

    history = client.get("/api/leaves/history?month=2024-03").get_json()["entries"]
    assert history[0]["final_carry_forward_left"] == 1


def test_unknown_leave_is_404(client):
    _login(client, "hr-1", "admin")
    resp = client.post("/api/leaves/emp-1/2024-03-08/reject", json={"comment": "no"})
    assert resp.status_code == 404


def test_bad_date_is_400(client):
    _login(client, "emp-1", "employee")
    resp = client.post("/api/leaves", json={"date": "08/03/2024", "reason": "Trip"})
    assert resp.status_code == 400


def test_payslip_csv_download(client):
    _login(client, "hr-1", "admin")
    created = client.post("/api/salary-profiles", json={"employee_id": "emp-1", "basic_salary": 30000})
    assert created.status_code == 201

    assert client.post("/api/payslips/emp-1/2024-03", json={"tax_percent": 0}).status_code == 201
    resp = client.get("/api/payslips/emp-1/2024-03.csv")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert b"Basic Salary,30000.00" in resp.data


def test_work_location_assignment(client):
    _login(client, "hr-1", "admin")
    resp = client.put(
        "/api/work-locations/emp-1",
        json={"name": "HQ", "latitude": 12.9, "longitude": 77.6, "radius_m": 200},
    )
    assert resp.status_code == 200
    assert client.get("/api/work-locations").get_json()["locations"][0]["name"] == "HQ"

    bad = client.put("/api/work-locations/emp-1", json={"name": "HQ", "latitude": 100, "longitude": 0, "radius_m": 1})
    assert bad.status_code == 400


def test_tax_above_100_percent_is_400(client):
    _login(client, "hr-1", "admin")
    client.post("/api/salary-profiles", json={"employee_id": "emp-1", "basic_salary": 30000})

    resp = client.post("/api/payslips/emp-1/2024-03/preview", json={"tax_percent": 120})

    assert resp.status_code == 400
    assert "Tax %" in resp.get_json()["message"]
