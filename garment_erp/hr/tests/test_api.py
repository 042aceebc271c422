from datetime import date

import pytest

from garment_erp.hr.models import Bonus, Deduction, Employee


@pytest.mark.django_db
def test_employee_create_and_list(api_client, hr_user):
    client = api_client(hr_user)
    payload = {
        "nik": "3201010101900020",
        "full_name": "Rina Marlina",
        "department": "Potong",
        "position": "Pemotong",
        "daily_rate": 125000,
        "join_date": "2025-02-01",
    }

    resp = client.post("/api/hr/employees/", payload, format="json")
    assert resp.status_code == 201, resp.content
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["nik"] == "3201010101900020"
    assert body["data"]["status"] == "active"

    resp = client.get("/api/hr/employees/", {"status": "active"})
    assert resp.status_code == 200
    assert [e["nik"] for e in resp.json()["data"]] == ["3201010101900020"]


@pytest.mark.django_db
def test_employee_duplicate_nik(api_client, hr_user, employee):
    payload = {
        "nik": employee.nik,
        "full_name": "Orang Lain",
        "department": "Potong",
        "position": "Pemotong",
        "daily_rate": 125000,
        "join_date": "2025-02-01",
    }

    resp = api_client(hr_user).post("/api/hr/employees/", payload, format="json")

    # the unique field validator answers before the service does
    assert resp.status_code in (400, 409)
    assert resp.json()["success"] is False
    assert Employee.objects.count() == 1


@pytest.mark.django_db
def test_employee_deactivate(api_client, admin_user, employee):
    resp = api_client(admin_user).post(f"/api/hr/employees/{employee.pk}/deactivate/")

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    employee.refresh_from_db()
    assert employee.status == "inactive"


@pytest.mark.django_db
def test_employee_cannot_be_deleted(api_client, owner, employee):
    resp = api_client(owner).delete(f"/api/hr/employees/{employee.pk}/")

    assert resp.status_code == 405
    assert Employee.objects.filter(pk=employee.pk).exists()


@pytest.mark.django_db
def test_hr_requires_role(api_client, plain_user):
    resp = api_client(plain_user).get("/api/hr/employees/")

    assert resp.status_code == 403
    assert resp.json()["success"] is False
    assert resp.json()["error"]


@pytest.mark.django_db
def test_manual_attendance(api_client, admin_user, employee):
    payload = {
        "employee": employee.pk,
        "date": "2026-01-05",
        "check_in": "2026-01-05T07:00:00+07:00",
        "check_out": "2026-01-05T17:30:00+07:00",
        "notes": "<b>fingerprint</b> rusak",
    }

    resp = api_client(admin_user).post("/api/hr/attendance/manual/", payload, format="json")

    assert resp.status_code == 200, resp.content
    data = resp.json()["data"]
    assert data["status"] == "present"
    assert data["overtime_hours"] == "1.50"
    assert data["method"] == "manual"
    assert data["notes"] == "fingerprint rusak"


@pytest.mark.django_db
def test_manual_attendance_inactive_employee(api_client, admin_user, make_employee):
    inactive = make_employee("3201010101900021", status="inactive")
    payload = {
        "employee": inactive.pk,
        "date": "2026-01-05",
        "check_in": "2026-01-05T08:00:00+07:00",
        "check_out": "2026-01-05T16:00:00+07:00",
    }

    resp = api_client(admin_user).post("/api/hr/attendance/manual/", payload, format="json")

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Employee not found or inactive"}


@pytest.mark.django_db
def test_allowance_crud(api_client, hr_user, employee):
    client = api_client(hr_user)

    resp = client.post("/api/hr/allowances/", {
        "employee": employee.pk, "allowance_type": "transport", "amount": 15000, "calculation_method": "per_day",
    }, format="json")
    assert resp.status_code == 201, resp.content
    allowance_id = resp.json()["data"]["id"]

    resp = client.patch(f"/api/hr/allowances/{allowance_id}/", {"amount": 20000}, format="json")
    assert resp.status_code == 200
    assert resp.json()["data"]["amount"] == 20000

    resp = client.get("/api/hr/allowances/", {"employee": employee.pk})
    assert len(resp.json()["data"]) == 1

    assert client.delete(f"/api/hr/allowances/{allowance_id}/").status_code == 204


@pytest.mark.django_db
def test_bonus_approval_by_owner(api_client, hr_user, owner, employee):
    resp = api_client(hr_user).post("/api/hr/bonuses/", {
        "employee": employee.pk, "bonus_type": "Target", "amount": 200000,
        "period_month": 1, "period_year": 2026, "reason": "Target Januari",
    }, format="json")
    assert resp.status_code == 201, resp.content
    bonus_id = resp.json()["data"]["id"]
    assert resp.json()["data"]["status"] == "pending"

    assert api_client(hr_user).post(f"/api/hr/bonuses/{bonus_id}/approve/").status_code == 403

    resp = api_client(owner).post(f"/api/hr/bonuses/{bonus_id}/approve/")
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "approved"

    resp = api_client(hr_user).delete(f"/api/hr/bonuses/{bonus_id}/")
    assert resp.status_code == 400
    assert Bonus.objects.filter(pk=bonus_id).exists()


@pytest.mark.django_db
def test_bonus_amount_must_be_positive(api_client, hr_user, employee):
    resp = api_client(hr_user).post("/api/hr/bonuses/", {
        "employee": employee.pk, "bonus_type": "Target", "amount": 0, "period_month": 1, "period_year": 2026,
    }, format="json")

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"].startswith("amount: ")
    assert "amount" in body["errors"]
    assert not Bonus.objects.exists()


@pytest.mark.django_db
def test_kasbon_create_and_delete(api_client, hr_user, employee):
    client = api_client(hr_user)

    resp = client.post("/api/hr/kasbon/", {
        "employee": employee.pk, "total_amount": 500000, "installment_per_period": 100000,
    }, format="json")
    assert resp.status_code == 201, resp.content
    body = resp.json()["data"]
    assert body["remaining_amount"] == 500000
    assert body["status"] == "active"

    assert client.delete(f"/api/hr/kasbon/{body['id']}/").status_code == 204
    assert not Deduction.objects.exists()


@pytest.mark.django_db
def test_repaid_kasbon_delete_is_rejected(api_client, hr_user, employee):
    kasbon = Deduction.objects.create(
        employee=employee, total_amount=500000, remaining_amount=300000, installment_per_period=100000,
    )

    resp = api_client(hr_user).delete(f"/api/hr/kasbon/{kasbon.pk}/")

    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert Deduction.objects.filter(pk=kasbon.pk).exists()


@pytest.mark.django_db
def test_attendance_filters(api_client, admin_user, employee, make_employee, make_attendance):
    other = make_employee("3201010101900022")
    make_attendance(employee, date(2026, 1, 5))
    make_attendance(employee, date(2026, 1, 6), status="absent")
    make_attendance(employee, date(2026, 2, 2))
    make_attendance(other, date(2026, 1, 5))

    resp = api_client(admin_user).get("/api/hr/attendance/", {
        "employee": employee.pk, "start_date": "2026-01-01", "end_date": "2026-01-31",
    })

    assert resp.status_code == 200
    assert sorted(r["date"] for r in resp.json()["data"]) == ["2026-01-05", "2026-01-06"]
