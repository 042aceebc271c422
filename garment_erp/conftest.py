import datetime

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rolepermissions.roles import assign_role

from garment_erp.hr.models import Employee, AttendanceRecord

User = get_user_model()


def _user_with_role(email, role=None):
    user = User.objects.create_user(email=email, password="pass", full_name=email.split("@")[0].title())
    if role:
        assign_role(user, role)
    return user


@pytest.fixture
def owner(db):
    return _user_with_role("owner@example.com", "owner")


@pytest.fixture
def admin_user(db):
    return _user_with_role("admin@example.com", "admin")


@pytest.fixture
def hr_user(db):
    return _user_with_role("hr@example.com", "hr")


@pytest.fixture
def plain_user(db):
    return _user_with_role("nobody@example.com")


@pytest.fixture
def employee(db):
    return Employee.objects.create(
        nik="3201010101900001",
        full_name="Siti Aminah",
        department="Produksi",
        position="Penjahit",
        daily_rate=150000,
        join_date=datetime.date(2024, 3, 1),
        bank_account="BCA 1234567890",
    )


@pytest.fixture
def make_employee(db):
    def _make(nik, full_name="Budi Santoso", daily_rate=120000, **extra):
        return Employee.objects.create(
            nik=nik,
            full_name=full_name,
            department=extra.pop("department", "Produksi"),
            position=extra.pop("position", "Operator"),
            daily_rate=daily_rate,
            join_date=extra.pop("join_date", datetime.date(2024, 1, 1)),
            **extra,
        )
    return _make


@pytest.fixture
def work_days():
    """The first ``count`` non-Sunday dates of a month."""
    def _days(year, month, count):
        day = datetime.date(year, month, 1)
        days = []
        while len(days) < count:
            if day.weekday() != 6:
                days.append(day)
            day += datetime.timedelta(days=1)
        return days
    return _days


@pytest.fixture
def make_attendance(db):
    def _make(employee, date, status="present", overtime_hours=0):
        return AttendanceRecord.objects.create(
            employee=employee,
            date=date,
            status=status,
            overtime_hours=overtime_hours,
            effective_hours=8,
        )
    return _make


@pytest.fixture
def api_client():
    def _client(user=None):
        client = APIClient()
        if user is not None:
            client.force_authenticate(user=user)
        return client
    return _client
