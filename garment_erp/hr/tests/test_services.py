from datetime import date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from django.db import IntegrityError, transaction

from garment_erp.common.exceptions import AuthorizationError, ConflictError, ValidationError
from garment_erp.hr.models import AttendanceRecord, Bonus, Deduction
from garment_erp.hr.services.attendance_service import calculate_worked_hours, record_manual_attendance
from garment_erp.hr.services.compensation_service import (
    add_bonus, update_bonus, delete_bonus, approve_bonus, add_kasbon, delete_deduction,
)
from garment_erp.hr.services.employee_service import create_employee, update_employee, deactivate_employee

JAKARTA = ZoneInfo("Asia/Jakarta")


def at(day, hour, minute=0):
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=JAKARTA)


EMPLOYEE_DATA = {
    "nik": "3201010101900010",
    "full_name": "Dewi Lestari",
    "department": "Finishing",
    "position": "QC",
    "daily_rate": 130000,
    "join_date": date(2025, 6, 1),
}


@pytest.mark.django_db
def test_create_employee(hr_user):
    employee = create_employee(caller=hr_user, **EMPLOYEE_DATA)

    assert employee.status == "active"
    assert employee.bank_account is None


@pytest.mark.django_db
def test_duplicate_nik_is_rejected(hr_user, employee):
    with pytest.raises(ConflictError):
        create_employee(caller=hr_user, **{**EMPLOYEE_DATA, "nik": employee.nik})


@pytest.mark.django_db
def test_create_employee_requires_fields(hr_user):
    with pytest.raises(ValidationError, match="daily_rate"):
        create_employee(caller=hr_user, **{**EMPLOYEE_DATA, "daily_rate": None})


@pytest.mark.django_db
def test_create_employee_requires_permission(plain_user):
    with pytest.raises(AuthorizationError):
        create_employee(caller=plain_user, **EMPLOYEE_DATA)


@pytest.mark.django_db
def test_nik_is_immutable(admin_user, employee):
    with pytest.raises(ValidationError):
        update_employee(employee, caller=admin_user, nik="9999")

    employee = update_employee(employee, caller=admin_user, position="Kepala Jahit", daily_rate=175000)
    employee.refresh_from_db()
    assert (employee.position, employee.daily_rate) == ("Kepala Jahit", 175000)


@pytest.mark.django_db
def test_deactivate_employee(admin_user, employee):
    deactivate_employee(employee, caller=admin_user)

    employee.refresh_from_db()
    assert employee.status == "inactive"
    with pytest.raises(ValidationError):
        deactivate_employee(employee, caller=admin_user)


def test_worked_hours_subtract_break():
    day = date(2026, 1, 5)

    hours = calculate_worked_hours(at(day, 7), at(day, 17, 30))

    assert hours.effective == Decimal("9.50")
    assert hours.overtime == Decimal("1.50")
    assert hours.deficit == Decimal("0.00")


def test_short_shift_has_deficit():
    day = date(2026, 1, 5)

    hours = calculate_worked_hours(at(day, 8), at(day, 12))

    assert hours.effective == Decimal("3.00")
    assert hours.overtime == Decimal("0.00")
    assert hours.deficit == Decimal("5.00")


def test_check_out_before_check_in():
    day = date(2026, 1, 5)

    with pytest.raises(ValidationError):
        calculate_worked_hours(at(day, 17), at(day, 8))


@pytest.mark.django_db
def test_sunday_shift_is_holiday_overtime(admin_user, employee):
    sunday = date(2026, 1, 4)

    record = record_manual_attendance(
        caller=admin_user, employee=employee, date=sunday,
        check_in=at(sunday, 7), check_out=at(sunday, 13),
    )

    assert record.status == "holiday_overtime"
    assert record.method == "manual"
    assert record.effective_hours == Decimal("5.00")


@pytest.mark.django_db
def test_short_sunday_shift_is_present(admin_user, employee):
    sunday = date(2026, 1, 4)

    record = record_manual_attendance(
        caller=admin_user, employee=employee, date=sunday,
        check_in=at(sunday, 8), check_out=at(sunday, 11),
    )

    assert record.status == "present"


@pytest.mark.django_db
def test_manual_attendance_upserts(admin_user, employee):
    day = date(2026, 1, 5)
    record_manual_attendance(caller=admin_user, employee=employee, date=day, check_in=at(day, 8), check_out=at(day, 12))

    record = record_manual_attendance(
        caller=admin_user, employee=employee, date=day, check_in=at(day, 7), check_out=at(day, 18),
    )

    assert AttendanceRecord.objects.filter(employee=employee, date=day).count() == 1
    assert record.overtime_hours == Decimal("2.00")


@pytest.mark.django_db
def test_manual_attendance_for_inactive_employee(admin_user, make_employee):
    inactive = make_employee("3201010101900011", status="inactive")
    day = date(2026, 1, 5)

    with pytest.raises(ValidationError):
        record_manual_attendance(
            caller=admin_user, employee=inactive, date=day, check_in=at(day, 8), check_out=at(day, 16),
        )


@pytest.mark.django_db
def test_bonus_lifecycle(hr_user, owner, employee):
    bonus = add_bonus(employee, caller=hr_user, bonus_type="Target", amount=200000, period_month=1, period_year=2026)
    assert bonus.status == "pending"

    bonus = update_bonus(bonus, caller=hr_user, amount=250000)
    assert bonus.amount == 250000

    bonus = approve_bonus(bonus, caller=owner)
    assert bonus.status == "approved"
    assert bonus.approved_by == owner
    assert bonus.approved_at is not None

    with pytest.raises(ValidationError):
        update_bonus(bonus, caller=hr_user, amount=1)
    with pytest.raises(ValidationError):
        delete_bonus(bonus, caller=hr_user)


@pytest.mark.django_db
@pytest.mark.parametrize("amount, month", [(0, 1), (-5, 1), (100000, 0), (100000, 13)])
def test_invalid_bonus(hr_user, employee, amount, month):
    with pytest.raises(ValidationError):
        add_bonus(employee, caller=hr_user, bonus_type="Target", amount=amount, period_month=month, period_year=2026)

    assert not Bonus.objects.exists()


@pytest.mark.django_db
def test_only_owner_approves_bonus(hr_user, admin_user, employee):
    bonus = add_bonus(employee, caller=hr_user, bonus_type="Target", amount=200000, period_month=1, period_year=2026)

    for caller in (hr_user, admin_user):
        with pytest.raises(AuthorizationError):
            approve_bonus(bonus, caller=caller)

    bonus.refresh_from_db()
    assert bonus.status == "pending"


@pytest.mark.django_db
def test_kasbon_starts_untouched(hr_user, employee):
    kasbon = add_kasbon(employee, caller=hr_user, total_amount=500000, installment_per_period=100000)

    assert kasbon.remaining_amount == 500000
    assert kasbon.status == "active"
    assert kasbon.deduction_type == "kasbon"


@pytest.mark.django_db
def test_untouched_kasbon_can_be_deleted(hr_user, employee):
    kasbon = add_kasbon(employee, caller=hr_user, total_amount=500000, installment_per_period=100000)

    delete_deduction(kasbon, caller=hr_user)

    assert not Deduction.objects.exists()


@pytest.mark.django_db
def test_partially_repaid_kasbon_cannot_be_deleted(hr_user, employee):
    kasbon = add_kasbon(employee, caller=hr_user, total_amount=500000, installment_per_period=100000)
    Deduction.objects.filter(pk=kasbon.pk).update(remaining_amount=400000)

    with pytest.raises(ValidationError):
        delete_deduction(kasbon, caller=hr_user)

    assert Deduction.objects.filter(pk=kasbon.pk).exists()


@pytest.mark.django_db
def test_kasbon_balance_cannot_exceed_total(employee):
    with pytest.raises(IntegrityError), transaction.atomic():
        Deduction.objects.create(
            employee=employee, total_amount=100000, remaining_amount=150000, installment_per_period=50000,
        )

    assert not Deduction.objects.exists()


@pytest.mark.django_db
def test_bonus_month_is_checked_by_database(employee):
    with pytest.raises(IntegrityError), transaction.atomic():
        Bonus.objects.create(employee=employee, bonus_type="Target", amount=100000, period_month=13, period_year=2026)
