from decimal import Decimal
from types import SimpleNamespace

from garment_erp.payroll.services.allowances import calculate_allowances
from garment_erp.payroll.services.attendance import AttendanceSummary
from garment_erp.payroll.services.compensation import calculate_compensation, payable_bonuses
from garment_erp.payroll.services.overtime import calculate_overtime


def allowance(allowance_type, amount, calculation_method):
    return SimpleNamespace(allowance_type=allowance_type, amount=amount, calculation_method=calculation_method)


def bonus(amount, status="approved", month=1, year=2026, pk=1):
    return SimpleNamespace(
        pk=pk, bonus_type="Target", amount=amount, status=status,
        period_month=month, period_year=year, reason="Target tercapai",
    )


def test_per_day_and_per_month_allowances():
    result = calculate_allowances(
        [allowance("transport", 10000, "per_day"), allowance("jabatan", 300000, "per_month")],
        21,
    )

    assert result["breakdown"] == {"transport": 210000, "jabatan": 300000}
    assert result["total"] == 510000


def test_per_month_allowance_ignores_work_days():
    assert calculate_allowances([allowance("jabatan", 300000, "per_month")], 0)["total"] == 300000


def test_allowances_of_same_type_are_summed():
    result = calculate_allowances(
        [allowance("makan", 10000, "per_day"), allowance("makan", 50000, "per_month")],
        10,
    )

    assert result["breakdown"] == {"makan": 150000}
    assert result["total"] == 150000


def test_overtime_pay():
    result = calculate_overtime(Decimal("5"), 2)

    assert result["total"] == 250000
    assert result["breakdown"] == {
        "weekday_hours": "5",
        "weekday_amount": 50000,
        "holiday_days": 2,
        "holiday_amount": 200000,
    }


def test_fractional_overtime_hours():
    result = calculate_overtime(Decimal("1.25"), 0)

    assert result["total"] == 12500
    assert result["breakdown"]["weekday_hours"] == "1.25"


def test_only_approved_bonuses_of_the_month_are_paid():
    bonuses = [
        bonus(200000, pk=1),
        bonus(50000, status="pending", pk=2),
        bonus(75000, month=2, pk=3),
        bonus(90000, year=2025, pk=4),
    ]

    assert [b.pk for b in payable_bonuses(bonuses, 1, 2026)] == [1]


def test_gross_salary_is_sum_of_components():
    summary = AttendanceSummary(
        total_work_days=20,
        weekday_overtime_hours=Decimal("3"),
        holiday_overtime_days=1,
    )

    compensation = calculate_compensation(
        daily_rate=150000,
        attendance=summary,
        allowances=[allowance("transport", 15000, "per_day")],
        bonuses=[bonus(200000), bonus(50000, status="pending", pk=2)],
        month=1,
        year=2026,
    )

    assert compensation.base_salary == 3000000
    assert compensation.total_allowances == 300000
    assert compensation.total_overtime == 130000
    assert compensation.total_bonuses == 200000
    assert compensation.gross_salary == 3630000
    assert compensation.bonus_breakdown == [
        {"bonus_id": 1, "type": "Target", "amount": 200000, "reason": "Target tercapai"},
    ]
