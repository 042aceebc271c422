import logging
from types import SimpleNamespace

import pytest

from garment_erp.hr.models import Deduction
from garment_erp.payroll.services.deductions import (
    commit_deductions,
    estimate_deductions,
    update_deduction_balance,
)


@pytest.fixture
def make_kasbon(db, employee):
    def _make(total, installment, remaining=None, emp=None):
        return Deduction.objects.create(
            employee=emp or employee,
            total_amount=total,
            remaining_amount=total if remaining is None else remaining,
            installment_per_period=installment,
        )
    return _make


def entry_for(employee, *lines):
    return SimpleNamespace(pk=99, employee_id=employee.pk, deduction_breakdown=list(lines))


def line(deduction, amount):
    return {"deduction_id": deduction.pk, "type": deduction.deduction_type, "amount": amount}


def test_installment_is_capped_at_remaining_balance(make_kasbon):
    kasbon = make_kasbon(500000, 200000, remaining=150000)

    result = estimate_deductions([kasbon])

    assert result["total"] == 150000
    assert result["breakdown"] == [
        {"deduction_id": kasbon.pk, "type": "kasbon", "amount": 150000, "remaining": 0},
    ]


def test_estimate_does_not_touch_balances(make_kasbon):
    kasbon = make_kasbon(500000, 100000)

    estimate_deductions([kasbon])

    kasbon.refresh_from_db()
    assert kasbon.remaining_amount == 500000


def test_several_advances_are_withheld_separately(make_kasbon):
    first = make_kasbon(300000, 100000)
    second = make_kasbon(50000, 100000)

    result = estimate_deductions([first, second])

    assert result["total"] == 150000
    assert [item["deduction_id"] for item in result["breakdown"]] == [first.pk, second.pk]


def test_partial_payment_keeps_advance_active(make_kasbon):
    kasbon = make_kasbon(500000, 100000)

    assert update_deduction_balance(kasbon.pk, 100000)

    kasbon.refresh_from_db()
    assert kasbon.remaining_amount == 400000
    assert kasbon.status == "active"


def test_payment_reaching_zero_pays_off(make_kasbon):
    kasbon = make_kasbon(500000, 100000, remaining=100000)

    update_deduction_balance(kasbon.pk, 100000)

    kasbon.refresh_from_db()
    assert kasbon.remaining_amount == 0
    assert kasbon.status == "paid_off"


def test_overpayment_clamps_to_zero(make_kasbon):
    kasbon = make_kasbon(500000, 100000, remaining=40000)

    update_deduction_balance(kasbon.pk, 100000)

    kasbon.refresh_from_db()
    assert kasbon.remaining_amount == 0
    assert kasbon.status == "paid_off"


def test_paid_off_advance_is_not_updated(make_kasbon):
    kasbon = make_kasbon(500000, 100000, remaining=0)
    Deduction.objects.filter(pk=kasbon.pk).update(status="paid_off")

    assert not update_deduction_balance(kasbon.pk, 100000)


def test_balance_never_goes_negative(make_kasbon):
    kasbon = make_kasbon(250000, 100000)

    for _ in range(5):
        update_deduction_balance(kasbon.pk, 100000)
        kasbon.refresh_from_db()
        assert kasbon.remaining_amount >= 0

    assert kasbon.remaining_amount == 0
    assert kasbon.status == "paid_off"


def test_commit_applies_each_line(employee, make_kasbon):
    first = make_kasbon(300000, 100000)
    second = make_kasbon(80000, 100000)

    skipped = commit_deductions([entry_for(employee, line(first, 100000), line(second, 80000))])

    first.refresh_from_db()
    second.refresh_from_db()
    assert skipped == []
    assert (first.remaining_amount, first.status) == (200000, "active")
    assert (second.remaining_amount, second.status) == (0, "paid_off")


def test_commit_reports_vanished_advances(employee, make_kasbon, caplog):
    kasbon = make_kasbon(300000, 100000)
    gone = make_kasbon(100000, 50000)
    gone_line = line(gone, 50000)
    gone.delete()

    with caplog.at_level(logging.WARNING):
        skipped = commit_deductions([entry_for(employee, line(kasbon, 100000), gone_line)])

    assert skipped == [{
        "entry_id": 99,
        "employee_id": employee.pk,
        "deduction_id": gone_line["deduction_id"],
        "type": "kasbon",
        "amount": 50000,
    }]
    assert "skipped withholding 50000" in caplog.text
    kasbon.refresh_from_db()
    assert kasbon.remaining_amount == 200000


def test_commit_ignores_other_employees_advances(employee, make_employee, make_kasbon):
    other = make_employee("3201010101900099")
    foreign = make_kasbon(300000, 100000, emp=other)

    skipped = commit_deductions([entry_for(employee, line(foreign, 100000))])

    foreign.refresh_from_db()
    assert len(skipped) == 1
    assert foreign.remaining_amount == 300000
