"""
Kasbon amortization.

Estimation runs while a period is generated and only records what will be
withheld. The stored balances move in `commit_deductions`, which runs once,
when the owner approves the period.
"""
import logging

from django.db import models
from django.db.models import Case, F, Value, When
from django.utils import timezone

from garment_erp.hr.models import Deduction

logger = logging.getLogger(__name__)


def installment_for(deduction) -> int:
    return min(deduction.installment_per_period, deduction.remaining_amount)


def estimate_deductions(deductions):
    total = 0
    breakdown = []

    for deduction in deductions:
        amount = installment_for(deduction)
        total += amount
        breakdown.append({
            "deduction_id": deduction.pk,
            "type": deduction.deduction_type,
            "amount": amount,
            "remaining": deduction.remaining_amount - amount,
        })

    return {
        "total": total,
        "breakdown": breakdown,
    }


def update_deduction_balance(deduction_id, amount: int) -> bool:
    """
    Withhold ``amount`` from an active deduction in one conditional UPDATE.

    The balance is clamped at zero and the deduction flips to ``paid_off`` in
    the same statement, so concurrent approvals can't read a stale balance.
    Returns False when no active deduction with that id exists.
    """
    pays_off = models.Q(remaining_amount__lte=amount)
    updated = Deduction.objects.filter(pk=deduction_id, status="active").update(
        remaining_amount=Case(
            When(pays_off, then=Value(0)),
            default=F("remaining_amount") - amount,
            output_field=models.PositiveBigIntegerField(),
        ),
        status=Case(
            When(pays_off, then=Value("paid_off")),
            default=Value("active"),
            output_field=models.CharField(),
        ),
        updated_at=timezone.now(),
    )
    return updated == 1


def _resolve_active_deduction_id(employee_id, line):
    qs = Deduction.objects.filter(employee_id=employee_id, deduction_type=line["type"], status="active")
    if line.get("deduction_id"):
        qs = qs.filter(pk=line["deduction_id"])
    return qs.order_by("created_at", "id").values_list("pk", flat=True).first()


def commit_deductions(entries):
    """
    Apply every withheld installment of the given payroll entries.

    Returns the breakdown lines that could not be applied because their
    deduction was deleted or already paid off since generation.
    """
    skipped = []

    for entry in entries:
        for line in entry.deduction_breakdown or []:
            amount = line.get("amount", 0)
            if amount <= 0:
                continue

            deduction_id = _resolve_active_deduction_id(entry.employee_id, line)
            if deduction_id is None or not update_deduction_balance(deduction_id, amount):
                logger.warning(
                    f"No active {line['type']} deduction {line.get('deduction_id')} for employee "
                    f"{entry.employee_id}; skipped withholding {amount} from entry {entry.pk}"
                )
                skipped.append({
                    "entry_id": entry.pk,
                    "employee_id": entry.employee_id,
                    "deduction_id": line.get("deduction_id"),
                    "type": line["type"],
                    "amount": amount,
                })

    return skipped
