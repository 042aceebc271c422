"""
Allowances, bonuses and kasbon (salary advance) records.

These are the inputs of a payroll run. Edits here never touch a payroll period
that has already been generated, and nothing in this module writes a kasbon's
`remaining_amount` after creation; balances only move when a payroll period is
approved.
"""
import logging

from django.db import transaction
from django.utils import timezone

from garment_erp.common.authorization import require_permission, require_role
from garment_erp.common.exceptions import ValidationError
from garment_erp.hr.models import Allowance, Bonus, Deduction, Employee, CALCULATION_METHOD

logger = logging.getLogger(__name__)

CALCULATION_METHODS = {value for value, _ in CALCULATION_METHOD}


def _validate_allowance(allowance_type, amount, calculation_method):
    if not allowance_type:
        raise ValidationError("Allowance type is required")
    if not amount or amount <= 0:
        raise ValidationError("Allowance amount must be greater than zero")
    if calculation_method not in CALCULATION_METHODS:
        raise ValidationError(f"Unknown calculation method: {calculation_method}")


# Allowances

@transaction.atomic
def add_allowance(employee: Employee, *, caller, allowance_type, amount, calculation_method) -> Allowance:
    require_permission(caller, "manage_compensation")
    _validate_allowance(allowance_type, amount, calculation_method)

    allowance = Allowance.objects.create(
        employee=employee,
        allowance_type=allowance_type,
        amount=amount,
        calculation_method=calculation_method,
        is_active=True,
    )
    logger.info(f"Allowance {allowance_type} added to {employee.nik} by {caller.email}")
    return allowance


@transaction.atomic
def update_allowance(allowance: Allowance, *, caller, **data) -> Allowance:
    require_permission(caller, "manage_compensation")
    _validate_allowance(
        data.get("allowance_type", allowance.allowance_type),
        data.get("amount", allowance.amount),
        data.get("calculation_method", allowance.calculation_method),
    )

    for field in ("allowance_type", "amount", "calculation_method", "is_active"):
        if field in data:
            setattr(allowance, field, data[field])
    allowance.save()
    return allowance


@transaction.atomic
def delete_allowance(allowance: Allowance, *, caller) -> None:
    require_permission(caller, "manage_compensation")
    logger.info(f"Allowance {allowance.pk} of {allowance.employee.nik} deleted by {caller.email}")
    allowance.delete()


# Bonuses

def _validate_bonus(bonus_type, amount, period_month, period_year):
    if not bonus_type:
        raise ValidationError("Bonus type is required")
    if not amount or amount <= 0:
        raise ValidationError("Bonus amount must be greater than zero")
    if not period_month or not 1 <= period_month <= 12:
        raise ValidationError("Bonus month must be between 1 and 12")
    if not period_year:
        raise ValidationError("Bonus year is required")


@transaction.atomic
def add_bonus(employee: Employee, *, caller, bonus_type, amount, period_month, period_year, reason="") -> Bonus:
    require_permission(caller, "manage_compensation")
    _validate_bonus(bonus_type, amount, period_month, period_year)

    bonus = Bonus.objects.create(
        employee=employee,
        bonus_type=bonus_type,
        amount=amount,
        period_month=period_month,
        period_year=period_year,
        reason=reason or "",
        status="pending",
        created_by=caller,
    )
    logger.info(f"Bonus {bonus.pk} ({amount}) for {employee.nik} requested by {caller.email}")
    return bonus


def _lock_pending_bonus(bonus: Bonus, action: str) -> Bonus:
    bonus = Bonus.objects.select_for_update().get(pk=bonus.pk)
    if bonus.status != "pending":
        raise ValidationError(f"Only pending bonuses can be {action}")
    return bonus


@transaction.atomic
def update_bonus(bonus: Bonus, *, caller, **data) -> Bonus:
    require_permission(caller, "manage_compensation")
    bonus = _lock_pending_bonus(bonus, "edited")
    _validate_bonus(
        data.get("bonus_type", bonus.bonus_type),
        data.get("amount", bonus.amount),
        data.get("period_month", bonus.period_month),
        data.get("period_year", bonus.period_year),
    )

    for field in ("bonus_type", "amount", "period_month", "period_year", "reason"):
        if field in data:
            setattr(bonus, field, data[field])
    bonus.save()
    return bonus


@transaction.atomic
def delete_bonus(bonus: Bonus, *, caller) -> None:
    require_permission(caller, "manage_compensation")
    bonus = _lock_pending_bonus(bonus, "deleted")
    logger.info(f"Bonus {bonus.pk} of {bonus.employee.nik} deleted by {caller.email}")
    bonus.delete()


@transaction.atomic
def approve_bonus(bonus: Bonus, *, caller) -> Bonus:
    require_role(caller, "owner", "Only the owner can approve bonuses")
    bonus = _lock_pending_bonus(bonus, "approved")

    bonus.status = "approved"
    bonus.approved_by = caller
    bonus.approved_at = timezone.now()
    bonus.save(update_fields=["status", "approved_by", "approved_at", "updated_at"])
    logger.info(f"Bonus {bonus.pk} for {bonus.employee.nik} approved by {caller.email}")
    return bonus


# Kasbon

@transaction.atomic
def add_kasbon(employee: Employee, *, caller, total_amount, installment_per_period, notes="") -> Deduction:
    require_permission(caller, "manage_compensation")
    if not total_amount or total_amount <= 0:
        raise ValidationError("Kasbon total must be greater than zero")
    if not installment_per_period or installment_per_period <= 0:
        raise ValidationError("Installment must be greater than zero")

    deduction = Deduction.objects.create(
        employee=employee,
        deduction_type="kasbon",
        total_amount=total_amount,
        remaining_amount=total_amount,
        installment_per_period=installment_per_period,
        status="active",
        notes=notes or "",
        created_by=caller,
    )
    logger.info(f"Kasbon {deduction.pk} ({total_amount}) for {employee.nik} created by {caller.email}")
    return deduction


@transaction.atomic
def delete_deduction(deduction: Deduction, *, caller) -> None:
    """A kasbon can only be removed before any installment was withheld."""
    require_permission(caller, "manage_compensation")
    deduction = Deduction.objects.select_for_update().get(pk=deduction.pk)
    if not deduction.is_untouched:
        raise ValidationError("Kasbon has already been partially repaid and cannot be deleted")

    logger.info(f"Kasbon {deduction.pk} of {deduction.employee.nik} deleted by {caller.email}")
    deduction.delete()
