"""
Payroll period lifecycle: draft -> pending_approval -> approved -> paid.

Every operation takes the acting user as ``caller`` and checks it itself.
Nothing here moves a period backwards, regenerates it, or edits its entries.
"""
import logging
from dataclasses import dataclass, field

from django.db import IntegrityError, transaction
from django.utils import timezone

from garment_erp.common.authorization import require_permission, require_role
from garment_erp.common.exceptions import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from garment_erp.payroll.models import PayrollEntry, PayrollPeriod
from garment_erp.payroll.selectors.payroll_queries import (
    list_active_employees,
    period_name_exists,
)
from garment_erp.payroll.services.deductions import commit_deductions
from garment_erp.payroll.services.payroll_processor import build_payroll_entry
from garment_erp.payroll.services.periods import (
    build_period_name,
    calculate_payment_date,
    can_transition,
)

logger = logging.getLogger(__name__)


@dataclass
class ApprovalResult:
    period: PayrollPeriod
    skipped: list = field(default_factory=list)


def _get_period(period_id, *, lock=False):
    qs = PayrollPeriod.objects.all()
    if lock:
        qs = qs.select_for_update()
    try:
        return qs.get(pk=period_id)
    except PayrollPeriod.DoesNotExist:
        raise NotFoundError("Payroll period not found")


def _ensure_transition(period, target):
    if not can_transition(period.status, target):
        raise InvalidTransitionError(
            f"Cannot move payroll {period.period_name} from {period.status} to {target}"
        )


def generate_payroll(*, start_date, end_date, caller) -> PayrollPeriod:
    """
    Create a draft period and one entry per active employee.

    Entries are computed first and then written together, so a failure for
    any employee leaves no period behind.
    """
    require_permission(caller, "run_payroll", "You are not allowed to generate payroll")

    if not start_date or not end_date:
        raise ValidationError("Start date and end date are required")
    if start_date > end_date:
        raise ValidationError("Start date must not be after end date")

    period_name = build_period_name(start_date)
    if period_name_exists(period_name):
        raise ConflictError(f"Payroll for period {period_name} already exists")

    period = PayrollPeriod(
        period_name=period_name,
        start_date=start_date,
        end_date=end_date,
        payment_date=calculate_payment_date(end_date),
        status=PayrollPeriod.DRAFT,
        created_by=caller,
    )

    try:
        with transaction.atomic():
            entries = [build_payroll_entry(employee, period) for employee in list_active_employees()]

            period.save()
            for entry in entries:
                entry.period = period
            PayrollEntry.objects.bulk_create(entries)
    except IntegrityError:
        # another request created the same period between the check and the insert
        raise ConflictError(f"Payroll for period {period_name} already exists")

    logger.info(
        f"Payroll {period_name} generated by {caller.email}: "
        f"{len(entries)} entries, payment on {period.payment_date}"
    )
    return period


@transaction.atomic
def submit_for_approval(period_id, *, caller) -> PayrollPeriod:
    require_permission(caller, "run_payroll", "You are not allowed to submit payroll")

    period = _get_period(period_id, lock=True)
    _ensure_transition(period, PayrollPeriod.PENDING_APPROVAL)

    period.status = PayrollPeriod.PENDING_APPROVAL
    period.submitted_by = caller
    period.submitted_at = timezone.now()
    period.save(update_fields=["status", "submitted_by", "submitted_at", "updated_at"])

    logger.info(f"Payroll {period.period_name} submitted for approval by {caller.email}")
    return period


@transaction.atomic
def approve_payroll(period_id, *, caller) -> ApprovalResult:
    """
    Approve a submitted period and withhold its kasbon installments.

    The period row stays locked until the transaction ends, so a second
    approval of the same period waits and then fails the status check.
    """
    require_role(caller, "owner", "Only the owner can approve payroll")

    period = _get_period(period_id, lock=True)
    _ensure_transition(period, PayrollPeriod.APPROVED)

    period.status = PayrollPeriod.APPROVED
    period.approved_by = caller
    period.approved_at = timezone.now()
    period.save(update_fields=["status", "approved_by", "approved_at", "updated_at"])

    skipped = commit_deductions(period.entries.all())

    if skipped:
        logger.warning(
            f"Payroll {period.period_name} approved by {caller.email} "
            f"with {len(skipped)} deduction line(s) skipped"
        )
    else:
        logger.info(f"Payroll {period.period_name} approved by {caller.email}")

    return ApprovalResult(period=period, skipped=skipped)
