import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction
from django.utils import timezone

from garment_erp.common.authorization import require_permission
from garment_erp.common.exceptions import ValidationError
from garment_erp.hr.models import AttendanceRecord, Employee

logger = logging.getLogger(__name__)

BREAK_HOURS = Decimal("1.00")
STANDARD_HOURS = Decimal("8.00")
# Minimum effective hours on a Sunday for the day to count as holiday overtime.
HOLIDAY_OVERTIME_MIN_HOURS = Decimal("4.00")
SUNDAY = 6


@dataclass(frozen=True)
class WorkedHours:
    total: Decimal
    effective: Decimal
    overtime: Decimal
    deficit: Decimal


def _hours(value) -> Decimal:
    return Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def calculate_worked_hours(check_in, check_out) -> WorkedHours:
    """
    One hour of break is always subtracted; anything past eight effective
    hours is overtime and anything short of eight is a deficit.
    """
    if check_out < check_in:
        raise ValidationError("Check-out must be after check-in")

    total = _hours((check_out - check_in).total_seconds() / 3600)
    effective = max(Decimal("0.00"), total - BREAK_HOURS)
    overtime = max(Decimal("0.00"), effective - STANDARD_HOURS)
    deficit = max(Decimal("0.00"), STANDARD_HOURS - effective)
    return WorkedHours(total=total, effective=effective, overtime=overtime, deficit=deficit)


def classify_attendance(check_out, effective_hours) -> str:
    local_check_out = timezone.localtime(check_out) if timezone.is_aware(check_out) else check_out
    if local_check_out.weekday() == SUNDAY and effective_hours >= HOLIDAY_OVERTIME_MIN_HOURS:
        return "holiday_overtime"
    return "present"


@transaction.atomic
def record_manual_attendance(*, caller, employee: Employee, date, check_in, check_out, notes="") -> AttendanceRecord:
    """
    Fallback for days the fingerprint reader missed. Upserts the
    (employee, date) record.
    """
    require_permission(caller, "manage_attendance")

    if not employee.is_active:
        raise ValidationError("Employee not found or inactive")

    hours = calculate_worked_hours(check_in, check_out)
    status = classify_attendance(check_out, hours.effective)

    record, created = AttendanceRecord.objects.update_or_create(
        employee=employee,
        date=date,
        defaults={
            "check_in": check_in,
            "check_out": check_out,
            "effective_hours": hours.effective,
            "overtime_hours": hours.overtime,
            "deficit_hours": hours.deficit,
            "status": status,
            "method": "manual",
            "notes": notes or f"Manual entry by {caller.email}",
        },
    )
    logger.info(
        f"Manual attendance {'created' if created else 'updated'} for {employee.nik} on {date}: "
        f"{hours.effective}h effective, {hours.overtime}h overtime, status={status}"
    )
    return record
