from dataclasses import dataclass
from decimal import Decimal

from garment_erp.hr.models import WORK_DAY_STATUSES

WEEKDAY_OVERTIME_STATUSES = ("present", "late")
HOLIDAY_OVERTIME_STATUS = "holiday_overtime"


@dataclass(frozen=True)
class AttendanceSummary:
    total_work_days: int = 0
    weekday_overtime_hours: Decimal = Decimal("0")
    holiday_overtime_days: int = 0


def aggregate_attendance(records, start_date, end_date) -> AttendanceSummary:
    """
    Reduce an employee's attendance records to the figures payroll needs.

    Absence codes and records outside ``[start_date, end_date]`` are ignored,
    so callers may pass an unfiltered set.
    """
    total_work_days = 0
    weekday_overtime_hours = Decimal("0")
    holiday_overtime_days = 0

    for record in records:
        if record.status not in WORK_DAY_STATUSES:
            continue
        if not start_date <= record.date <= end_date:
            continue

        total_work_days += 1
        if record.status in WEEKDAY_OVERTIME_STATUSES:
            weekday_overtime_hours += Decimal(record.overtime_hours or 0)
        elif record.status == HOLIDAY_OVERTIME_STATUS:
            holiday_overtime_days += 1

    return AttendanceSummary(
        total_work_days=total_work_days,
        weekday_overtime_hours=weekday_overtime_hours,
        holiday_overtime_days=holiday_overtime_days,
    )
