from dataclasses import dataclass, field

from garment_erp.payroll.services.allowances import calculate_allowances
from garment_erp.payroll.services.attendance import AttendanceSummary
from garment_erp.payroll.services.overtime import calculate_overtime

APPROVED = "approved"


def payable_bonuses(bonuses, month: int, year: int):
    """Only approved bonuses booked for the payroll month are paid out."""
    return [
        bonus for bonus in bonuses
        if bonus.status == APPROVED and bonus.period_month == month and bonus.period_year == year
    ]


@dataclass
class Compensation:
    total_work_days: int
    daily_rate: int
    base_salary: int
    total_allowances: int
    total_overtime: int
    total_bonuses: int
    allowance_breakdown: dict = field(default_factory=dict)
    overtime_breakdown: dict = field(default_factory=dict)
    bonus_breakdown: list = field(default_factory=list)

    @property
    def gross_salary(self) -> int:
        return self.base_salary + self.total_allowances + self.total_overtime + self.total_bonuses


def calculate_compensation(
    *,
    daily_rate: int,
    attendance: AttendanceSummary,
    allowances,
    bonuses,
    month: int,
    year: int,
) -> Compensation:
    work_days = attendance.total_work_days

    allowance_result = calculate_allowances(allowances, work_days)
    overtime_result = calculate_overtime(
        attendance.weekday_overtime_hours,
        attendance.holiday_overtime_days,
    )

    paid_bonuses = payable_bonuses(bonuses, month, year)
    bonus_breakdown = [
        {"bonus_id": bonus.pk, "type": bonus.bonus_type, "amount": bonus.amount, "reason": bonus.reason}
        for bonus in paid_bonuses
    ]

    return Compensation(
        total_work_days=work_days,
        daily_rate=daily_rate,
        base_salary=daily_rate * work_days,
        total_allowances=allowance_result["total"],
        total_overtime=overtime_result["total"],
        total_bonuses=sum(bonus.amount for bonus in paid_bonuses),
        allowance_breakdown=allowance_result["breakdown"],
        overtime_breakdown=overtime_result["breakdown"],
        bonus_breakdown=bonus_breakdown,
    )
