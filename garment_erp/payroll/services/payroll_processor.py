from garment_erp.payroll.models import PayrollEntry
from garment_erp.payroll.selectors.payroll_queries import (
    get_attendance,
    get_active_allowances,
    get_bonuses,
    get_active_deductions,
)
from garment_erp.payroll.services.attendance import aggregate_attendance
from garment_erp.payroll.services.compensation import calculate_compensation
from garment_erp.payroll.services.deductions import estimate_deductions


def build_payroll_entry(employee, period):
    """
    Compute one employee's payroll entry for ``period``.

    Nothing is written: the entry is returned unsaved so the caller can insert
    all entries of a period together. Deduction balances are only estimated
    here and move on approval.
    """
    start_date, end_date = period.start_date, period.end_date

    attendance = aggregate_attendance(
        get_attendance(employee, start_date, end_date),
        start_date,
        end_date,
    )

    compensation = calculate_compensation(
        daily_rate=employee.daily_rate,
        attendance=attendance,
        allowances=get_active_allowances(employee),
        bonuses=get_bonuses(employee, start_date.month, start_date.year),
        month=start_date.month,
        year=start_date.year,
    )

    deductions = estimate_deductions(get_active_deductions(employee))

    gross_salary = compensation.gross_salary
    total_deductions = deductions["total"]

    return PayrollEntry(
        period=period,
        employee=employee,
        total_work_days=compensation.total_work_days,
        daily_rate=compensation.daily_rate,
        base_salary=compensation.base_salary,
        total_allowances=compensation.total_allowances,
        total_overtime=compensation.total_overtime,
        total_bonuses=compensation.total_bonuses,
        gross_salary=gross_salary,
        total_deductions=total_deductions,
        net_salary=gross_salary - total_deductions,
        allowance_breakdown=compensation.allowance_breakdown,
        overtime_breakdown=compensation.overtime_breakdown,
        bonus_breakdown=compensation.bonus_breakdown,
        deduction_breakdown=deductions["breakdown"],
    )
