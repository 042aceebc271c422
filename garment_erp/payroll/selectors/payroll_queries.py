"""Read side of payroll: what a run consumes and what the API shows."""
from garment_erp.hr.models import Employee, AttendanceRecord, Allowance, Bonus, Deduction, WORK_DAY_STATUSES
from garment_erp.payroll.models import PayrollEntry, PayrollPeriod


def list_active_employees():
    return Employee.objects.filter(status="active").order_by("id")


def get_attendance(employee, start_date, end_date):
    return AttendanceRecord.objects.filter(
        employee=employee,
        date__gte=start_date,
        date__lte=end_date,
        status__in=WORK_DAY_STATUSES,
    )


def get_active_allowances(employee):
    return Allowance.objects.filter(employee=employee, is_active=True).order_by("id")


def get_bonuses(employee, month, year):
    return Bonus.objects.filter(
        employee=employee,
        period_month=month,
        period_year=year,
    ).order_by("id")


def get_active_deductions(employee):
    return Deduction.objects.filter(employee=employee, status="active").order_by("created_at", "id")


def period_name_exists(period_name):
    return PayrollPeriod.objects.filter(period_name=period_name).exists()


def get_period_entries(period):
    return PayrollEntry.objects.filter(period=period).select_related("employee")


def get_latest_payslip(employee, period_name=None):
    qs = PayrollEntry.objects.filter(
        employee=employee,
        period__status__in=[PayrollPeriod.APPROVED, PayrollPeriod.PAID]
    ).select_related("period", "employee")

    if period_name:
        qs = qs.filter(period__period_name=period_name)

    return qs.order_by(
        "-period__start_date",
        "-period__created_at"
    ).first()
