import datetime

from django.conf import settings
from django.utils import dateformat, translation

from garment_erp.payroll.models import PayrollPeriod

PAYMENT_DAY = 3
SUNDAY = 6

ALLOWED_TRANSITIONS = {
    PayrollPeriod.DRAFT: PayrollPeriod.PENDING_APPROVAL,
    PayrollPeriod.PENDING_APPROVAL: PayrollPeriod.APPROVED,
    PayrollPeriod.APPROVED: PayrollPeriod.PAID,
}


def build_period_name(start_date: datetime.date) -> str:
    """Month and year of the start date, e.g. "Januari 2026"."""
    with translation.override(settings.PAYROLL["PERIOD_LOCALE"]):
        return dateformat.format(start_date, "F Y")


def calculate_payment_date(end_date: datetime.date) -> datetime.date:
    """Salaries go out on the 3rd of the following month, the 2nd when the 3rd is a Sunday."""
    if end_date.month == 12:
        payment_date = datetime.date(end_date.year + 1, 1, PAYMENT_DAY)
    else:
        payment_date = datetime.date(end_date.year, end_date.month + 1, PAYMENT_DAY)

    if payment_date.weekday() == SUNDAY:
        payment_date -= datetime.timedelta(days=1)
    return payment_date


def can_transition(current: str, target: str) -> bool:
    return ALLOWED_TRANSITIONS.get(current) == target
