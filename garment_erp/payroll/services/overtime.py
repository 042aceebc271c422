from decimal import Decimal, ROUND_HALF_UP

# Flat workshop rates, the same for every employee.
WEEKDAY_OVERTIME_HOURLY_RATE = 10000
HOLIDAY_OVERTIME_DAILY_RATE = 100000


def calculate_overtime(weekday_overtime_hours, holiday_overtime_days: int):
    """
    Weekday overtime is paid per hour, holiday overtime per day worked.
    Fractional hours are rounded half-up to a whole rupiah amount.
    """
    hours = Decimal(weekday_overtime_hours or 0)
    weekday_amount = int(
        (hours * WEEKDAY_OVERTIME_HOURLY_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    )
    holiday_amount = holiday_overtime_days * HOLIDAY_OVERTIME_DAILY_RATE

    return {
        "total": weekday_amount + holiday_amount,
        "breakdown": {
            "weekday_hours": format(hours.normalize(), "f"),
            "weekday_amount": weekday_amount,
            "holiday_days": holiday_overtime_days,
            "holiday_amount": holiday_amount,
        },
    }
