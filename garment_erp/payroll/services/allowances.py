PER_DAY = "per_day"


def allowance_amount(allowance, total_work_days: int) -> int:
    if allowance.calculation_method == PER_DAY:
        return allowance.amount * total_work_days
    return allowance.amount


def calculate_allowances(allowances, total_work_days: int):
    """
    allowances = active Allowance rows of one employee

    Returns the total and a breakdown keyed by allowance type. Two active
    allowances of the same type are added together.
    """
    total = 0
    breakdown = {}

    for allowance in allowances:
        amount = allowance_amount(allowance, total_work_days)
        total += amount
        breakdown[allowance.allowance_type] = breakdown.get(allowance.allowance_type, 0) + amount

    return {
        "total": total,
        "breakdown": breakdown,
    }
