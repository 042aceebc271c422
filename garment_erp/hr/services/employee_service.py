import logging

from django.db import transaction

from garment_erp.common.authorization import require_permission
from garment_erp.common.exceptions import ConflictError, ValidationError
from garment_erp.hr.models import Employee

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("nik", "full_name", "department", "position", "daily_rate", "join_date")
EDITABLE_FIELDS = ("full_name", "department", "position", "daily_rate", "join_date", "bank_account", "status")


@transaction.atomic
def create_employee(*, caller, **data) -> Employee:
    require_permission(caller, "manage_employees")

    missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    if Employee.objects.filter(nik=data["nik"]).exists():
        raise ConflictError(f"NIK {data['nik']} is already registered")

    employee = Employee.objects.create(
        nik=data["nik"],
        full_name=data["full_name"],
        department=data["department"],
        position=data["position"],
        daily_rate=data["daily_rate"],
        join_date=data["join_date"],
        bank_account=data.get("bank_account") or None,
        status="active",
    )
    logger.info(f"Employee {employee.nik} created by {caller.email}")
    return employee


@transaction.atomic
def update_employee(employee: Employee, *, caller, **data) -> Employee:
    """NIK is immutable; everything else listed in EDITABLE_FIELDS may change."""
    require_permission(caller, "manage_employees")

    if "nik" in data and data["nik"] != employee.nik:
        raise ValidationError("NIK cannot be changed")
    if "daily_rate" in data and not data["daily_rate"]:
        raise ValidationError("Daily rate must be greater than zero")

    changed = []
    for field in EDITABLE_FIELDS:
        if field in data:
            value = data[field]
            if field == "bank_account":
                value = value or None
            setattr(employee, field, value)
            changed.append(field)

    if changed:
        employee.save(update_fields=[*changed, "updated_at"])
        logger.info(f"Employee {employee.nik} updated by {caller.email}: {', '.join(changed)}")
    return employee


@transaction.atomic
def deactivate_employee(employee: Employee, *, caller) -> Employee:
    require_permission(caller, "manage_employees")

    if employee.status == "inactive":
        raise ValidationError("Employee is already inactive")

    employee.status = "inactive"
    employee.save(update_fields=["status", "updated_at"])
    logger.info(f"Employee {employee.nik} deactivated by {caller.email}")
    return employee
