from rolepermissions.checkers import has_permission, has_role

from garment_erp.common.exceptions import AuthorizationError


def ensure_authenticated(caller):
    if caller is None or not caller.is_authenticated:
        raise AuthorizationError("Unauthorized")


def require_role(caller, role, message=None):
    ensure_authenticated(caller)
    if not has_role(caller, role):
        raise AuthorizationError(message or f"Only {role} users can perform this action")


def require_permission(caller, permission, message=None):
    ensure_authenticated(caller)
    if not has_permission(caller, permission):
        raise AuthorizationError(message)
