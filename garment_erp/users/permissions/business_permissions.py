from rest_framework.permissions import BasePermission
from rolepermissions.checkers import has_permission


class CanManageEmployees(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_permission(request.user, 'manage_employees')


class CanManageAttendance(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_permission(request.user, 'manage_attendance')


class CanManageCompensation(BasePermission):
    """Allowances, bonuses and kasbon records."""
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_permission(request.user, 'manage_compensation')


class CanApproveBonus(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_permission(request.user, 'approve_bonus')


class CanViewPayroll(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_permission(request.user, 'view_payroll')


class CanRunPayroll(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_permission(request.user, 'run_payroll')


class CanApprovePayroll(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and has_permission(request.user, 'approve_payroll')
