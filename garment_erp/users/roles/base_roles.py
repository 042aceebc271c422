from rolepermissions.roles import AbstractUserRole


class Owner(AbstractUserRole):
    available_permissions = {
        'manage_users': True,
        'manage_employees': True,
        'manage_attendance': True,
        'manage_compensation': True,
        'approve_bonus': True,
        'view_payroll': True,
        'run_payroll': True,
        'approve_payroll': True,
    }


class Admin(AbstractUserRole):
    available_permissions = {
        'manage_employees': True,
        'manage_attendance': True,
        'manage_compensation': True,
        'view_payroll': True,
        'run_payroll': True,
    }


class HR(AbstractUserRole):
    available_permissions = {
        'manage_employees': True,
        'manage_attendance': True,
        'manage_compensation': True,
        'view_payroll': True,
        'run_payroll': True,
    }
