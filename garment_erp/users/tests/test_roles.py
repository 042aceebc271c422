import pytest
from django.contrib.auth import get_user_model
from rolepermissions.checkers import has_permission, has_role

User = get_user_model()


@pytest.mark.django_db
def test_superuser_becomes_owner():
    user = User.objects.create_superuser(email="boss@example.com", password="pass")

    assert has_role(user, "owner")
    assert has_permission(user, "approve_payroll")


@pytest.mark.django_db
def test_regular_user_gets_no_role():
    user = User.objects.create_user(email="staff@example.com", password="pass")

    assert not has_role(user, ["owner", "admin", "hr"])


@pytest.mark.django_db
def test_only_owner_approves(owner, admin_user, hr_user):
    assert has_permission(owner, "approve_payroll")
    assert has_permission(owner, "approve_bonus")
    for user in (admin_user, hr_user):
        assert has_permission(user, "run_payroll")
        assert not has_permission(user, "approve_payroll")
        assert not has_permission(user, "approve_bonus")


@pytest.mark.django_db
def test_staff_roles_manage_employees(owner, admin_user, hr_user, plain_user):
    for user in (owner, admin_user, hr_user):
        assert has_permission(user, "manage_employees")
        assert not has_permission(user, "view_hr_reports")
    assert not has_permission(plain_user, "manage_employees")


def test_short_name():
    assert User(email="siti@example.com", full_name="Siti Aminah").get_short_name() == "Siti"
    assert User(email="siti@example.com").get_short_name() == "siti"
