from django.utils.translation import gettext_lazy as _
from rest_framework import status

from common.exceptions import DomainError
from core.models import Employee


class EmployeeNotLinked(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "employee_not_linked"
    default_detail = _("Your account is not linked to an employee record. Please contact an administrator.")


def resolve_employee_for_user(user):
    """Return the Employee behind an authenticated user or raise EmployeeNotLinked."""
    if user is None or not getattr(user, "is_authenticated", False):
        raise EmployeeNotLinked()

    employee = Employee.objects.select_related("user", "group").filter(user_id=user.pk).first()
    if employee is None:
        raise EmployeeNotLinked()
    return employee


def group_devices(employee):
    if employee.group_id is None:
        return []
    return list(employee.group.devices.filter(is_active=True).order_by("identifier"))


def group_accounts(employee):
    if employee.group_id is None:
        return []
    return list(employee.group.accounts.order_by("username"))
