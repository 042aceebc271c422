import logging

import django_filters
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema_view, extend_schema, OpenApiResponse
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response

from garment_erp.common.exceptions import BusinessError
from garment_erp.common.responses import error_response, success_response
from garment_erp.common.views import SuccessEnvelopeMixin
from garment_erp.users.permissions.business_permissions import (
    CanManageEmployees, CanManageAttendance, CanManageCompensation, CanApproveBonus,
)
from ..models import Employee, AttendanceRecord, Allowance, Bonus, Deduction
from ..services.attendance_service import record_manual_attendance
from ..services.compensation_service import (
    add_allowance, update_allowance, delete_allowance,
    add_bonus, update_bonus, delete_bonus, approve_bonus,
    add_kasbon, delete_deduction,
)
from ..services.employee_service import create_employee, update_employee, deactivate_employee
from .serializers import (
    EmployeeSerializer, AttendanceRecordSerializer, ManualAttendanceSerializer,
    AllowanceSerializer, BonusSerializer, DeductionSerializer,
)

logger = logging.getLogger(__name__)


class AttendanceFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="date", lookup_expr="lte")

    class Meta:
        model = AttendanceRecord
        fields = ["employee", "status", "method", "start_date", "end_date"]


@extend_schema_view(
    list=extend_schema(
        tags=["HR - Employees"],
        summary="List employees",
        description="All employees; filter with `?status=active` or `?status=inactive`.",
    ),
    retrieve=extend_schema(tags=["HR - Employees"], summary="Retrieve employee"),
    create=extend_schema(
        tags=["HR - Employees"],
        summary="Register an employee",
        description="NIK must be unique. New employees always start as `active`.",
    ),
    update=extend_schema(tags=["HR - Employees"], summary="Update employee"),
    partial_update=extend_schema(tags=["HR - Employees"], summary="Partially update employee"),
)
class EmployeeViewSet(SuccessEnvelopeMixin, viewsets.ModelViewSet):
    http_method_names = ["get", "post", "put", "patch"]
    queryset = Employee.objects.all()
    serializer_class = EmployeeSerializer
    permission_classes = [CanManageEmployees]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["status", "department"]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            employee = create_employee(caller=request.user, **serializer.validated_data)
        except BusinessError as e:
            return error_response(e)
        return success_response(self.get_serializer(employee).data, status_code=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        employee = self.get_object()
        serializer = self.get_serializer(employee, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        try:
            employee = update_employee(employee, caller=request.user, **serializer.validated_data)
        except BusinessError as e:
            return error_response(e)
        return success_response(self.get_serializer(employee).data)

    @extend_schema(
        tags=["HR - Employees"],
        summary="Deactivate employee",
        description="Employees are never deleted; deactivation removes them from future payroll runs.",
        request=None,
        responses={200: EmployeeSerializer},
    )
    @action(detail=True, methods=["post"])
    def deactivate(self, request, pk=None):
        employee = self.get_object()
        try:
            employee = deactivate_employee(employee, caller=request.user)
        except BusinessError as e:
            return error_response(e)
        return success_response(self.get_serializer(employee).data)


@extend_schema_view(
    list=extend_schema(
        tags=["HR - Attendance"],
        summary="List attendance records",
        description="Filter by `employee`, `status`, `method` and an inclusive `start_date`..`end_date` range.",
    ),
    retrieve=extend_schema(tags=["HR - Attendance"], summary="Retrieve attendance record"),
)
class AttendanceViewSet(SuccessEnvelopeMixin, viewsets.ReadOnlyModelViewSet):
    queryset = AttendanceRecord.objects.select_related("employee").all()
    serializer_class = AttendanceRecordSerializer
    permission_classes = [CanManageAttendance]
    filter_backends = [DjangoFilterBackend]
    filterset_class = AttendanceFilter

    @extend_schema(
        tags=["HR - Attendance"],
        summary="Manual attendance entry",
        description=(
            "Admin fallback when the fingerprint reader fails. Hours are derived from check-in/out "
            "with a one hour break; Sunday shifts of four hours or more count as holiday overtime."
        ),
        request=ManualAttendanceSerializer,
        responses={200: AttendanceRecordSerializer, 400: OpenApiResponse(description="Validation error")},
    )
    @action(detail=False, methods=["post"])
    def manual(self, request):
        serializer = ManualAttendanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            record = record_manual_attendance(caller=request.user, **serializer.validated_data)
        except BusinessError as e:
            return error_response(e)
        return success_response(AttendanceRecordSerializer(record).data)


@extend_schema_view(
    list=extend_schema(tags=["HR - Allowances"], summary="List allowances"),
    retrieve=extend_schema(tags=["HR - Allowances"], summary="Retrieve allowance"),
    create=extend_schema(
        tags=["HR - Allowances"],
        summary="Add allowance",
        description="`per_day` allowances are multiplied by work days; `per_month` ones are paid flat.",
    ),
    update=extend_schema(tags=["HR - Allowances"], summary="Update allowance"),
    partial_update=extend_schema(tags=["HR - Allowances"], summary="Partially update allowance"),
    destroy=extend_schema(tags=["HR - Allowances"], summary="Delete allowance"),
)
class AllowanceViewSet(SuccessEnvelopeMixin, viewsets.ModelViewSet):
    queryset = Allowance.objects.select_related("employee").all()
    serializer_class = AllowanceSerializer
    permission_classes = [CanManageCompensation]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["employee", "calculation_method", "is_active"]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            allowance = add_allowance(
                data["employee"],
                caller=request.user,
                allowance_type=data["allowance_type"],
                amount=data["amount"],
                calculation_method=data.get("calculation_method", "per_month"),
            )
        except BusinessError as e:
            return error_response(e)
        return success_response(self.get_serializer(allowance).data, status_code=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        allowance = self.get_object()
        serializer = self.get_serializer(allowance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        data.pop("employee", None)
        try:
            allowance = update_allowance(allowance, caller=request.user, **data)
        except BusinessError as e:
            return error_response(e)
        return success_response(self.get_serializer(allowance).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_allowance(self.get_object(), caller=request.user)
        except BusinessError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema_view(
    list=extend_schema(tags=["HR - Bonuses"], summary="List bonuses"),
    retrieve=extend_schema(tags=["HR - Bonuses"], summary="Retrieve bonus"),
    create=extend_schema(
        tags=["HR - Bonuses"],
        summary="Request bonus",
        description="Bonuses start as `pending` and are only paid once the owner approves them.",
    ),
    update=extend_schema(tags=["HR - Bonuses"], summary="Update pending bonus"),
    partial_update=extend_schema(tags=["HR - Bonuses"], summary="Partially update pending bonus"),
    destroy=extend_schema(tags=["HR - Bonuses"], summary="Delete pending bonus"),
)
class BonusViewSet(SuccessEnvelopeMixin, viewsets.ModelViewSet):
    queryset = Bonus.objects.select_related("employee", "created_by", "approved_by").all()
    serializer_class = BonusSerializer
    permission_classes = [CanManageCompensation]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["employee", "status", "period_month", "period_year"]

    def get_permissions(self):
        if self.action == "approve":
            return [CanApproveBonus()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        employee = data.pop("employee")
        try:
            bonus = add_bonus(employee, caller=request.user, **data)
        except BusinessError as e:
            return error_response(e)
        return success_response(self.get_serializer(bonus).data, status_code=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        bonus = self.get_object()
        serializer = self.get_serializer(bonus, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        data.pop("employee", None)
        try:
            bonus = update_bonus(bonus, caller=request.user, **data)
        except BusinessError as e:
            return error_response(e)
        return success_response(self.get_serializer(bonus).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_bonus(self.get_object(), caller=request.user)
        except BusinessError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=["HR - Bonuses"],
        summary="Approve bonus",
        description="Owner only. Approved bonuses are included in the payroll of their month.",
        request=None,
        responses={200: BonusSerializer, 403: OpenApiResponse(description="Caller is not the owner")},
    )
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        try:
            bonus = approve_bonus(self.get_object(), caller=request.user)
        except BusinessError as e:
            return error_response(e)
        return success_response(self.get_serializer(bonus).data)


@extend_schema_view(
    list=extend_schema(tags=["HR - Kasbon"], summary="List kasbon"),
    retrieve=extend_schema(tags=["HR - Kasbon"], summary="Retrieve kasbon"),
    create=extend_schema(
        tags=["HR - Kasbon"],
        summary="Record kasbon",
        description="Creates an active salary advance whose remaining balance equals its total.",
    ),
    destroy=extend_schema(
        tags=["HR - Kasbon"],
        summary="Delete kasbon",
        description="Only possible while no installment has been withheld yet.",
    ),
)
class DeductionViewSet(SuccessEnvelopeMixin,
                       mixins.ListModelMixin,
                       mixins.RetrieveModelMixin,
                       mixins.CreateModelMixin,
                       mixins.DestroyModelMixin,
                       viewsets.GenericViewSet):
    queryset = Deduction.objects.select_related("employee").all()
    serializer_class = DeductionSerializer
    permission_classes = [CanManageCompensation]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["employee", "status"]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            deduction = add_kasbon(
                data["employee"],
                caller=request.user,
                total_amount=data["total_amount"],
                installment_per_period=data["installment_per_period"],
                notes=data.get("notes", ""),
            )
        except BusinessError as e:
            return error_response(e)
        return success_response(self.get_serializer(deduction).data, status_code=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_deduction(self.get_object(), caller=request.user)
        except BusinessError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)
