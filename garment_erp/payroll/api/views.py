import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter, OpenApiResponse
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.generics import RetrieveAPIView

from garment_erp.common.exceptions import BusinessError, NotFoundError
from garment_erp.common.responses import error_response, success_response
from garment_erp.common.views import SuccessEnvelopeMixin
from garment_erp.hr.models import Employee
from garment_erp.payroll.api.serializers import (
    PayrollPeriodSerializer,
    GeneratePayrollSerializer,
    PayrollEntrySerializer,
    PayslipSerializer,
)
from garment_erp.payroll.models import PayrollPeriod, PayrollEntry
from garment_erp.payroll.selectors.payroll_queries import get_period_entries, get_latest_payslip
from garment_erp.payroll.services.payroll_runner import generate_payroll, submit_for_approval, approve_payroll
from garment_erp.users.permissions.business_permissions import CanViewPayroll, CanRunPayroll, CanApprovePayroll

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        tags=["Payroll - Periods"],
        summary="List payroll periods",
        description="All payroll periods, latest first. Filter with `?status=`.",
    ),
    retrieve=extend_schema(
        tags=["Payroll - Periods"],
        summary="Retrieve a payroll period",
    ),
)
class PayrollPeriodViewSet(SuccessEnvelopeMixin, viewsets.ReadOnlyModelViewSet):
    queryset = PayrollPeriod.objects.select_related("created_by", "submitted_by", "approved_by").all()
    serializer_class = PayrollPeriodSerializer
    permission_classes = [CanViewPayroll]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["status"]

    def get_permissions(self):
        if self.action in ("generate", "submit"):
            return [CanRunPayroll()]
        if self.action == "approve":
            return [CanApprovePayroll()]
        return super().get_permissions()

    @extend_schema(
        tags=["Payroll - Periods"],
        summary="Generate payroll",
        description=(
            "Create a draft payroll period covering the given dates and compute one entry per active "
            "employee. The period is named after the start month, e.g. `Januari 2026`; a second "
            "period with the same name is rejected."
        ),
        request=GeneratePayrollSerializer,
        responses={
            201: OpenApiResponse(description="`{success, period_id}`"),
            400: OpenApiResponse(description="Invalid dates"),
            409: OpenApiResponse(description="Period already exists"),
        },
    )
    @action(detail=False, methods=["post"])
    def generate(self, request):
        serializer = GeneratePayrollSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            period = generate_payroll(caller=request.user, **serializer.validated_data)
        except BusinessError as e:
            return error_response(e)
        return success_response(
            PayrollPeriodSerializer(period).data,
            status_code=status.HTTP_201_CREATED,
            period_id=period.id,
        )

    @extend_schema(
        tags=["Payroll - Periods"],
        summary="Submit payroll for approval",
        description="Moves a draft period to `pending_approval`.",
        request=None,
        responses={200: OpenApiResponse(description="`{success}`"), 409: OpenApiResponse(description="Not a draft")},
    )
    @action(detail=True, methods=["post"])
    def submit(self, request, pk=None):
        try:
            submit_for_approval(pk, caller=request.user)
        except BusinessError as e:
            return error_response(e)
        return success_response()

    @extend_schema(
        tags=["Payroll - Periods"],
        summary="Approve payroll",
        description=(
            "Owner only. Approves a submitted period and withholds every kasbon installment recorded "
            "on its entries. Installments whose kasbon is gone or already paid off are listed in "
            "`skipped` and must be reconciled by hand."
        ),
        request=None,
        responses={
            200: OpenApiResponse(description="`{success, skipped}`"),
            403: OpenApiResponse(description="Caller is not the owner"),
            409: OpenApiResponse(description="Period is not pending approval"),
        },
    )
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        try:
            result = approve_payroll(pk, caller=request.user)
        except BusinessError as e:
            return error_response(e)
        return success_response(skipped=result.skipped)

    @extend_schema(
        tags=["Payroll - Periods"],
        summary="List entries of a period",
        responses={200: PayrollEntrySerializer(many=True)},
    )
    @action(detail=True, methods=["get"])
    def entries(self, request, pk=None):
        period = self.get_object()
        entries = get_period_entries(period)
        return success_response(PayrollEntrySerializer(entries, many=True).data)


@extend_schema_view(
    retrieve=extend_schema(
        tags=["Payroll - Payslips"],
        summary="Retrieve a payroll entry",
        description="One employee's entry with its allowance, overtime, bonus and kasbon breakdowns.",
    ),
)
class PayrollEntryViewSet(SuccessEnvelopeMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    queryset = PayrollEntry.objects.select_related("period", "employee").all()
    serializer_class = PayslipSerializer
    permission_classes = [CanViewPayroll]


@extend_schema(
    tags=["Payroll - Payslips"],
    summary="Latest payslip of an employee",
    description=(
        "The most recent entry of the employee in an approved or paid period. "
        "Pass `?period=<name>` to pick a specific month."
    ),
    parameters=[
        OpenApiParameter("employee", int, required=True),
        OpenApiParameter("period", str, description="Period name, e.g. `Januari 2026`"),
    ],
)
class PayslipAPIView(RetrieveAPIView):
    serializer_class = PayslipSerializer
    permission_classes = [CanViewPayroll]

    def retrieve(self, request, *args, **kwargs):
        employee_id = request.query_params.get("employee")
        try:
            if not employee_id:
                raise NotFoundError("Employee is required")
            employee = Employee.objects.filter(pk=employee_id).first()
            if employee is None:
                raise NotFoundError("Employee not found")
            payslip = get_latest_payslip(employee, request.query_params.get("period"))
            if payslip is None:
                raise NotFoundError("No approved payslip for this employee")
        except BusinessError as e:
            return error_response(e)
        return success_response(self.get_serializer(payslip).data)
