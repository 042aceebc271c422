from rest_framework import serializers

from garment_erp.common.serializers import UserLiteSerializer
from garment_erp.payroll.models import PayrollPeriod, PayrollEntry


class PayrollPeriodSerializer(serializers.ModelSerializer):
    created_by = UserLiteSerializer(read_only=True)
    submitted_by = UserLiteSerializer(read_only=True)
    approved_by = UserLiteSerializer(read_only=True)
    entry_count = serializers.IntegerField(source="entries.count", read_only=True)

    class Meta:
        model = PayrollPeriod
        fields = [
            "id",
            "period_name",
            "start_date",
            "end_date",
            "payment_date",
            "status",
            "entry_count",
            "created_by",
            "submitted_by",
            "submitted_at",
            "approved_by",
            "approved_at",
            "created_at",
        ]
        read_only_fields = fields


class GeneratePayrollSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class PayrollEntrySerializer(serializers.ModelSerializer):
    employee_nik = serializers.CharField(source="employee.nik", read_only=True)
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)
    period_name = serializers.CharField(source="period.period_name", read_only=True)

    class Meta:
        model = PayrollEntry
        fields = [
            "id",
            "period",
            "period_name",
            "employee",
            "employee_nik",
            "employee_name",
            "total_work_days",
            "daily_rate",
            "base_salary",
            "total_allowances",
            "total_overtime",
            "total_bonuses",
            "gross_salary",
            "total_deductions",
            "net_salary",
        ]
        read_only_fields = fields


class PayslipSerializer(PayrollEntrySerializer):
    """Entry with its itemised breakdowns, as printed on a payslip."""
    payment_date = serializers.DateField(source="period.payment_date", read_only=True)
    bank_account = serializers.CharField(source="employee.bank_account", read_only=True)

    class Meta(PayrollEntrySerializer.Meta):
        fields = PayrollEntrySerializer.Meta.fields + [
            "payment_date",
            "bank_account",
            "allowance_breakdown",
            "overtime_breakdown",
            "bonus_breakdown",
            "deduction_breakdown",
        ]
        read_only_fields = fields
