from __future__ import annotations

import bleach
from rest_framework import serializers

from garment_erp.common.serializers import UserLiteSerializer
from ..models import Employee, AttendanceRecord, Allowance, Bonus, Deduction


def _clean_text(value: str) -> str:
    return bleach.clean(value or "", tags=[], attributes={}, strip=True)


class EmployeeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = [
            "id",
            "nik",
            "full_name",
            "department",
            "position",
            "daily_rate",
            "join_date",
            "bank_account",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_daily_rate(self, value: int) -> int:
        if value <= 0:
            raise serializers.ValidationError("Daily rate must be greater than zero.")
        return value

    def validate_nik(self, value: str) -> str:
        if self.instance and value != self.instance.nik:
            raise serializers.ValidationError("NIK cannot be changed.")
        return value


class AttendanceRecordSerializer(serializers.ModelSerializer):
    employee_nik = serializers.CharField(source="employee.nik", read_only=True)
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)

    class Meta:
        model = AttendanceRecord
        fields = [
            "id",
            "employee",
            "employee_nik",
            "employee_name",
            "date",
            "check_in",
            "check_out",
            "effective_hours",
            "status",
            "deficit_hours",
            "overtime_hours",
            "method",
            "notes",
        ]
        read_only_fields = fields


class ManualAttendanceSerializer(serializers.Serializer):
    employee = serializers.PrimaryKeyRelatedField(queryset=Employee.objects.all())
    date = serializers.DateField()
    check_in = serializers.DateTimeField()
    check_out = serializers.DateTimeField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_notes(self, value: str) -> str:
        return _clean_text(value)

    def validate(self, data: dict) -> dict:
        if data["check_out"] < data["check_in"]:
            raise serializers.ValidationError("Check-out must be after check-in.")
        return data


class AllowanceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Allowance
        fields = [
            "id",
            "employee",
            "allowance_type",
            "amount",
            "calculation_method",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_amount(self, value: int) -> int:
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero.")
        return value

    def update(self, instance, validated_data):
        # Allowances never move between employees
        validated_data.pop("employee", None)
        return super().update(instance, validated_data)


class BonusSerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)
    created_by = UserLiteSerializer(read_only=True)
    approved_by = UserLiteSerializer(read_only=True)

    class Meta:
        model = Bonus
        fields = [
            "id",
            "employee",
            "employee_name",
            "bonus_type",
            "amount",
            "period_month",
            "period_year",
            "reason",
            "status",
            "created_by",
            "approved_by",
            "approved_at",
            "created_at",
        ]
        read_only_fields = ["id", "status", "created_by", "approved_by", "approved_at", "created_at"]

    def validate_amount(self, value: int) -> int:
        if value <= 0:
            raise serializers.ValidationError("Bonus amount must be greater than zero.")
        return value

    def validate_period_month(self, value: int) -> int:
        if not 1 <= value <= 12:
            raise serializers.ValidationError("Month must be between 1 and 12.")
        return value

    def validate_reason(self, value: str) -> str:
        return _clean_text(value)


class DeductionSerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)

    class Meta:
        model = Deduction
        fields = [
            "id",
            "employee",
            "employee_name",
            "deduction_type",
            "total_amount",
            "remaining_amount",
            "installment_per_period",
            "status",
            "notes",
            "created_at",
        ]
        read_only_fields = ["id", "deduction_type", "remaining_amount", "status", "created_at"]

    def validate_total_amount(self, value: int) -> int:
        if value <= 0:
            raise serializers.ValidationError("Total must be greater than zero.")
        return value

    def validate_installment_per_period(self, value: int) -> int:
        if value <= 0:
            raise serializers.ValidationError("Installment must be greater than zero.")
        return value

    def validate_notes(self, value: str) -> str:
        return _clean_text(value)
