from django.contrib import admin
from .models import Employee, AttendanceRecord, Allowance, Bonus, Deduction


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("nik", "full_name", "department", "position", "daily_rate", "status")
    search_fields = ("nik", "full_name")
    list_filter = ("status", "department")

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display = ("employee", "date", "status", "effective_hours", "overtime_hours", "deficit_hours", "method")
    search_fields = ("employee__nik", "employee__full_name")
    list_filter = ("status", "method", "date")


@admin.register(Allowance)
class AllowanceAdmin(admin.ModelAdmin):
    list_display = ("employee", "allowance_type", "amount", "calculation_method", "is_active")
    list_filter = ("calculation_method", "is_active")
    search_fields = ("employee__nik", "employee__full_name", "allowance_type")


@admin.register(Bonus)
class BonusAdmin(admin.ModelAdmin):
    list_display = ("employee", "bonus_type", "amount", "period_month", "period_year", "status", "approved_by")
    list_filter = ("status", "period_year", "period_month")
    search_fields = ("employee__nik", "employee__full_name")
    readonly_fields = ("status", "approved_by", "approved_at", "created_by")


@admin.register(Deduction)
class DeductionAdmin(admin.ModelAdmin):
    list_display = ("employee", "deduction_type", "total_amount", "remaining_amount", "installment_per_period", "status")
    list_filter = ("status", "deduction_type")
    search_fields = ("employee__nik", "employee__full_name")
    # Balances only move through payroll approval.
    readonly_fields = ("remaining_amount", "status", "created_by")

    def save_model(self, request, obj, form, change):
        if not change:
            obj.remaining_amount = obj.total_amount
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
