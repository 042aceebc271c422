from django.contrib import admin

from garment_erp.payroll.models import PayrollPeriod, PayrollEntry


class PayrollEntryInline(admin.TabularInline):
    model = PayrollEntry
    extra = 0
    can_delete = False
    fields = ("employee", "total_work_days", "gross_salary", "total_deductions", "net_salary")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(PayrollPeriod)
class PayrollPeriodAdmin(admin.ModelAdmin):
    list_display = ("period_name", "start_date", "end_date", "payment_date", "status", "approved_by")
    list_filter = ("status",)
    inlines = [PayrollEntryInline]
    # Status changes go through the payroll API so kasbon balances stay in step.
    readonly_fields = (
        "period_name", "start_date", "end_date", "payment_date", "status",
        "created_by", "submitted_by", "submitted_at", "approved_by", "approved_at",
    )

    def has_add_permission(self, request):
        return False


@admin.register(PayrollEntry)
class PayrollEntryAdmin(admin.ModelAdmin):
    list_display = ("employee", "period", "gross_salary", "total_deductions", "net_salary")
    list_filter = ("period",)
    search_fields = ("employee__nik", "employee__full_name")

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False
