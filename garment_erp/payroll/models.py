from django.conf import settings
from django.db import models

from garment_erp.hr.models import Employee

User = settings.AUTH_USER_MODEL


class PayrollPeriod(models.Model):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    PAID = "paid"

    STATUS_CHOICES = [
        (DRAFT, "Draft"),
        (PENDING_APPROVAL, "Pending approval"),
        (APPROVED, "Approved"),
        (PAID, "Paid"),
    ]

    period_name = models.CharField(max_length=50, unique=True)  # e.g. "Januari 2026"
    start_date = models.DateField()
    end_date = models.DateField()
    payment_date = models.DateField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=DRAFT)

    created_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name="generated_payrolls")
    submitted_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name="submitted_payrolls")
    submitted_at = models.DateTimeField(null=True, blank=True)
    approved_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name="approved_payrolls")
    approved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-start_date"]

    def __str__(self):
        return self.period_name


class PayrollEntry(models.Model):
    period = models.ForeignKey(PayrollPeriod, on_delete=models.CASCADE, related_name="entries")
    employee = models.ForeignKey(Employee, on_delete=models.PROTECT, related_name="payroll_entries")

    total_work_days = models.PositiveIntegerField(default=0)
    daily_rate = models.PositiveBigIntegerField(default=0)
    base_salary = models.PositiveBigIntegerField(default=0)
    total_allowances = models.PositiveBigIntegerField(default=0)
    total_overtime = models.PositiveBigIntegerField(default=0)
    total_bonuses = models.PositiveBigIntegerField(default=0)
    gross_salary = models.PositiveBigIntegerField(default=0)
    total_deductions = models.PositiveBigIntegerField(default=0)
    # May go negative when installments exceed gross pay.
    net_salary = models.BigIntegerField(default=0)

    allowance_breakdown = models.JSONField(default=dict, blank=True)
    overtime_breakdown = models.JSONField(default=dict, blank=True)
    bonus_breakdown = models.JSONField(default=list, blank=True)
    deduction_breakdown = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["employee__full_name"]
        constraints = [
            models.UniqueConstraint(
                fields=["period", "employee"],
                name="unique_payroll_entry_per_employee"
            )
        ]
        verbose_name_plural = "Payroll entries"

    def __str__(self):
        return f"{self.employee} - {self.period}"
