from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

User = settings.AUTH_USER_MODEL

EMPLOYEE_STATUS = [
    ("active", "Active"),
    ("inactive", "Inactive"),
]


class Employee(models.Model):
    nik = models.CharField("NIK", max_length=32, unique=True)
    full_name = models.CharField(max_length=150)
    department = models.CharField(max_length=100)
    position = models.CharField(max_length=100)
    daily_rate = models.PositiveBigIntegerField()
    join_date = models.DateField(default=timezone.localdate)
    bank_account = models.CharField(max_length=64, blank=True, null=True)
    status = models.CharField(max_length=10, choices=EMPLOYEE_STATUS, default="active")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.nik} - {self.full_name}"

    @property
    def is_active(self):
        return self.status == "active"

    class Meta:
        ordering = ["full_name"]
        verbose_name = 'Employee'
        verbose_name_plural = 'Employees'


# Statuses that count as a paid work day.
WORK_DAY_STATUSES = ("present", "late", "holiday_overtime")

ATTENDANCE_STATUS = [
    ("present", "Present"),
    ("late", "Late"),
    ("holiday_overtime", "Holiday overtime"),
    ("absent", "Absent"),
    ("sick", "Sick"),
    ("leave", "Leave"),
]

ATTENDANCE_METHOD = [
    ("fingerprint", "Fingerprint"),
    ("manual", "Manual"),
]


class AttendanceRecord(models.Model):
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='attendance_records')
    date = models.DateField()
    check_in = models.DateTimeField(null=True, blank=True)
    check_out = models.DateTimeField(null=True, blank=True)
    effective_hours = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    status = models.CharField(max_length=20, choices=ATTENDANCE_STATUS, default="present")
    deficit_hours = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    overtime_hours = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    method = models.CharField(max_length=20, choices=ATTENDANCE_METHOD, default="fingerprint")
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Attendance for {self.employee.nik} on {self.date} [{self.status}]"

    class Meta:
        ordering = ["-date"]
        constraints = [
            models.UniqueConstraint(fields=["employee", "date"], name="unique_attendance_per_day"),
        ]
        verbose_name = 'Attendance record'
        verbose_name_plural = 'Attendance records'


CALCULATION_METHOD = [
    ("per_day", "Per work day"),
    ("per_month", "Per month"),
]


class Allowance(models.Model):
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='allowances')
    allowance_type = models.CharField(max_length=50)
    amount = models.PositiveBigIntegerField()
    calculation_method = models.CharField(max_length=10, choices=CALCULATION_METHOD, default="per_month")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.allowance_type} ({self.get_calculation_method_display()}) for {self.employee.nik}"


BONUS_STATUS = [
    ("pending", "Pending"),
    ("approved", "Approved"),
]


class Bonus(models.Model):
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='bonuses')
    bonus_type = models.CharField(max_length=50)
    amount = models.PositiveBigIntegerField()
    period_month = models.PositiveSmallIntegerField()
    period_year = models.PositiveSmallIntegerField()
    reason = models.TextField(blank=True)
    status = models.CharField(max_length=10, choices=BONUS_STATUS, default="pending")
    created_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name="created_bonuses")
    approved_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name="approved_bonuses")
    approved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.bonus_type} {self.period_month:02d}/{self.period_year} for {self.employee.nik} - {self.status}"

    class Meta:
        ordering = ["-period_year", "-period_month", "-created_at"]
        constraints = [
            models.CheckConstraint(condition=Q(amount__gt=0), name="bonus_amount_positive"),
            models.CheckConstraint(condition=Q(period_month__gte=1, period_month__lte=12), name="bonus_period_month_valid"),
        ]
        verbose_name_plural = 'Bonuses'


DEDUCTION_STATUS = [
    ("active", "Active"),
    ("paid_off", "Paid off"),
]


class Deduction(models.Model):
    """A salary advance (kasbon) repaid through per-period installments."""
    employee = models.ForeignKey(Employee, on_delete=models.PROTECT, related_name='deductions')
    deduction_type = models.CharField(max_length=50, default="kasbon")
    total_amount = models.PositiveBigIntegerField()
    remaining_amount = models.PositiveBigIntegerField()
    installment_per_period = models.PositiveBigIntegerField()
    status = models.CharField(max_length=10, choices=DEDUCTION_STATUS, default="active")
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name="created_deductions")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.deduction_type} {self.remaining_amount}/{self.total_amount} for {self.employee.nik}"

    @property
    def is_untouched(self):
        return self.remaining_amount == self.total_amount

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(condition=Q(total_amount__gt=0), name="deduction_total_positive"),
            models.CheckConstraint(condition=Q(installment_per_period__gt=0), name="deduction_installment_positive"),
            models.CheckConstraint(
                condition=Q(remaining_amount__gte=0, remaining_amount__lte=F("total_amount")),
                name="deduction_remaining_within_total",
            ),
        ]
