import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nik", models.CharField(max_length=32, unique=True, verbose_name="NIK")),
                ("full_name", models.CharField(max_length=150)),
                ("department", models.CharField(max_length=100)),
                ("position", models.CharField(max_length=100)),
                ("daily_rate", models.PositiveBigIntegerField()),
                ("join_date", models.DateField(default=django.utils.timezone.localdate)),
                ("bank_account", models.CharField(blank=True, max_length=64, null=True)),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive")], default="active", max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Employee",
                "verbose_name_plural": "Employees",
                "ordering": ["full_name"],
            },
        ),
        migrations.CreateModel(
            name="AttendanceRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("check_in", models.DateTimeField(blank=True, null=True)),
                ("check_out", models.DateTimeField(blank=True, null=True)),
                ("effective_hours", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("status", models.CharField(choices=[("present", "Present"), ("late", "Late"), ("holiday_overtime", "Holiday overtime"), ("absent", "Absent"), ("sick", "Sick"), ("leave", "Leave")], default="present", max_length=20)),
                ("deficit_hours", models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ("overtime_hours", models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ("method", models.CharField(choices=[("fingerprint", "Fingerprint"), ("manual", "Manual")], default="fingerprint", max_length=20)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="attendance_records", to="hr.employee")),
            ],
            options={
                "verbose_name": "Attendance record",
                "verbose_name_plural": "Attendance records",
                "ordering": ["-date"],
            },
        ),
        migrations.AddConstraint(
            model_name="attendancerecord",
            constraint=models.UniqueConstraint(fields=("employee", "date"), name="unique_attendance_per_day"),
        ),
        migrations.CreateModel(
            name="Allowance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("allowance_type", models.CharField(max_length=50)),
                ("amount", models.PositiveBigIntegerField()),
                ("calculation_method", models.CharField(choices=[("per_day", "Per work day"), ("per_month", "Per month")], default="per_month", max_length=10)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="allowances", to="hr.employee")),
            ],
        ),
        migrations.CreateModel(
            name="Bonus",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("bonus_type", models.CharField(max_length=50)),
                ("amount", models.PositiveBigIntegerField()),
                ("period_month", models.PositiveSmallIntegerField()),
                ("period_year", models.PositiveSmallIntegerField()),
                ("reason", models.TextField(blank=True)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved")], default="pending", max_length=10)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("approved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="approved_bonuses", to=settings.AUTH_USER_MODEL)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="created_bonuses", to=settings.AUTH_USER_MODEL)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="bonuses", to="hr.employee")),
            ],
            options={
                "verbose_name_plural": "Bonuses",
                "ordering": ["-period_year", "-period_month", "-created_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="bonus",
            constraint=models.CheckConstraint(condition=models.Q(("amount__gt", 0)), name="bonus_amount_positive"),
        ),
        migrations.AddConstraint(
            model_name="bonus",
            constraint=models.CheckConstraint(condition=models.Q(("period_month__gte", 1), ("period_month__lte", 12)), name="bonus_period_month_valid"),
        ),
        migrations.CreateModel(
            name="Deduction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("deduction_type", models.CharField(default="kasbon", max_length=50)),
                ("total_amount", models.PositiveBigIntegerField()),
                ("remaining_amount", models.PositiveBigIntegerField()),
                ("installment_per_period", models.PositiveBigIntegerField()),
                ("status", models.CharField(choices=[("active", "Active"), ("paid_off", "Paid off")], default="active", max_length=10)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="created_deductions", to=settings.AUTH_USER_MODEL)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="deductions", to="hr.employee")),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="deduction",
            constraint=models.CheckConstraint(condition=models.Q(("total_amount__gt", 0)), name="deduction_total_positive"),
        ),
        migrations.AddConstraint(
            model_name="deduction",
            constraint=models.CheckConstraint(condition=models.Q(("installment_per_period__gt", 0)), name="deduction_installment_positive"),
        ),
        migrations.AddConstraint(
            model_name="deduction",
            constraint=models.CheckConstraint(
                condition=models.Q(("remaining_amount__gte", 0), ("remaining_amount__lte", models.F("total_amount"))),
                name="deduction_remaining_within_total",
            ),
        ),
    ]
