import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hr", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PayrollPeriod",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("period_name", models.CharField(max_length=50, unique=True)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("payment_date", models.DateField()),
                ("status", models.CharField(choices=[("draft", "Draft"), ("pending_approval", "Pending approval"), ("approved", "Approved"), ("paid", "Paid")], default="draft", max_length=20)),
                ("submitted_at", models.DateTimeField(blank=True, null=True)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("approved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="approved_payrolls", to=settings.AUTH_USER_MODEL)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="generated_payrolls", to=settings.AUTH_USER_MODEL)),
                ("submitted_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="submitted_payrolls", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-start_date"],
            },
        ),
        migrations.CreateModel(
            name="PayrollEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("total_work_days", models.PositiveIntegerField(default=0)),
                ("daily_rate", models.PositiveBigIntegerField(default=0)),
                ("base_salary", models.PositiveBigIntegerField(default=0)),
                ("total_allowances", models.PositiveBigIntegerField(default=0)),
                ("total_overtime", models.PositiveBigIntegerField(default=0)),
                ("total_bonuses", models.PositiveBigIntegerField(default=0)),
                ("gross_salary", models.PositiveBigIntegerField(default=0)),
                ("total_deductions", models.PositiveBigIntegerField(default=0)),
                ("net_salary", models.BigIntegerField(default=0)),
                ("allowance_breakdown", models.JSONField(blank=True, default=dict)),
                ("overtime_breakdown", models.JSONField(blank=True, default=dict)),
                ("bonus_breakdown", models.JSONField(blank=True, default=list)),
                ("deduction_breakdown", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="payroll_entries", to="hr.employee")),
                ("period", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="entries", to="payroll.payrollperiod")),
            ],
            options={
                "verbose_name_plural": "Payroll entries",
                "ordering": ["employee__full_name"],
            },
        ),
        migrations.AddConstraint(
            model_name="payrollentry",
            constraint=models.UniqueConstraint(fields=("period", "employee"), name="unique_payroll_entry_per_employee"),
        ),
    ]
