from django.apps import AppConfig


class HrConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "garment_erp.hr"
    label = "hr"
    verbose_name = "HR (Employees • Attendance • Compensation)"
