from django.urls import path
from rest_framework.routers import DefaultRouter

from garment_erp.payroll.api.views import PayrollPeriodViewSet, PayrollEntryViewSet, PayslipAPIView

router = DefaultRouter()
router.register("periods", PayrollPeriodViewSet, basename="payroll-period")
router.register("entries", PayrollEntryViewSet, basename="payroll-entry")

urlpatterns = [
    *router.urls,
    path("payslips/", PayslipAPIView.as_view(), name="payslip"),
]
