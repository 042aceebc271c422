from rest_framework.routers import DefaultRouter
from .views import EmployeeViewSet, AttendanceViewSet, AllowanceViewSet, BonusViewSet, DeductionViewSet

router = DefaultRouter()
router.register(r'employees', EmployeeViewSet, basename='employee')
router.register(r'attendance', AttendanceViewSet, basename='attendance')
router.register(r'allowances', AllowanceViewSet, basename='allowance')
router.register(r'bonuses', BonusViewSet, basename='bonus')
router.register(r'kasbon', DeductionViewSet, basename='kasbon')

urlpatterns = router.urls
