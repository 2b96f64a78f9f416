from django.urls import path
from .views import (
    CoordinatorListView,
    CustomTokenObtainPairView,
    MeView,
    RegisterView,
    StudentApproveView,
    StudentRejectView,
)
from rest_framework_simplejwt.views import TokenRefreshView

urlpatterns = [
    path('register/', RegisterView.as_view(), name='register'),
    path('me/', MeView.as_view(), name='me'),
    path('token/', CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('coordinators/', CoordinatorListView.as_view(), name='coordinators'),
    path('students/<int:pk>/approve/', StudentApproveView.as_view(), name='student_approve'),
    path('students/<int:pk>/reject/', StudentRejectView.as_view(), name='student_reject'),
]
