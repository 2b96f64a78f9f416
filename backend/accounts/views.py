from rest_framework import generics, permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.views import TokenObtainPairView
import logging

from academics.serializers import StudentProfileSerializer
from .permissions_api import IsCoordinator
from .serializers import (
    CoordinatorSerializer,
    IdentifierTokenObtainPairSerializer,
    MeSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
)
from .services import approve_student, reject_student, update_own_profile

log = logging.getLogger(__name__)

User = get_user_model()


class CustomTokenObtainPairView(TokenObtainPairView):
    # identifier may be an email or a student registration number
    serializer_class = IdentifierTokenObtainPairSerializer


class RegisterView(generics.CreateAPIView):
    serializer_class = RegisterSerializer
    permission_classes = (permissions.AllowAny,)

    def perform_create(self, serializer):
        user = serializer.save()
        log.info('student registered user=%s email=%s', user.pk, user.email)


class MeView(APIView):
    permission_classes = (permissions.IsAuthenticated,)

    def get(self, request):
        serializer = MeSerializer(request.user)
        return Response(serializer.data)

    def patch(self, request):
        ser = ProfileUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = update_own_profile(request.user, ser.validated_data)
        return Response(MeSerializer(user).data)


class CoordinatorListView(APIView):
    """Coordinators a student can pick during registration."""

    permission_classes = (permissions.AllowAny,)

    def get(self, request):
        qs = User.objects.filter(
            role__in=(User.Role.COORDINATOR, User.Role.ADMIN),
            is_active=True,
        ).order_by('full_name', 'email')
        return Response(CoordinatorSerializer(qs, many=True).data)


class StudentApproveView(APIView):
    permission_classes = (permissions.IsAuthenticated, IsCoordinator)

    def post(self, request, pk):
        profile = approve_student(request.user, pk)
        return Response(StudentProfileSerializer(profile).data)


class StudentRejectView(APIView):
    permission_classes = (permissions.IsAuthenticated, IsCoordinator)

    def post(self, request, pk):
        profile = reject_student(request.user, pk)
        return Response(StudentProfileSerializer(profile).data)
