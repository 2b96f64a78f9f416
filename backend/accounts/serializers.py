from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework_simplejwt.tokens import RefreshToken

from typing import Optional

from academics.models import Batch, Program, StudentProfile
from academics.serializers import StudentProfileSerializer
from academics.services import get_or_provision_student_profile

User = get_user_model()


class CoordinatorSerializer(serializers.ModelSerializer):
    full_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ('id', 'email', 'full_name')

    def get_full_name(self, obj):
        return obj.display_name()


class RegisterSerializer(serializers.Serializer):
    """Student self-registration.

    Creates the user and a pending StudentProfile in one transaction. The raw
    payload is also kept on the user so a lost profile can be rebuilt.
    """
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    full_name = serializers.CharField(max_length=255)
    registration_number = serializers.CharField(max_length=64, required=False, allow_blank=True)
    department = serializers.CharField(max_length=128, required=False, allow_blank=True)
    program_id = serializers.PrimaryKeyRelatedField(queryset=Program.objects.all(), required=False, allow_null=True)
    batch_id = serializers.PrimaryKeyRelatedField(queryset=Batch.objects.all(), required=False, allow_null=True)
    coordinator_id = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(role__in=(User.Role.COORDINATOR, User.Role.ADMIN)),
        required=False,
        allow_null=True,
    )

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('A user with this email already exists.')
        return value

    def validate_registration_number(self, value):
        value = (value or '').strip()
        if value and StudentProfile.objects.filter(registration_number__iexact=value).exists():
            raise serializers.ValidationError('This registration number is already registered.')
        return value

    def create(self, validated_data):
        program = validated_data.get('program_id')
        batch = validated_data.get('batch_id')
        coordinator = validated_data.get('coordinator_id')
        metadata = {
            'full_name': validated_data['full_name'],
            'registration_number': validated_data.get('registration_number') or '',
            'department': validated_data.get('department') or '',
            'program_id': program.pk if program else None,
            'batch_id': batch.pk if batch else None,
            'coordinator_id': coordinator.pk if coordinator else None,
            'role': 'student',
        }

        with transaction.atomic():
            user = User.objects.create_user(
                username=validated_data['email'],
                email=validated_data['email'],
                password=validated_data['password'],
                full_name=validated_data['full_name'],
                role=User.Role.STUDENT,
                signup_metadata=metadata,
            )
            StudentProfile.objects.create(
                user=user,
                registration_number=metadata['registration_number'] or None,
                department=metadata['department'],
                program=program,
                batch=batch,
                coordinator=coordinator,
            )
        return user

    def to_representation(self, instance):
        return MeSerializer(instance).data


class MeSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    email = serializers.EmailField(read_only=True)
    full_name = serializers.SerializerMethodField()
    role = serializers.CharField(read_only=True)
    is_coordinator = serializers.BooleanField(read_only=True)
    profile = serializers.SerializerMethodField()

    def get_full_name(self, obj):
        return obj.display_name()

    def get_profile(self, obj):
        profile = get_or_provision_student_profile(obj)
        if profile is None:
            return None
        return StudentProfileSerializer(profile).data


class ProfileUpdateSerializer(serializers.Serializer):
    """Fields a user may change on their own profile (`PATCH me/`)."""
    full_name = serializers.CharField(max_length=255)
    registration_number = serializers.CharField(max_length=64, required=False, allow_blank=True)
    department = serializers.CharField(max_length=128, required=False, allow_blank=True)


class IdentifierTokenObtainPairSerializer(serializers.Serializer):
    """Authenticate using `identifier` + `password` and return JWT pair.

    `identifier` may be an email (contains '@') or a student registration
    number.
    """
    identifier = serializers.CharField(write_only=True)
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        identifier = (attrs.get('identifier') or '').strip()
        password = attrs.get('password')

        if not identifier or not password:
            raise serializers.ValidationError('Must include "identifier" and "password".')

        user: Optional[User] = None

        if '@' in identifier:
            user = User.objects.filter(email__iexact=identifier).first()

        if user is None:
            sp = StudentProfile.objects.filter(registration_number__iexact=identifier).select_related('user').first()
            if sp:
                user = sp.user

        # generic error message to avoid leaking which part failed
        invalid_msg = 'Unable to log in with provided credentials.'

        if user is None or not user.check_password(password):
            raise serializers.ValidationError(invalid_msg)

        if not getattr(user, 'is_active', True):
            raise serializers.ValidationError('User account is disabled.')

        refresh = RefreshToken.for_user(user)
        refresh['role'] = user.role

        return {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
