from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """
    Base user model.
    Students and coordinators are both users; `role` decides which
    dashboard and which operations are available to them.
    Sign-in is by email (or a student's registration number).
    """

    class Role(models.TextChoices):
        STUDENT = 'STUDENT', 'Student'
        COORDINATOR = 'COORDINATOR', 'Coordinator'
        ADMIN = 'ADMIN', 'Admin'

    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=255, blank=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.STUDENT, db_index=True)
    # Raw registration payload (program, batch, registration number ...).
    # Used to rebuild a missing student profile.
    signup_metadata = models.JSONField(default=dict, blank=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    @property
    def is_student(self) -> bool:
        return self.role == self.Role.STUDENT

    @property
    def is_coordinator(self) -> bool:
        return self.is_superuser or self.role in (self.Role.COORDINATOR, self.Role.ADMIN)

    def display_name(self) -> str:
        return self.full_name or self.get_full_name() or self.email

    def __str__(self):
        return self.email
