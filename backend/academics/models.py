from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError


class Program(models.Model):
    name = models.CharField(max_length=128, unique=True)
    # Degree family, e.g. "MS" or "PhD"
    type = models.CharField(max_length=32, blank=True)

    class Meta:
        ordering = ('name',)

    def __str__(self):
        return self.name


class Batch(models.Model):
    name = models.CharField(max_length=64, unique=True)

    class Meta:
        ordering = ('name',)
        verbose_name_plural = 'Batches'

    def __str__(self):
        return self.name


class ChecklistItem(models.Model):
    """A document slot a student of `program` has to fill."""

    program = models.ForeignKey(Program, on_delete=models.CASCADE, related_name='checklist_items')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    is_required = models.BooleanField(default=True)
    order_index = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ('program', 'order_index', 'id')

    def __str__(self):
        return f"{self.program.name}: {self.title}"


class StudentProfile(models.Model):
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='student_profile'
    )
    registration_number = models.CharField(max_length=64, unique=True, null=True, blank=True, db_index=True)
    department = models.CharField(max_length=128, blank=True)
    program = models.ForeignKey(Program, on_delete=models.SET_NULL, null=True, blank=True, related_name='students')
    batch = models.ForeignKey(Batch, on_delete=models.SET_NULL, null=True, blank=True, related_name='students')
    coordinator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_students'
    )
    # Account approval, independent from document review status.
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ('-created_at',)

    def __str__(self):
        return f"Student {self.registration_number or '-'} ({self.user.email})"

    def clean(self):
        if self.coordinator_id and not getattr(self.coordinator, 'is_coordinator', False):
            raise ValidationError({'coordinator': 'Assigned user is not a coordinator.'})

    def save(self, *args, **kwargs):
        if not self.registration_number:
            self.registration_number = None
        self.full_clean()
        super().save(*args, **kwargs)
