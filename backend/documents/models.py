from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from academics.models import ChecklistItem, StudentProfile

# Older rows written by the first portal release use this value.
LEGACY_UNDER_REVIEW = 'under_review'


def normalize_status(value):
    """Map stored status strings onto the three live document statuses."""
    if value == LEGACY_UNDER_REVIEW:
        return StudentDocument.Status.PENDING
    return value


class StudentDocument(models.Model):
    """A student's submission against one checklist item.

    At most one row exists per (student, checklist item); a re-upload after
    rejection overwrites it and bumps `version`.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'

    student = models.ForeignKey(StudentProfile, on_delete=models.CASCADE, related_name='documents')
    checklist_item = models.ForeignKey(ChecklistItem, on_delete=models.CASCADE, related_name='submissions')
    title = models.CharField(max_length=255, blank=True)
    file_path = models.CharField(max_length=512)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING, db_index=True)
    version = models.PositiveIntegerField(default=1)
    # Only set while rejected
    remarks = models.TextField(null=True, blank=True)
    submission_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ('-updated_at', '-id')
        constraints = [
            models.UniqueConstraint(fields=['student', 'checklist_item'], name='uniq_document_per_checklist_item'),
        ]

    def __str__(self):
        return f"{self.title or self.checklist_item_id} v{self.version} ({self.status})"

    @property
    def effective_status(self) -> str:
        return normalize_status(self.status)


class DocumentLog(models.Model):
    """Append-only record of a document status change."""

    document = models.ForeignKey(StudentDocument, on_delete=models.CASCADE, related_name='logs')
    old_status = models.CharField(max_length=16)
    new_status = models.CharField(max_length=16)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='document_logs'
    )
    remarks = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ('created_at', 'id')

    def __str__(self):
        return f"Doc {self.document_id}: {self.old_status} -> {self.new_status}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError('Document log entries cannot be modified.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError('Document log entries cannot be deleted.')
