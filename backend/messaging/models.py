from django.conf import settings
from django.db import models


class Message(models.Model):
    """Direct message between a student and a coordinator."""

    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sent_messages')
    receiver = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_messages')
    content = models.TextField(blank=True)
    file_path = models.CharField(max_length=512, blank=True)
    file_name = models.CharField(max_length=255, blank=True)
    file_size = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ('created_at', 'id')
        indexes = [
            models.Index(fields=['sender', 'receiver', 'created_at'], name='msg_pair_created_idx'),
        ]

    def __str__(self):
        return f"{self.sender_id} -> {self.receiver_id} ({self.created_at:%Y-%m-%d %H:%M})"

    @property
    def has_attachment(self) -> bool:
        return bool(self.file_path)
