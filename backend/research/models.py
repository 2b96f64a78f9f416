from django.db import models

from academics.models import StudentProfile


class ResearchDetails(models.Model):
    class Status(models.TextChoices):
        PROPOSAL = 'proposal', 'Proposal'
        IN_PROGRESS = 'in_progress', 'In progress'
        SUBMITTED = 'submitted', 'Submitted'
        COMPLETED = 'completed', 'Completed'

    student = models.OneToOneField(StudentProfile, on_delete=models.CASCADE, related_name='research_details')
    title = models.CharField(max_length=500)
    abstract = models.TextField(blank=True)
    supervisor_name = models.CharField(max_length=255, blank=True)
    co_supervisor_name = models.CharField(max_length=255, blank=True)
    # list of strings
    keywords = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PROPOSAL)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = 'Research details'

    def __str__(self):
        return self.title
