from django.contrib import admin

from .models import ResearchDetails


@admin.register(ResearchDetails)
class ResearchDetailsAdmin(admin.ModelAdmin):
    list_display = ('title', 'student', 'supervisor_name', 'status', 'updated_at')
    list_filter = ('status',)
    search_fields = ('title', 'student__user__email', 'student__registration_number', 'supervisor_name')
    raw_id_fields = ('student',)
