from django.contrib import admin

from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('id', 'sender', 'receiver', 'short_content', 'file_name', 'created_at')
    search_fields = ('content', 'sender__email', 'receiver__email')
    raw_id_fields = ('sender', 'receiver')

    def short_content(self, obj):
        return (obj.content or '')[:60]
    short_content.short_description = 'Content'
