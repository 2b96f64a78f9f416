from django.contrib import admin

from .models import DocumentLog, StudentDocument


class DocumentLogInline(admin.TabularInline):
    model = DocumentLog
    extra = 0
    can_delete = False
    fields = ('created_at', 'old_status', 'new_status', 'changed_by', 'remarks')
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(StudentDocument)
class StudentDocumentAdmin(admin.ModelAdmin):
    list_display = ('id', 'student', 'checklist_item', 'status', 'version', 'submission_date')
    list_filter = ('status', 'checklist_item__program')
    search_fields = ('title', 'student__registration_number', 'student__user__email')
    raw_id_fields = ('student', 'checklist_item')
    readonly_fields = ('status', 'version', 'remarks', 'file_path', 'submission_date')
    inlines = (DocumentLogInline,)
