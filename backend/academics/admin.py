from django import forms
from django.contrib import admin
from django.core.exceptions import ValidationError

from .models import Batch, ChecklistItem, Program, StudentProfile


class StudentProfileForm(forms.ModelForm):
    class Meta:
        model = StudentProfile
        fields = '__all__'

    def clean_registration_number(self):
        val = (self.cleaned_data.get('registration_number') or '').strip() or None
        if val:
            clash = StudentProfile.objects.filter(registration_number__iexact=val)
            if self.instance.pk:
                clash = clash.exclude(pk=self.instance.pk)
            if clash.exists():
                raise ValidationError('This registration number is already registered.')
        return val


class ChecklistItemInline(admin.TabularInline):
    model = ChecklistItem
    extra = 0
    fields = ('order_index', 'title', 'description', 'is_required')


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    list_display = ('name', 'type')
    search_fields = ('name',)
    inlines = (ChecklistItemInline,)


@admin.register(Batch)
class BatchAdmin(admin.ModelAdmin):
    list_display = ('name',)
    search_fields = ('name',)


@admin.register(ChecklistItem)
class ChecklistItemAdmin(admin.ModelAdmin):
    list_display = ('title', 'program', 'is_required', 'order_index')
    list_filter = ('program', 'is_required')
    search_fields = ('title',)


@admin.register(StudentProfile)
class StudentProfileAdmin(admin.ModelAdmin):
    form = StudentProfileForm
    list_display = ('user', 'registration_number', 'program', 'batch', 'coordinator', 'status')
    list_filter = ('status', 'program', 'batch')
    search_fields = ('registration_number', 'user__email', 'user__full_name')
    raw_id_fields = ('user', 'coordinator')
    actions = ('mark_approved', 'mark_rejected')

    def mark_approved(self, request, queryset):
        updated = queryset.update(status=StudentProfile.Status.APPROVED)
        self.message_user(request, f'{updated} student(s) approved.')
    mark_approved.short_description = 'Approve selected students'

    def mark_rejected(self, request, queryset):
        updated = queryset.update(status=StudentProfile.Status.REJECTED)
        self.message_user(request, f'{updated} student(s) rejected.')
    mark_rejected.short_description = 'Reject selected students'
