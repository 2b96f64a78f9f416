from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from academics.models import StudentProfile
from .models import User


class StudentProfileInline(admin.StackedInline):
    model = StudentProfile
    fk_name = 'user'
    can_delete = False
    verbose_name = 'Student profile'
    verbose_name_plural = 'Student profile'


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ('email', 'full_name', 'role', 'is_active', 'get_profile_status')
    list_filter = ('role', 'is_active', 'is_staff')
    search_fields = ('email', 'full_name', 'username')
    ordering = ('email',)
    inlines = (StudentProfileInline,)

    fieldsets = DjangoUserAdmin.fieldsets + (
        ('Portal', {'fields': ('full_name', 'role', 'signup_metadata')}),
    )

    add_fieldsets = DjangoUserAdmin.add_fieldsets + (
        ('Portal', {'fields': ('email', 'full_name', 'role')}),
    )

    def get_profile_status(self, obj):
        sp = getattr(obj, 'student_profile', None)
        return sp.status if sp is not None else '-'
    get_profile_status.short_description = 'Account status'
