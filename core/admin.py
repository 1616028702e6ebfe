# core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from users.models import User
from posts.models import Post
from .models import AuditLog


class CustomUserAdmin(UserAdmin):
    """
    Shows the portal role next to Django's own user fields.
    """
    fieldsets = UserAdmin.fieldsets + (
        ('Portal', {'fields': ('role',)}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Portal', {'fields': ('role',)}),
    )
    list_display = ('username', 'role', 'is_staff', 'created_at')
    list_filter = ('role', 'is_staff')


admin.site.register(User, CustomUserAdmin)


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ('heading', 'user', 'status', 'created_at', 'posted_at')
    list_filter = ('status', 'created_at')
    search_fields = ('heading', 'caption', 'user__username')
    readonly_fields = ('status', 'comment', 'posted_at', 'created_at', 'updated_at')


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('timestamp', 'user', 'action', 'post_id', 'details')
    list_filter = ('action', 'timestamp')
    search_fields = ('user__username', 'details', 'action')
    readonly_fields = ('user', 'action', 'post_id', 'details', 'timestamp')
