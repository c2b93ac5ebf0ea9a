# PATH: apps/core/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from apps.core.models import AccountCode, User, UserPreference


class UserPreferenceInline(admin.StackedInline):
    model = UserPreference
    can_delete = False


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("email", "full_name", "is_verified", "is_active", "is_staff", "date_joined")
    list_filter = ("is_verified", "is_active", "is_staff")
    search_fields = ("email", "full_name")
    ordering = ("-date_joined",)
    inlines = [UserPreferenceInline]

    fieldsets = (
        (None, {"fields": ("email", "username", "password")}),
        ("Profile", {"fields": ("full_name", "avatar", "bio", "is_verified")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "username", "full_name", "password1", "password2")}),
    )


@admin.register(AccountCode)
class AccountCodeAdmin(admin.ModelAdmin):
    list_display = ("email", "purpose", "created_at", "expires_at", "used_at")
    list_filter = ("purpose",)
    search_fields = ("email",)
    readonly_fields = ("code", "created_at")
