from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from accounts.models import OfrendaUser


@admin.register(OfrendaUser)
class OfrendaUserAdmin(UserAdmin):  # type: ignore[type-arg]
    list_display = ["email", "name", "role", "is_staff", "date_joined"]
    list_filter = ["role", "is_staff", "is_active"]
    search_fields = ["email", "name", "username"]
    ordering = ["email"]
    fieldsets = (*UserAdmin.fieldsets, ("Ofrenda", {"fields": ("name", "role")}))  # type: ignore[misc]
