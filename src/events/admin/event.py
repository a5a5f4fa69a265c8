"""Admin classes for Event and related models."""

import typing as t

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from events import models


class AttendeeInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.Attendee
    extra = 0
    can_delete = False
    fields = ["user", "ticket_token", "checked_in", "checked_in_at", "checked_in_by"]
    readonly_fields = fields

    def has_add_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        """Registrations go through the registration flow only."""
        return False


class CollaboratorInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.Collaborator
    extra = 0
    autocomplete_fields = ["user"]


class UserGroupMemberInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.UserGroupMember
    extra = 0
    autocomplete_fields = ["user"]


@admin.register(models.UserGroup)
class UserGroupAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["name", "city", "leader", "created_at"]
    search_fields = ["name", "city", "leader__email"]
    autocomplete_fields = ["leader"]
    inlines = [UserGroupMemberInline]


@admin.register(models.Event)
class EventAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin model for Events."""

    list_display = ["title", "user_group", "category", "status", "date", "capacity", "registered_count"]
    list_filter = ["status", "category", "date"]
    search_fields = ["title", "location", "user_group__name"]
    autocomplete_fields = ["user_group"]
    date_hierarchy = "date"
    inlines = [CollaboratorInline, AttendeeInline]

    def get_queryset(self, request: HttpRequest) -> QuerySet[models.Event]:
        """Annotate attendee counts."""
        qs = super().get_queryset(request).select_related("user_group")
        return qs.with_registered_count()  # type: ignore[attr-defined,no-any-return]

    @admin.display(description="Registered", ordering="registered_count")
    def registered_count(self, obj: models.Event) -> int:
        return obj.registered_count  # type: ignore[attr-defined,no-any-return]


@admin.register(models.Attendee)
class AttendeeAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["user", "event", "checked_in", "checked_in_at", "created_at"]
    list_filter = ["checked_in"]
    search_fields = ["user__email", "user__name", "event__title", "ticket_token"]
    readonly_fields = ["ticket_token", "checked_in_at", "checked_in_by"]
    autocomplete_fields = ["user", "event"]
