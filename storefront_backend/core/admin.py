# core/admin.py

from django.contrib import admin

from core.models import AuditLog, SystemSetting
from core.services.system_settings import reload_settings


@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):
    list_display = ("key", "category", "value_type", "updated_at")
    list_filter = ("category", "value_type")
    search_fields = ("key",)
    actions = ["reload_cache"]

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        reload_settings()

    @admin.action(description="Reload settings cache")
    def reload_cache(self, request, queryset):
        count = reload_settings()
        self.message_user(request, f"Reloaded {count} settings.")


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("created_at", "table_name", "record_id", "action", "actor")
    list_filter = ("table_name", "action")
    search_fields = ("record_id",)
    readonly_fields = (
        "table_name",
        "record_id",
        "action",
        "old_values",
        "new_values",
        "actor",
        "ip_address",
        "user_agent",
        "created_at",
    )

    def has_delete_permission(self, request, obj=None):
        return False
