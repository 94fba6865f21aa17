from django.contrib import admin

from .models import CacheEntry, ModuleSetting


@admin.register(ModuleSetting)
class ModuleSettingAdmin(admin.ModelAdmin):
    list_display = ["module", "key", "value", "updated_at"]
    list_filter = ["module"]
    search_fields = ["key", "value"]
    ordering = ["module", "key"]


@admin.register(CacheEntry)
class CacheEntryAdmin(admin.ModelAdmin):
    list_display = ["name", "expires", "created_at"]
    list_filter = ["expires"]
    search_fields = ["name"]
    list_per_page = 50
    readonly_fields = ["created_at", "updated_at"]
    ordering = ["name"]
