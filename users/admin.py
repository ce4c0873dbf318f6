# ==================== USERS/ADMIN.PY ====================
from django.contrib import admin
from .models import CustomUser, Vehicle


@admin.register(CustomUser)
class CustomUserAdmin(admin.ModelAdmin):
    list_display = ['username', 'email', 'role', 'email_verified', 'created_at']
    list_filter = ['role', 'email_verified', 'created_at']
    search_fields = ['username', 'email']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ['number', 'name', 'owner', 'vehicle_type', 'is_default', 'created_at']
    list_filter = ['vehicle_type', 'is_default']
    search_fields = ['number', 'owner__username']
    readonly_fields = ['created_at', 'updated_at']
