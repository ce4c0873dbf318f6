# ==================== PARKING/ADMIN.PY ====================
from django.contrib import admin
from .models import Amenity, ParkingSpot


@admin.register(Amenity)
class AmenityAdmin(admin.ModelAdmin):
    list_display = ['slug']


@admin.register(ParkingSpot)
class ParkingSpotAdmin(admin.ModelAdmin):
    list_display = ['title', 'owner', 'city', 'state', 'price_per_hour', 'active', 'created_at']
    list_filter = ['active', 'city', 'amenities', 'created_at']
    search_fields = ['title', 'description', 'address', 'owner__username']
    readonly_fields = ['created_at', 'updated_at']
    filter_horizontal = ['amenities']
    fieldsets = (
        ('Basic Info', {'fields': ('owner', 'title', 'description', 'price_per_hour', 'active')}),
        ('Location', {'fields': ('address', 'city', 'state', 'zip_code', 'latitude', 'longitude')}),
        ('Amenities & Media', {'fields': ('amenities', 'images')}),
        ('Availability', {'fields': ('available_from', 'available_until', 'available_days')}),
        ('Timestamps', {'fields': ('created_at', 'updated_at'), 'classes': ('collapse',)}),
    )
