# ==================== BOOKINGS/ADMIN.PY ====================
from django.contrib import admin
from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'parking_spot', 'start_time', 'end_time', 'status', 'payment_status',
                    'total_price', 'created_at']
    list_filter = ['status', 'payment_status', 'created_at']
    search_fields = ['user__username', 'parking_spot__title', 'license_plate']
    readonly_fields = ['total_hours', 'total_price', 'created_at', 'updated_at']
