from decimal import Decimal, ROUND_HALF_UP

from django.db import models
from django.db.models import F, Q
from users.models import CustomUser, Vehicle
from parking.models import ParkingSpot


TWO_PLACES = Decimal('0.01')


class Booking(models.Model):
    STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('confirmed', 'Confirmed'),
        ('active', 'Active'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    )
    PAYMENT_STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('paid', 'Paid'),
        ('failed', 'Failed'),
        ('refunded', 'Refunded'),
    )

    # Relations
    user = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='bookings')
    parking_spot = models.ForeignKey(ParkingSpot, on_delete=models.CASCADE, related_name='bookings')
    vehicle = models.ForeignKey(Vehicle, on_delete=models.SET_NULL, null=True, related_name='bookings')

    # Booking details
    start_time = models.DateTimeField(db_index=True)
    end_time = models.DateTimeField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default='pending',
                                      db_index=True)

    # Pricing
    total_hours = models.DecimalField(max_digits=6, decimal_places=2)
    total_price = models.DecimalField(max_digits=10, decimal_places=2)

    # Vehicle as it was when booked
    license_plate = models.CharField(max_length=20)
    vehicle_make = models.CharField(max_length=50, blank=True)
    vehicle_model = models.CharField(max_length=50, blank=True)
    vehicle_color = models.CharField(max_length=30, blank=True)

    special_instructions = models.CharField(max_length=500, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at']),
            models.Index(fields=['parking_spot', 'start_time', 'end_time']),
            models.Index(fields=['status', 'start_time']),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(end_time__gt=F('start_time')), name='booking_ends_after_start'),
            models.CheckConstraint(condition=Q(total_price__gte=0), name='booking_price_not_negative'),
        ]

    def __str__(self):
        return f"Booking {self.reference_number} - {self.user.username} at {self.parking_spot.title}"

    @property
    def reference_number(self):
        return f"PK{self.pk:08d}" if self.pk else ''

    @property
    def duration_minutes(self):
        return round((self.end_time - self.start_time).total_seconds() / 60)

    @property
    def formatted_duration(self):
        hours, minutes = divmod(self.duration_minutes, 60)
        if hours == 0:
            return f"{minutes} minutes"
        hour_text = f"{hours} hour{'s' if hours > 1 else ''}"
        if minutes == 0:
            return hour_text
        return f"{hour_text} {minutes} minutes"

    def calculate_price(self):
        """Calculate total hours and price from the spot's hourly rate"""
        seconds = Decimal((self.end_time - self.start_time).total_seconds())
        self.total_hours = (seconds / Decimal(3600)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        self.total_price = (self.total_hours * self.parking_spot.price_per_hour).quantize(
            TWO_PLACES, rounding=ROUND_HALF_UP
        )
        return self.total_price
