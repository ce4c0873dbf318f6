# ==================== PARKING/MODELS.PY ====================
from datetime import time

from django.db import models
from django.db.models import Q
from django.utils import timezone
from users.models import CustomUser


WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')


def all_weekdays():
    return list(WEEKDAYS)


class AmenityManager(models.Manager):
    def for_slugs(self, slugs):
        return [self.get_or_create(slug=slug)[0] for slug in slugs]


AMENITY_SLUG_CHOICES = (
    ('covered-parking', 'Covered Parking'),
    ('security-camera', 'Security Camera'),
    ('ev-charging', 'EV Charging'),
    ('handicap-accessible', 'Handicap Accessible'),
    ('valet-service', 'Valet Service'),
    ('24-7-access', '24/7 Access'),
    ('well-lit', 'Well Lit'),
    ('gated', 'Gated'),
    ('attendant', 'Attendant'),
)


class Amenity(models.Model):
    SLUG_CHOICES = AMENITY_SLUG_CHOICES

    slug = models.CharField(max_length=40, choices=SLUG_CHOICES, unique=True)

    objects = AmenityManager()

    class Meta:
        ordering = ['slug']
        verbose_name_plural = 'amenities'
        constraints = [
            models.CheckConstraint(
                condition=Q(slug__in=[slug for slug, _ in AMENITY_SLUG_CHOICES]),
                name='amenity_slug_known',
            ),
        ]

    def __str__(self):
        return self.get_slug_display()


class ParkingSpot(models.Model):
    owner = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='parking_spots')

    title = models.CharField(max_length=100)
    description = models.CharField(max_length=500)
    price_per_hour = models.DecimalField(max_digits=7, decimal_places=2)

    # Location info
    latitude = models.FloatField()
    longitude = models.FloatField()
    address = models.CharField(max_length=200)
    city = models.CharField(max_length=50, db_index=True)
    state = models.CharField(max_length=50)
    zip_code = models.CharField(max_length=10)

    active = models.BooleanField(default=True, db_index=True)
    images = models.JSONField(default=list, blank=True)  # List of image URLs
    amenities = models.ManyToManyField(Amenity, related_name='parking_spots', blank=True)

    # Availability
    available_from = models.TimeField(default=time(0, 0))
    available_until = models.TimeField(default=time(23, 59))
    available_days = models.JSONField(default=all_weekdays)  # ["monday", "tuesday", ...]

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['active', 'price_per_hour']),
            models.Index(fields=['owner', 'active']),
            models.Index(fields=['latitude', 'longitude']),
            models.Index(fields=['created_at']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(price_per_hour__gte=0) & Q(price_per_hour__lte=1000),
                name='spot_price_in_range',
            ),
            models.CheckConstraint(
                condition=Q(latitude__gte=-90) & Q(latitude__lte=90),
                name='spot_latitude_in_range',
            ),
            models.CheckConstraint(
                condition=Q(longitude__gte=-180) & Q(longitude__lte=180),
                name='spot_longitude_in_range',
            ),
            models.CheckConstraint(
                condition=Q(available_from__lt=models.F('available_until')),
                name='spot_availability_window_ordered',
            ),
        ]

    def __str__(self):
        return f"{self.title} - {self.address}"

    @property
    def full_address(self):
        return f"{self.address}, {self.city}, {self.state} {self.zip_code}"

    def is_currently_available(self):
        """Check if the spot is open now based on its days and daily window"""
        now = timezone.localtime()
        if now.strftime('%A').lower() not in self.available_days:
            return False
        return self.available_from <= now.time() <= self.available_until
