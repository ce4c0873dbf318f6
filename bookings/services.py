from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from .models import Booking

BLOCKING_STATUSES = ['confirmed', 'active']
OPEN_STATUSES = ['pending', 'confirmed', 'active']

VALID_TRANSITIONS = {
    'pending': ['confirmed', 'cancelled'],
    'confirmed': ['active', 'cancelled'],
    'active': ['completed', 'cancelled'],
    'completed': [],
    'cancelled': [],
}


class BookingService:
    """Availability checks and booking lifecycle rules"""

    @staticmethod
    def check_availability(parking_spot, start_time, end_time, exclude_booking_id=None):
        """True when no confirmed/active booking overlaps [start_time, end_time)"""
        overlapping = Booking.objects.filter(
            parking_spot=parking_spot,
            status__in=BLOCKING_STATUSES,
            start_time__lt=end_time,
            end_time__gt=start_time
        )
        if exclude_booking_id is not None:
            overlapping = overlapping.exclude(pk=exclude_booking_id)
        return not overlapping.exists()

    @staticmethod
    def can_transition(current_status, new_status):
        return new_status in VALID_TRANSITIONS.get(current_status, [])

    @staticmethod
    def within_schedule(parking_spot, start_time, end_time):
        """Check the booking falls on the spot's days and inside its daily window.

        Returns an error message, or None when the booking fits.
        """
        start = timezone.localtime(start_time)
        end = timezone.localtime(end_time)

        days = parking_spot.available_days
        if days:
            if start.strftime('%A').lower() not in days or end.strftime('%A').lower() not in days:
                return 'Parking spot is not available on selected days'

        window_start = parking_spot.available_from.replace(second=0, microsecond=0)
        window_end = parking_spot.available_until.replace(second=0, microsecond=0)
        if start.time().replace(second=0, microsecond=0) < window_start or \
                end.time().replace(second=0, microsecond=0) > window_end:
            return (f"Parking spot is only available from {parking_spot.available_from:%H:%M} "
                    f"to {parking_spot.available_until:%H:%M}")
        return None

    @staticmethod
    def cancellation_error(booking, now=None):
        """Reason a booking cannot be cancelled by its renter, or None"""
        if booking.status not in ['pending', 'confirmed']:
            return 'Cannot cancel booking in current status'
        now = now or timezone.now()
        cutoff = timedelta(hours=settings.BOOKING_CANCELLATION_CUTOFF_HOURS)
        if booking.start_time - now < cutoff:
            return (f"Cannot cancel booking less than {settings.BOOKING_CANCELLATION_CUTOFF_HOURS:g} hour(s) "
                    f"before start time")
        return None
