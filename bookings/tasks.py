# ==================== BOOKINGS/TASKS.PY (CELERY TASKS) ====================
from celery import shared_task
from django.utils import timezone
from .models import Booking
import logging

logger = logging.getLogger(__name__)


@shared_task
def auto_complete_bookings():
    """Automatically complete active bookings that have ended"""
    now = timezone.now()
    completed = Booking.objects.filter(
        end_time__lte=now,
        status='active'
    ).update(status='completed', updated_at=now)

    logger.info(f"Auto-completed {completed} bookings")
    return completed
