from datetime import time, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from bookings.models import Booking
from parking.models import Amenity, ParkingSpot
from users.models import CustomUser, Vehicle


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def host(db):
    return CustomUser.objects.create_user(
        username='host', email='host@example.com', password='hostpass123', role='host'
    )


@pytest.fixture
def other_host(db):
    return CustomUser.objects.create_user(
        username='otherhost', email='otherhost@example.com', password='hostpass123', role='host'
    )


@pytest.fixture
def renter(db):
    return CustomUser.objects.create_user(
        username='renter', email='renter@example.com', password='renterpass123', role='user'
    )


@pytest.fixture
def host_client(host):
    client = APIClient()
    client.force_authenticate(user=host)
    return client


@pytest.fixture
def renter_client(renter):
    client = APIClient()
    client.force_authenticate(user=renter)
    return client


@pytest.fixture
def make_spot(host):
    """Factory for parking spots, open all day every day by default"""
    def _make_spot(**overrides):
        amenities = overrides.pop('amenities', [])
        fields = {
            'owner': host,
            'title': 'Downtown Garage',
            'description': 'Covered garage close to the station',
            'price_per_hour': Decimal('10.00'),
            'latitude': 40.7128,
            'longitude': -74.0060,
            'address': '1 Main Street',
            'city': 'New York',
            'state': 'NY',
            'zip_code': '10001',
            'available_from': time(0, 0),
            'available_until': time(23, 59, 59, 999999),
        }
        fields.update(overrides)
        spot = ParkingSpot.objects.create(**fields)
        if amenities:
            spot.amenities.set(Amenity.objects.for_slugs(amenities))
        return spot
    return _make_spot


@pytest.fixture
def vehicle(renter):
    return Vehicle.objects.create(owner=renter, name='Daily driver', number='abc123', vehicle_type='car')


@pytest.fixture
def make_booking(renter, vehicle):
    def _make_booking(spot, start=None, hours=2, **overrides):
        start = start or timezone.now() + timedelta(days=1)
        booking = Booking(
            user=overrides.pop('user', renter),
            parking_spot=spot,
            vehicle=overrides.pop('vehicle', vehicle),
            start_time=start,
            end_time=start + timedelta(hours=hours),
            license_plate='ABC123',
            **overrides
        )
        booking.calculate_price()
        booking.save()
        return booking
    return _make_booking
