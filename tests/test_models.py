"""
Model-level rules that hold regardless of the API.
"""
from decimal import Decimal

import pytest
from django.db import IntegrityError

from parking.models import AMENITY_SLUG_CHOICES, Amenity

pytestmark = pytest.mark.django_db


def test_amenity_choices_are_shared_with_the_constraint():
    constraint = next(c for c in Amenity._meta.constraints if c.name == 'amenity_slug_known')
    allowed = dict(constraint.condition.children)['slug__in']
    assert allowed == [slug for slug, _ in AMENITY_SLUG_CHOICES]
    assert Amenity.SLUG_CHOICES is AMENITY_SLUG_CHOICES


def test_for_slugs_reuses_rows():
    first = Amenity.objects.for_slugs(['gated', 'ev-charging'])
    again = Amenity.objects.for_slugs(['ev-charging'])

    assert again[0].pk == first[1].pk
    assert Amenity.objects.count() == 2


def test_unknown_amenity_slug_is_rejected():
    with pytest.raises(IntegrityError):
        Amenity.objects.create(slug='helipad')


def test_spot_price_above_range_is_rejected(make_spot):
    with pytest.raises(IntegrityError):
        make_spot(price_per_hour=Decimal('1000.01'))


def test_booking_price_is_rounded_to_cents(make_spot, make_booking):
    spot = make_spot(price_per_hour=Decimal('7.25'))
    booking = make_booking(spot, hours=1.5)

    assert booking.total_hours == Decimal('1.50')
    assert booking.total_price == Decimal('10.88')
    assert booking.formatted_duration == '1 hour 30 minutes'
