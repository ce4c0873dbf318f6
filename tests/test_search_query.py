"""
Composite search predicate evaluated against the spot catalog.
"""
from decimal import Decimal

import pytest

from parking.models import ParkingSpot
from parking.search import GeoPoint, SearchCriteria, search_page, search_spots
from utils.pagination import page_count

pytestmark = pytest.mark.django_db


def run(criteria):
    return list(search_spots(ParkingSpot.objects.all(), criteria))


def titles(spots):
    return {spot.title for spot in spots}


def test_only_active_spots_are_returned(make_spot):
    make_spot(title='open')
    make_spot(title='closed', active=False)
    assert titles(run(SearchCriteria())) == {'open'}


def test_price_bounds_are_inclusive(make_spot):
    for price in ['4.99', '5.00', '12.00', '20.00', '20.01']:
        make_spot(title=price, price_per_hour=Decimal(price))

    spots = run(SearchCriteria(price_min=5, price_max=20))
    assert titles(spots) == {'5.00', '12.00', '20.00'}
    assert all(Decimal(5) <= spot.price_per_hour <= Decimal(20) for spot in spots)


def test_missing_price_bound_does_not_filter_that_side(make_spot):
    make_spot(title='free', price_per_hour=Decimal('0'))
    make_spot(title='pricey', price_per_hour=Decimal('999'))

    assert titles(run(SearchCriteria(price_max=100))) == {'free'}
    assert titles(run(SearchCriteria(price_min=1))) == {'pricey'}
    assert titles(run(SearchCriteria())) == {'free', 'pricey'}


def test_amenities_match_any_requested(make_spot):
    make_spot(title='ev', amenities=['ev-charging'])
    make_spot(title='gated', amenities=['gated', 'well-lit'])
    make_spot(title='both', amenities=['ev-charging', 'gated'])
    make_spot(title='none')

    spots = run(SearchCriteria(amenities=frozenset({'ev-charging', 'gated'})))
    assert titles(spots) == {'ev', 'gated', 'both'}
    # No duplicates from the amenity join
    assert len(spots) == 3


def test_radius_filter(make_spot):
    # Times Square and JFK are ~20 km apart
    make_spot(title='midtown', latitude=40.7580, longitude=-73.9855)
    make_spot(title='jfk', latitude=40.6413, longitude=-73.7781)

    center = GeoPoint(40.7580, -73.9855)
    assert titles(run(SearchCriteria(center=center, radius_km=5))) == {'midtown'}
    assert titles(run(SearchCriteria(center=center, radius_km=25))) == {'midtown', 'jfk'}


@pytest.mark.parametrize('lat,lng', [
    (40.7128, -74.0060),
    (-33.8688, 151.2093),
    (51.5074, -0.1278),
    (89.9999, 179.9999),
    (0.0, 0.0),
])
def test_spot_at_center_is_always_included(make_spot, lat, lng):
    make_spot(title='here', latitude=lat, longitude=lng)
    spots = run(SearchCriteria(center=GeoPoint(lat, lng), radius_km=0))
    assert titles(spots) == {'here'}
    assert spots[0].distance == pytest.approx(0.0, abs=1e-3)


def test_dimensions_combine_with_and(make_spot):
    make_spot(title='match', price_per_hour=Decimal('8'), amenities=['gated'])
    make_spot(title='too expensive', price_per_hour=Decimal('80'), amenities=['gated'])
    make_spot(title='no amenity', price_per_hour=Decimal('8'))
    make_spot(title='far away', price_per_hour=Decimal('8'), amenities=['gated'], latitude=34.05, longitude=-118.24)

    criteria = SearchCriteria(
        price_max=10,
        amenities=frozenset({'gated'}),
        center=GeoPoint(40.7128, -74.0060),
        radius_km=10,
    )
    assert titles(run(criteria)) == {'match'}


def test_results_are_newest_first(make_spot):
    first = make_spot(title='first')
    second = make_spot(title='second')
    third = make_spot(title='third')
    assert [spot.pk for spot in run(SearchCriteria())] == [third.pk, second.pk, first.pk]


def test_pagination_of_25_results(make_spot):
    for index in range(25):
        make_spot(title=f'spot {index}')

    criteria = SearchCriteria(page=3, page_size=10)
    spots, total = search_page(search_spots(ParkingSpot.objects.all(), criteria), criteria)

    assert total == 25
    assert page_count(total, criteria.page_size) == 3
    assert len(spots) == 5


def test_page_past_the_end_is_empty(make_spot):
    make_spot()
    criteria = SearchCriteria(page=4, page_size=10)
    assert search_page(search_spots(ParkingSpot.objects.all(), criteria), criteria) == ([], 1)


@pytest.mark.parametrize('bounds,expected', [
    ({'price_max': Decimal('999.999999')}, set()),
    ({'price_max': 999.999999}, set()),
    ({'price_min': Decimal('1000.0000001')}, set()),
    ({'price_min': 1000.0000001}, set()),
    ({'price_max': Decimal('1000')}, {'thousand'}),
    ({'price_min': Decimal('999.995')}, {'thousand'}),
    ({'price_min': Decimal('1000.00'), 'price_max': Decimal('1000.00')}, {'thousand'}),
])
def test_price_bounds_are_exact_at_the_top_of_the_range(make_spot, bounds, expected):
    make_spot(title='thousand', price_per_hour=Decimal('1000.00'))
    assert titles(run(SearchCriteria(**bounds))) == expected


@pytest.mark.parametrize('bounds,expected', [
    ({'price_min': Decimal('0.005')}, {'one cent'}),
    ({'price_min': Decimal('0.0100001')}, set()),
    ({'price_max': Decimal('0.0099999')}, {'free'}),
    ({'price_max': Decimal('0.01')}, {'free', 'one cent'}),
])
def test_price_bounds_are_exact_at_the_cent(make_spot, bounds, expected):
    make_spot(title='free', price_per_hour=Decimal('0.00'))
    make_spot(title='one cent', price_per_hour=Decimal('0.01'))
    assert titles(run(SearchCriteria(**bounds))) == expected


def test_radius_slack_is_bounded(make_spot):
    # 0.001 degrees of latitude is about 111 m
    make_spot(title='north', latitude=40.7138, longitude=-74.0060)
    center = GeoPoint(40.7128, -74.0060)

    assert titles(run(SearchCriteria(center=center, radius_km=0.1))) == set()
    assert titles(run(SearchCriteria(center=center, radius_km=0.112))) == {'north'}
