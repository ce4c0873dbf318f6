# ==================== PARKING/SEARCH.PY ====================
"""Spot search: request parameters -> SearchCriteria -> one composite predicate.

Every dimension that was not supplied is left out of the predicate
entirely.  Only active spots are ever returned.

Price bounds are exact decimals snapped onto the two-decimal price grid, so
``min <= price <= max`` holds for every stored price.  Radius comparisons
allow ``DISTANCE_TOLERANCE_KM`` (1 m) of slack on top of the requested
radius: acos noise would otherwise drop a spot lying exactly on the center
from a radius 0 search.
"""
import logging
from dataclasses import dataclass, field
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, localcontext
from typing import FrozenSet, Optional

from django.db.models import FloatField, Q, Value
from django.db.models.lookups import LessThanOrEqual

from utils.exceptions import InvalidSearchCriteria
from utils.pagination import page_bounds
from utils.parsing import parse_csv, parse_decimal, parse_float, parse_positive_int
from .geo import DISTANCE_TOLERANCE_KM, great_circle_distance

logger = logging.getLogger(__name__)

PRICE_STEP = Decimal('0.01')


def _as_price(value, name):
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    if not number.is_finite():
        raise ValueError(f"{name} must be a finite number")
    return number


def _snap_price(value, rounding):
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(PRICE_STEP, rounding=rounding)


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class SearchCriteria:
    price_min: Optional[Decimal] = None
    price_max: Optional[Decimal] = None
    amenities: FrozenSet[str] = field(default_factory=frozenset)
    free_text: Optional[str] = None
    center: Optional[GeoPoint] = None
    radius_km: Optional[float] = None
    page: int = 1
    page_size: int = 10

    def __post_init__(self):
        for name in ('price_min', 'price_max'):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _as_price(value, name))
        if self.center is not None and self.radius_km is None:
            raise ValueError('radius_km is required when a center is given')
        if self.radius_km is not None and self.radius_km < 0:
            raise ValueError('radius_km cannot be negative')
        if self.price_min is not None and self.price_max is not None and self.price_min > self.price_max:
            raise ValueError('price_min cannot be greater than price_max')
        if self.page < 1 or self.page_size < 1:
            raise ValueError('page and page_size must be positive')

    @classmethod
    def from_query_params(cls, params, default_page_size=10, max_page_size=100):
        """Build criteria from HTTP query parameters.

        Numbers that do not parse are treated as absent.  The geographic
        filter applies only when lat, lng and radius are all usable.
        """
        price_min = parse_decimal(params.get('minPrice'))
        price_max = parse_decimal(params.get('maxPrice'))
        if price_min is not None and price_max is not None and price_min > price_max:
            raise InvalidSearchCriteria('minPrice cannot be greater than maxPrice')

        lat = parse_float(params.get('lat'))
        lng = parse_float(params.get('lng'))
        radius = parse_float(params.get('radius'))
        center = None
        if lat is not None and lng is not None and radius is not None and radius >= 0:
            center = GeoPoint(lat, lng)
        else:
            radius = None

        free_text = (params.get('search') or '').strip() or None
        page_size = min(parse_positive_int(params.get('limit'), default_page_size), max_page_size)

        return cls(
            price_min=price_min,
            price_max=price_max,
            amenities=frozenset(parse_csv(params.get('amenities'))),
            free_text=free_text,
            center=center,
            radius_km=radius,
            page=parse_positive_int(params.get('page'), 1),
            page_size=page_size,
        )


def build_search_predicate(criteria):
    """AND of the per-dimension clauses present in ``criteria``.

    Free text is not part of the predicate; it is handed to the text search
    backend (see ``parking.filters.SpotSearchFilter``).
    """
    predicate = Q(active=True)

    if criteria.price_min is not None:
        predicate &= Q(price_per_hour__gte=_snap_price(criteria.price_min, ROUND_CEILING))
    if criteria.price_max is not None:
        predicate &= Q(price_per_hour__lte=_snap_price(criteria.price_max, ROUND_FLOOR))

    # A spot matches when it has at least one of the requested amenities
    if criteria.amenities:
        predicate &= Q(amenities__slug__in=sorted(criteria.amenities))

    if criteria.center is not None:
        distance = great_circle_distance(criteria.center.lat, criteria.center.lng)
        limit = Value(criteria.radius_km + DISTANCE_TOLERANCE_KM, output_field=FloatField())
        predicate &= Q(LessThanOrEqual(distance, limit))

    return predicate


def search_spots(queryset, criteria):
    """Filter, annotate and order ``queryset`` according to ``criteria``"""
    logger.debug(f"Spot search with criteria {criteria}")
    queryset = queryset.filter(build_search_predicate(criteria))

    if criteria.amenities:
        # The amenity join yields one row per matching amenity
        queryset = queryset.distinct()

    if criteria.center is not None:
        queryset = queryset.annotate(
            distance=great_circle_distance(criteria.center.lat, criteria.center.lng)
        )

    return queryset.order_by('-created_at', '-id')


def search_page(queryset, criteria):
    """The requested page of ``queryset`` and the total number of matches"""
    start, end = page_bounds(criteria.page, criteria.page_size)
    return list(queryset[start:end]), queryset.count()
