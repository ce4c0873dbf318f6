# ============================= PARKING/FILTERS.PY =============================
import django_filters
from django.conf import settings
from django.db.models import Q
from django.utils import timezone
from rest_framework import filters

from .filter_state import AVAILABILITY_CHOICES
from .models import ParkingSpot
from .search import SearchCriteria, search_spots


class ParkingSpotFilter(django_filters.FilterSet):
    """Location and availability filtering for parking spots"""

    city = django_filters.CharFilter(
        field_name='city',
        lookup_expr='icontains',
        label='City'
    )
    state = django_filters.CharFilter(
        field_name='state',
        lookup_expr='icontains',
        label='State'
    )
    availability = django_filters.ChoiceFilter(
        choices=[(choice, choice.title()) for choice in AVAILABILITY_CHOICES],
        method='filter_availability',
        label='Availability'
    )

    class Meta:
        model = ParkingSpot
        fields = ['city', 'state', 'availability']

    def filter_availability(self, queryset, name, value):
        if value == 'all':
            return queryset

        now = timezone.localtime()
        open_now = Q(
            available_from__lte=now.time(),
            available_until__gte=now.time(),
            available_days__icontains=f'"{now.strftime("%A").lower()}"',
        )
        if value == 'available':
            return queryset.filter(open_now)
        return queryset.exclude(open_now)


class SpotSearchFilter(filters.SearchFilter):
    """Price, amenity and radius search, then free text over indexed fields.

    The composite predicate comes from ``parking.search``; the ``search``
    parameter is matched by DRF's text search over the view's
    ``search_fields``.
    """

    def get_criteria(self, request):
        return SearchCriteria.from_query_params(
            request.query_params,
            default_page_size=settings.SPOT_SEARCH_DEFAULT_LIMIT,
            max_page_size=settings.SPOT_SEARCH_MAX_LIMIT,
        )

    def filter_queryset(self, request, queryset, view):
        criteria = self.get_criteria(request)
        # The view pages the results with the same criteria
        view.search_criteria = criteria
        queryset = search_spots(queryset, criteria)
        if criteria.free_text:
            queryset = super().filter_queryset(request, queryset, view)
        return queryset
