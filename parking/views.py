# ============================= PARKINGSPOT VIEWS =============================
import logging

from django.conf import settings
from rest_framework import viewsets, status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from utils.parsing import parse_bool, parse_float
from utils.permissions import IsHost, IsOwner
from .filters import ParkingSpotFilter, SpotSearchFilter
from .geo import DISTANCE_TOLERANCE_KM, great_circle_distance
from .models import ParkingSpot
from .search import search_page
from .serializers import (
    ParkingSpotListSerializer,
    ParkingSpotDetailSerializer,
    ParkingSpotCreateUpdateSerializer
)

logger = logging.getLogger(__name__)


class ParkingSpotViewSet(viewsets.ModelViewSet):
    """Parking spot search, listing, and management"""

    queryset = ParkingSpot.objects.select_related('owner').prefetch_related('amenities')
    filterset_class = ParkingSpotFilter
    search_fields = ['title', 'description', 'city', 'state']
    # Set by SpotSearchFilter on list requests
    search_criteria = None

    def get_serializer_class(self):
        if self.action in ['list', 'my_spots', 'nearby']:
            return ParkingSpotListSerializer
        elif self.action in ['create', 'update', 'partial_update']:
            return ParkingSpotCreateUpdateSerializer
        return ParkingSpotDetailSerializer

    def get_permissions(self):
        if self.action in ['list', 'retrieve', 'nearby']:
            permission_classes = [permissions.AllowAny]
        elif self.action == 'create':
            permission_classes = [IsHost]
        elif self.action in ['update', 'partial_update', 'destroy']:
            permission_classes = [permissions.IsAuthenticated, IsOwner]
        else:
            permission_classes = [permissions.IsAuthenticated]
        return [permission() for permission in permission_classes]

    @property
    def filter_backends(self):
        # Search filters only apply to the public listing
        if self.action == 'list':
            return [DjangoFilterBackend, SpotSearchFilter]
        return []

    def paginate_queryset(self, queryset):
        if self.search_criteria is None:
            return super().paginate_queryset(queryset)
        page, total = search_page(queryset, self.search_criteria)
        self.paginator.set_page(self.search_criteria.page, self.search_criteria.page_size, total)
        return page

    def perform_create(self, serializer):
        spot = serializer.save()
        logger.info(f"Parking spot {spot.id} created by {self.request.user.username}")

    def perform_update(self, serializer):
        spot = serializer.save()
        logger.info(f"Parking spot {spot.id} updated by {self.request.user.username}")

    def perform_destroy(self, instance):
        logger.info(f"Parking spot {instance.id} deleted by {self.request.user.username}")
        instance.delete()

    @action(detail=False, methods=['get'], url_path='my-spots')
    def my_spots(self, request):
        """Get all parking spots owned by current user

        Query params: page, limit, active (true|false)
        """
        spots = self.get_queryset().filter(owner=request.user).order_by('-created_at', '-id')
        active = parse_bool(request.query_params.get('active'))
        if active is not None:
            spots = spots.filter(active=active)

        page = self.paginate_queryset(spots)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @action(detail=False, methods=['get'])
    def nearby(self, request):
        """Active parking spots near a location, closest first
        Query params: lat, lng, radius (in km)

        Example: /api/v1/parking-spots/nearby/?lat=40.7128&lng=-74.0060&radius=5
        """
        latitude = parse_float(request.query_params.get('lat'))
        longitude = parse_float(request.query_params.get('lng'))
        radius = parse_float(request.query_params.get('radius'), settings.NEARBY_DEFAULT_RADIUS_KM)
        if latitude is None or longitude is None or radius is None or radius < 0:
            return Response(
                {'error': 'Invalid latitude, longitude, or radius'},
                status=status.HTTP_400_BAD_REQUEST
            )

        spots = self.get_queryset().filter(active=True).annotate(
            distance=great_circle_distance(latitude, longitude)
        ).filter(
            distance__lte=radius + DISTANCE_TOLERANCE_KM
        ).order_by('distance', '-created_at')

        page = self.paginate_queryset(spots)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)
