# ============================= BOOKINGS VIEWS =============================
import logging

from rest_framework import viewsets, status, permissions
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from utils.exceptions import CancellationNotAllowed, InvalidStatusTransition
from utils.permissions import IsBookingParticipant
from .models import Booking
from .serializers import (
    BookingCreateSerializer,
    BookingListSerializer,
    BookingDetailSerializer,
    BookingUpdateSerializer
)
from .services import BookingService

logger = logging.getLogger(__name__)


class BookingViewSet(viewsets.ModelViewSet):
    """Booking creation, status management and cancellation"""

    permission_classes = [permissions.IsAuthenticated, IsBookingParticipant]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['status']
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_serializer_class(self):
        if self.action == 'create':
            return BookingCreateSerializer
        elif self.action in ['list', 'host']:
            return BookingListSerializer
        return BookingDetailSerializer

    def get_queryset(self):
        user = self.request.user
        queryset = Booking.objects.select_related('user', 'parking_spot', 'vehicle').order_by('-created_at', '-id')
        if self.action == 'list':
            # Renters see their own bookings
            return queryset.filter(user=user)
        if self.action == 'host':
            return queryset.filter(parking_spot__owner=user)
        # Detail access is decided by IsBookingParticipant
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        logger.info(f"Booking {booking.reference_number} created by {request.user.username}")
        return Response({
            'message': 'Booking created successfully',
            'booking': BookingDetailSerializer(booking).data
        }, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        """Change booking status and/or payment status

        Body: { "status": "confirmed|active|completed|cancelled", "payment_status": "paid|failed|refunded" }
        """
        booking = self.get_object()
        serializer = BookingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        is_renter = request.user == booking.user
        is_host = request.user == booking.parking_spot.owner

        new_status = serializer.validated_data.get('status')
        if new_status:
            if not BookingService.can_transition(booking.status, new_status):
                raise InvalidStatusTransition(f"Cannot change status from {booking.status} to {new_status}")
            if new_status == 'confirmed' and not is_host:
                raise PermissionDenied('Only hosts can confirm bookings')
            if new_status == 'cancelled' and booking.status == 'pending' and not is_renter:
                raise PermissionDenied('Only booking owner can cancel pending bookings')
            logger.info(f"Booking {booking.reference_number}: {booking.status} -> {new_status}")
            booking.status = new_status

        payment_status = serializer.validated_data.get('payment_status')
        if payment_status:
            booking.payment_status = payment_status

        booking.save()
        return Response({
            'message': 'Booking updated successfully',
            'booking': BookingDetailSerializer(booking).data
        })

    def destroy(self, request, *args, **kwargs):
        """Cancel a booking (renter only)"""
        booking = self.get_object()
        if request.user != booking.user:
            raise PermissionDenied('Access denied')

        error = BookingService.cancellation_error(booking)
        if error:
            raise CancellationNotAllowed(error)

        booking.status = 'cancelled'
        booking.save()
        logger.info(f"Booking {booking.reference_number} cancelled by {request.user.username}")
        return Response({
            'message': 'Booking cancelled successfully',
            'booking': BookingDetailSerializer(booking).data
        })

    @action(detail=False, methods=['get'])
    def host(self, request):
        """Get all bookings for the host's parking spots"""
        if request.user.role != 'host':
            return Response(
                {'error': 'Access denied - Host only'},
                status=status.HTTP_403_FORBIDDEN
            )

        bookings = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(bookings)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)
