# ==================== BOOKINGS/SERIALIZERS.PY ====================
from django.conf import settings
from django.utils import timezone
from rest_framework import serializers
from rest_framework.exceptions import NotFound

from parking.models import ParkingSpot
from users.models import Vehicle
from users.serializers import OwnerSummarySerializer, VehicleSerializer
from utils.exceptions import ParkingUnavailable
from .models import Booking
from .services import BookingService


class BookingCreateSerializer(serializers.ModelSerializer):
    parking_spot_id = serializers.IntegerField(write_only=True)
    vehicle_id = serializers.IntegerField(write_only=True)

    class Meta:
        model = Booking
        fields = ['id', 'parking_spot_id', 'vehicle_id', 'start_time', 'end_time', 'vehicle_make',
                  'vehicle_model', 'vehicle_color', 'special_instructions']
        read_only_fields = ['id']

    def validate(self, data):
        user = self.context['request'].user
        start_time = data['start_time']
        end_time = data['end_time']

        if start_time <= timezone.now():
            raise serializers.ValidationError({'start_time': 'Start time must be in the future'})
        if end_time <= start_time:
            raise serializers.ValidationError({'end_time': 'End time must be after start time'})

        hours = (end_time - start_time).total_seconds() / 3600
        if hours < settings.BOOKING_MIN_HOURS:
            raise serializers.ValidationError('Minimum booking duration is 30 minutes')
        if hours > settings.BOOKING_MAX_HOURS:
            raise serializers.ValidationError('Maximum booking duration is 7 days')

        try:
            parking_spot = ParkingSpot.objects.get(pk=data.pop('parking_spot_id'))
        except ParkingSpot.DoesNotExist:
            raise NotFound('Parking spot not found')
        if not parking_spot.active:
            raise serializers.ValidationError('Parking spot is not available')
        if parking_spot.owner_id == user.id:
            raise serializers.ValidationError('You cannot book your own parking spot')

        vehicle = Vehicle.objects.filter(pk=data.pop('vehicle_id'), owner=user).first()
        if vehicle is None:
            raise serializers.ValidationError({'vehicle_id': 'Invalid vehicle selected'})

        if not BookingService.check_availability(parking_spot, start_time, end_time):
            raise ParkingUnavailable()

        schedule_error = BookingService.within_schedule(parking_spot, start_time, end_time)
        if schedule_error:
            raise serializers.ValidationError(schedule_error)

        data['parking_spot'] = parking_spot
        data['vehicle'] = vehicle
        return data

    def create(self, validated_data):
        vehicle = validated_data['vehicle']
        booking = Booking(
            user=self.context['request'].user,
            license_plate=vehicle.number,
            **validated_data
        )
        booking.calculate_price()
        booking.save()
        return booking


class BookingSpotSerializer(serializers.ModelSerializer):
    class Meta:
        model = ParkingSpot
        fields = ['id', 'title', 'address', 'city', 'state', 'price_per_hour', 'images', 'owner']


class BookingListSerializer(serializers.ModelSerializer):
    parking_spot = BookingSpotSerializer(read_only=True)
    vehicle = VehicleSerializer(read_only=True)
    user = OwnerSummarySerializer(read_only=True)

    class Meta:
        model = Booking
        fields = ['id', 'reference_number', 'user', 'parking_spot', 'vehicle', 'start_time', 'end_time',
                  'total_hours', 'total_price', 'status', 'payment_status', 'license_plate', 'created_at']


class BookingDetailSerializer(BookingListSerializer):
    formatted_duration = serializers.CharField(read_only=True)
    duration_minutes = serializers.IntegerField(read_only=True)

    class Meta(BookingListSerializer.Meta):
        fields = BookingListSerializer.Meta.fields + [
            'formatted_duration', 'duration_minutes', 'vehicle_make', 'vehicle_model', 'vehicle_color',
            'special_instructions', 'updated_at'
        ]


class BookingUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.STATUS_CHOICES, required=False)
    payment_status = serializers.ChoiceField(choices=['paid', 'failed', 'refunded'], required=False)
