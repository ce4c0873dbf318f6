# ==================== PARKING/SERIALIZERS.PY ====================
from rest_framework import serializers

from users.serializers import OwnerSummarySerializer
from utils.parsing import parse_float
from .geo import great_circle_km
from .models import Amenity, ParkingSpot, WEEKDAYS


class LocationSerializer(serializers.Serializer):
    lat = serializers.FloatField(source='latitude', min_value=-90, max_value=90)
    lng = serializers.FloatField(source='longitude', min_value=-180, max_value=180)


class AmenitySlugsField(serializers.ListField):
    child = serializers.ChoiceField(choices=Amenity.SLUG_CHOICES)

    def to_representation(self, value):
        return [amenity.slug for amenity in value.all()]


class ParkingSpotListSerializer(serializers.ModelSerializer):
    """Simplified serializer for search results"""
    owner = OwnerSummarySerializer(read_only=True)
    location = LocationSerializer(source='*', read_only=True)
    amenities = AmenitySlugsField(read_only=True)
    distance = serializers.SerializerMethodField()

    class Meta:
        model = ParkingSpot
        fields = ['id', 'title', 'description', 'price_per_hour', 'location', 'address', 'city', 'state',
                  'zip_code', 'images', 'amenities', 'active', 'owner', 'distance', 'created_at']

    def get_distance(self, obj):
        """Distance in km from the request's lat/lng, when given"""
        distance = getattr(obj, 'distance', None)
        if distance is None:
            request = self.context.get('request')
            if request is None:
                return None
            lat = parse_float(request.query_params.get('lat'))
            lng = parse_float(request.query_params.get('lng'))
            if lat is None or lng is None:
                return None
            distance = great_circle_km(lat, lng, obj.latitude, obj.longitude)
        return round(distance, 2)


class ParkingSpotDetailSerializer(ParkingSpotListSerializer):
    full_address = serializers.CharField(read_only=True)
    available_now = serializers.SerializerMethodField()

    class Meta(ParkingSpotListSerializer.Meta):
        fields = ParkingSpotListSerializer.Meta.fields + [
            'full_address', 'available_from', 'available_until', 'available_days', 'available_now', 'updated_at'
        ]

    def get_available_now(self, obj):
        return obj.is_currently_available()


class ParkingSpotCreateUpdateSerializer(serializers.ModelSerializer):
    """For creating/updating parking spots"""
    location = LocationSerializer(source='*')
    amenities = AmenitySlugsField(required=False)
    images = serializers.ListField(
        child=serializers.RegexField(r'(?i)^https?://.+\.(jpg|jpeg|png|gif|webp)$'),
        required=False
    )
    available_days = serializers.ListField(
        child=serializers.ChoiceField(choices=WEEKDAYS),
        required=False
    )

    class Meta:
        model = ParkingSpot
        fields = ['id', 'title', 'description', 'price_per_hour', 'location', 'address', 'city', 'state',
                  'zip_code', 'images', 'amenities', 'active', 'available_from', 'available_until',
                  'available_days']
        extra_kwargs = {
            'price_per_hour': {'min_value': 0, 'max_value': 1000},
        }

    def validate_title(self, value):
        return value.strip()

    def validate_description(self, value):
        return value.strip()

    def validate_zip_code(self, value):
        return value.strip()

    def validate(self, data):
        available_from = data.get('available_from', getattr(self.instance, 'available_from', None))
        available_until = data.get('available_until', getattr(self.instance, 'available_until', None))
        if available_from and available_until and available_from >= available_until:
            raise serializers.ValidationError({'available_until': 'End time must be after start time'})
        if 'available_days' in data:
            data['available_days'] = [day for day in WEEKDAYS if day in data['available_days']]
        return data

    def create(self, validated_data):
        amenities = validated_data.pop('amenities', [])
        spot = ParkingSpot.objects.create(owner=self.context['request'].user, **validated_data)
        spot.amenities.set(Amenity.objects.for_slugs(amenities))
        return spot

    def update(self, instance, validated_data):
        amenities = validated_data.pop('amenities', None)
        spot = super().update(instance, validated_data)
        if amenities is not None:
            spot.amenities.set(Amenity.objects.for_slugs(amenities))
        return spot
