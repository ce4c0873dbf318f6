# ==================== USERS/SERIALIZERS.PY ====================
from rest_framework import serializers
from .models import CustomUser, Vehicle


class UserRegistrationSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8)
    password_confirm = serializers.CharField(write_only=True)
    role = serializers.ChoiceField(choices=[('user', 'Renter'), ('host', 'Parking Spot Host')], default='user')

    class Meta:
        model = CustomUser
        fields = ['username', 'email', 'first_name', 'last_name', 'role', 'password', 'password_confirm']

    def validate_email(self, value):
        return value.strip().lower()

    def validate(self, data):
        if data['password'] != data['password_confirm']:
            raise serializers.ValidationError({"password": "Passwords do not match"})
        return data

    def create(self, validated_data):
        validated_data.pop('password_confirm')
        password = validated_data.pop('password')
        user = CustomUser.objects.create_user(password=password, **validated_data)
        return user


class UserProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'role', 'email_verified', 'created_at']
        read_only_fields = ['role', 'email_verified', 'created_at']


class OwnerSummarySerializer(serializers.ModelSerializer):
    """Public view of a spot owner"""
    name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = CustomUser
        fields = ['id', 'username', 'name', 'email']


class VehicleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vehicle
        fields = ['id', 'name', 'number', 'vehicle_type', 'is_default', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Vehicle name is required")
        return value

    def validate_number(self, value):
        value = value.strip().upper()
        if not value:
            raise serializers.ValidationError("Vehicle number is required")
        return value
