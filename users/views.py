# ==================== USERS/VIEWS.PY ====================
import logging

from rest_framework import viewsets, status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from utils.exceptions import VehicleConflict, VehicleInUse
from .models import Vehicle
from .serializers import UserRegistrationSerializer, UserProfileSerializer, VehicleSerializer

logger = logging.getLogger(__name__)


class UserViewSet(viewsets.ViewSet):
    """User registration and profile management"""
    permission_classes = [permissions.AllowAny]

    def get_permissions(self):
        # Routes are bound with as_view(), so per-action permissions are applied here
        if self.action == 'profile':
            return [permissions.IsAuthenticated()]
        return super().get_permissions()

    @action(detail=False, methods=['post'])
    def register(self, request):
        """Register new user"""
        serializer = UserRegistrationSerializer(data=request.data)
        if serializer.is_valid():
            user = serializer.save()
            refresh = RefreshToken.for_user(user)
            logger.info(f"User {user.username} registered as {user.role}")
            return Response({
                'user': UserProfileSerializer(user).data,
                'refresh': str(refresh),
                'access': str(refresh.access_token),
                'message': 'User registered successfully'
            }, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    @action(detail=False, methods=['get', 'put'])
    def profile(self, request):
        """Get or update user profile"""
        if request.method == 'GET':
            serializer = UserProfileSerializer(request.user)
            return Response(serializer.data)

        serializer = UserProfileSerializer(request.user, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class VehicleViewSet(viewsets.ModelViewSet):
    """Register and manage the caller's vehicles"""
    serializer_class = VehicleSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return Vehicle.objects.filter(owner=self.request.user)

    def _check_number_free(self, number, exclude_pk=None):
        duplicates = Vehicle.objects.filter(owner=self.request.user, number=number)
        if exclude_pk is not None:
            duplicates = duplicates.exclude(pk=exclude_pk)
        if duplicates.exists():
            raise VehicleConflict()

    def perform_create(self, serializer):
        self._check_number_free(serializer.validated_data['number'])
        vehicle = serializer.save(owner=self.request.user)
        logger.info(f"Vehicle {vehicle.number} added for {self.request.user.username}")

    def perform_update(self, serializer):
        number = serializer.validated_data.get('number')
        if number is not None:
            self._check_number_free(number, exclude_pk=serializer.instance.pk)
        serializer.save()

    def perform_destroy(self, instance):
        if instance.bookings.filter(status__in=['pending', 'confirmed', 'active']).exists():
            logger.warning(f"Refused to delete vehicle {instance.number} with open bookings")
            raise VehicleInUse()
        instance.delete()

    @action(detail=False, methods=['get'])
    def default(self, request):
        """Get the caller's default vehicle"""
        vehicle = self.get_queryset().filter(is_default=True).first()
        if vehicle is None:
            return Response({'error': 'No default vehicle'}, status=status.HTTP_404_NOT_FOUND)
        return Response(self.get_serializer(vehicle).data)
