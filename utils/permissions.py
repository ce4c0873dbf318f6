# ==================== UTILS/PERMISSIONS.PY ====================
from rest_framework import permissions


class IsHost(permissions.BasePermission):
    """Only hosts may list parking spots"""
    message = 'Only hosts can create parking spots'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.role == 'host')


class IsOwner(permissions.BasePermission):
    """Permission to check if user is owner of the object"""
    message = 'You can only modify your own parking spots'

    def has_object_permission(self, request, view, obj):
        return obj.owner == request.user


class IsBookingParticipant(permissions.BasePermission):
    """Permission for booking - either the renter or the spot's host"""
    message = 'Access denied'

    def has_object_permission(self, request, view, obj):
        return obj.user == request.user or obj.parking_spot.owner == request.user
