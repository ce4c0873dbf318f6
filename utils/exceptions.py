# ==================== UTILS/EXCEPTIONS.PY ====================
from rest_framework.exceptions import APIException
from rest_framework import status


class InvalidSearchCriteria(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Search parameters are contradictory.'
    default_code = 'invalid_search_criteria'


class ParkingUnavailable(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Parking spot is not available for the selected time.'
    default_code = 'parking_unavailable'


class InvalidStatusTransition(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Booking status cannot be changed this way.'
    default_code = 'invalid_status_transition'


class CancellationNotAllowed(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Booking cannot be cancelled.'
    default_code = 'cancellation_not_allowed'


class VehicleConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Vehicle with this number already exists.'
    default_code = 'vehicle_conflict'


class VehicleInUse(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Cannot delete vehicle with active bookings.'
    default_code = 'vehicle_in_use'
