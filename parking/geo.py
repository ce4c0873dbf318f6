# ==================== PARKING/GEO.PY ====================
"""Great-circle distance on a spherical earth.

Both helpers use the spherical law of cosines:

    d = R * acos(sin(lat1) * sin(lat2) + cos(lat1) * cos(lat2) * cos(lng2 - lng1))

with angles in radians.  Rounding can push the cosine just outside
[-1, 1] (for instance for two identical points), so it is clamped before
``acos`` is applied.
"""
import math

from django.db.models import ExpressionWrapper, F, FloatField, Value
from django.db.models.functions import ACos, Cos, Greatest, Least, Radians, Sin

EARTH_RADIUS_KM = 6371

# acos is ill-conditioned next to 1, so identical points can come out a few
# centimetres apart. Radius comparisons allow for this much slack.
DISTANCE_TOLERANCE_KM = 0.001


def clamp_cosine(value):
    return max(-1.0, min(1.0, value))


def great_circle_km(lat1, lng1, lat2, lng2):
    """Distance in kilometres between two (lat, lng) points given in degrees"""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    delta = math.radians(lng2 - lng1)
    cosine = math.sin(phi1) * math.sin(phi2) + math.cos(phi1) * math.cos(phi2) * math.cos(delta)
    return EARTH_RADIUS_KM * math.acos(clamp_cosine(cosine))


def great_circle_distance(lat, lng, lat_field='latitude', lng_field='longitude'):
    """ORM expression for the distance in km from (lat, lng) to each row"""
    phi1 = math.radians(lat)
    phi2 = Radians(F(lat_field))
    delta = Radians(F(lng_field)) - Value(math.radians(lng), output_field=FloatField())

    cosine = (
        Value(math.sin(phi1), output_field=FloatField()) * Sin(phi2)
        + Value(math.cos(phi1), output_field=FloatField()) * Cos(phi2) * Cos(delta)
    )
    clamped = Greatest(
        Least(cosine, Value(1.0, output_field=FloatField())),
        Value(-1.0, output_field=FloatField()),
    )
    return ExpressionWrapper(
        Value(float(EARTH_RADIUS_KM), output_field=FloatField()) * ACos(clamped),
        output_field=FloatField(),
    )
