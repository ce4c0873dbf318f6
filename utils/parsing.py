# ==================== UTILS/PARSING.PY ====================
"""Lenient query-parameter parsing.

Unparseable values come back as ``None`` (or the supplied default) so that
callers can treat them as if the parameter had not been sent.
"""
import math
from decimal import Decimal, InvalidOperation


def parse_float(value, default=None):
    if value is None or str(value).strip() == '':
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def parse_decimal(value, default=None):
    """Exact decimal parse for money values; NaN and infinities are absent"""
    if value is None or str(value).strip() == '':
        return default
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return default
    return number if number.is_finite() else default


def parse_positive_int(value, default):
    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_csv(value):
    """Split a comma-joined parameter, dropping blanks"""
    if not value:
        return []
    return [item.strip() for item in str(value).split(',') if item.strip()]


def parse_bool(value):
    if value is None:
        return None
    lowered = str(value).strip().lower()
    if lowered in ('true', '1', 'yes'):
        return True
    if lowered in ('false', '0', 'no'):
        return False
    return None
