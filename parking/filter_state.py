# ==================== PARKING/FILTER_STATE.PY ====================
"""Holder for a renter's in-progress search filter selection.

The controller keeps the working copy of the selection and hands a complete
``FilterState`` to its listener whenever a change is committed.  A price range
whose minimum exceeds its maximum is kept visible but never handed on.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Callable, FrozenSet, Tuple

logger = logging.getLogger(__name__)

AVAILABILITY_CHOICES = ('all', 'available', 'unavailable')
FEATURE_CHOICES = ('covered', 'ev-charging', 'security', 'handicap-accessible')
DEFAULT_PRICE_RANGE = (0, 50)
PRICE_RANGE_ERROR = 'Min price cannot be higher than max price'

# Filter features are coarser than the amenity slugs stored on spots
FEATURE_AMENITIES = {
    'covered': 'covered-parking',
    'ev-charging': 'ev-charging',
    'security': 'security-camera',
    'handicap-accessible': 'handicap-accessible',
}


@dataclass(frozen=True)
class FilterState:
    price_range: Tuple[float, float] = DEFAULT_PRICE_RANGE
    features: FrozenSet[str] = field(default_factory=frozenset)
    availability: str = 'all'

    def __post_init__(self):
        if self.availability not in AVAILABILITY_CHOICES:
            raise ValueError(f"Unknown availability {self.availability!r}")
        object.__setattr__(self, 'price_range', tuple(self.price_range))
        object.__setattr__(self, 'features', frozenset(self.features))

    @classmethod
    def default(cls):
        return cls()

    def to_query_params(self):
        """Query parameters for the spot search endpoint"""
        params = {
            'minPrice': self.price_range[0],
            'maxPrice': self.price_range[1],
        }
        amenities = sorted(FEATURE_AMENITIES.get(feature, feature) for feature in self.features)
        if amenities:
            params['amenities'] = ','.join(amenities)
        if self.availability != 'all':
            params['availability'] = self.availability
        return params


class FilterStateController:
    """Owns the current FilterState and notifies ``on_change`` on commits.

    The controller is either valid, in which case every edit is committed to
    the listener, or invalid after a price edit left ``min > max``.  Only a
    later price edit that restores the ordering, or ``reset()``, leaves the
    invalid state.
    """

    def __init__(self, initial: FilterState, on_change: Callable[[FilterState], None]):
        self.state = initial
        self.on_change = on_change
        self.price_error = PRICE_RANGE_ERROR if initial.price_range[0] > initial.price_range[1] else ''
        self.committed = initial

    @property
    def is_valid(self):
        return not self.price_error

    def _commit(self, state):
        self.state = state
        if not self.is_valid:
            # Keep the listener on the last price range that was accepted
            state = replace(state, price_range=self.committed.price_range)
        self.committed = state
        self.on_change(state)

    def set_price_bound(self, which, value):
        low, high = self.state.price_range
        if which == 'min':
            low = value
        elif which == 'max':
            high = value
        else:
            raise ValueError(f"Price bound must be 'min' or 'max', got {which!r}")

        updated = replace(self.state, price_range=(low, high))
        if low > high:
            self.state = updated
            self.price_error = PRICE_RANGE_ERROR
            logger.debug(f"Price range {low}-{high} rejected")
            return
        self.price_error = ''
        self._commit(updated)

    def toggle_feature(self, feature):
        features = self.state.features ^ {feature}
        self._commit(replace(self.state, features=features))

    def set_availability(self, value):
        self._commit(replace(self.state, availability=value))

    def reset(self):
        self.price_error = ''
        self._commit(FilterState.default())

    def active_filter_count(self):
        # Price range is always set, so it never counts as an active filter
        return len(self.state.features) + (1 if self.state.availability != 'all' else 0)
