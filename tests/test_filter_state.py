"""
Working filter selection and what reaches the listener.
"""
import pytest
from hypothesis import given, strategies as st

from parking.filter_state import (
    DEFAULT_PRICE_RANGE,
    FEATURE_CHOICES,
    PRICE_RANGE_ERROR,
    FilterState,
    FilterStateController,
)


@pytest.fixture
def emitted():
    return []


@pytest.fixture
def controller(emitted):
    return FilterStateController(FilterState.default(), emitted.append)


def test_default_state():
    state = FilterState.default()
    assert state.price_range == (0, 50)
    assert state.features == frozenset()
    assert state.availability == 'all'


def test_unknown_availability_is_rejected():
    with pytest.raises(ValueError):
        FilterState(availability='sometimes')


def test_valid_min_price_is_committed(controller, emitted):
    controller.set_price_bound('min', 10)

    assert emitted == [FilterState(price_range=(10, 50))]
    assert controller.price_error == ''
    assert controller.is_valid


def test_inverted_price_range_shows_error_without_notifying(controller, emitted):
    controller.set_price_bound('min', 60)

    assert emitted == []
    assert controller.state.price_range == (60, 50)
    assert controller.price_error == PRICE_RANGE_ERROR
    assert not controller.is_valid


def test_fixing_the_range_clears_the_error(controller, emitted):
    controller.set_price_bound('min', 60)
    controller.set_price_bound('max', 80)

    assert controller.price_error == ''
    assert emitted == [FilterState(price_range=(60, 80))]


def test_reset_restores_defaults(controller, emitted):
    controller.set_price_bound('min', 60)
    controller.toggle_feature('covered')
    controller.reset()

    assert controller.state == FilterState.default()
    assert controller.price_error == ''
    assert emitted[-1] == FilterState.default()


def test_unknown_price_bound(controller):
    with pytest.raises(ValueError):
        controller.set_price_bound('middle', 5)


def test_active_filter_count(controller):
    controller.toggle_feature('covered')
    controller.toggle_feature('security')
    controller.set_availability('available')
    assert controller.active_filter_count() == 3

    controller.set_availability('all')
    assert controller.active_filter_count() == 2


def test_price_range_does_not_count_as_active(controller):
    controller.set_price_bound('max', 20)
    assert controller.active_filter_count() == 0


@given(features=st.lists(st.sampled_from(FEATURE_CHOICES), max_size=6))
def test_toggling_twice_restores_selection(features):
    emitted = []
    controller = FilterStateController(FilterState.default(), emitted.append)
    for feature in features:
        controller.toggle_feature(feature)
    before = controller.state.features

    controller.toggle_feature('ev-charging')
    controller.toggle_feature('ev-charging')

    assert controller.state.features == before
    assert len(emitted) == len(features) + 2


def test_edits_while_invalid_keep_last_accepted_range(controller, emitted):
    controller.set_price_bound('max', 30)
    controller.set_price_bound('min', 40)
    controller.toggle_feature('covered')
    controller.set_availability('available')

    # The working copy keeps the rejected range for display
    assert controller.state.price_range == (40, 30)
    assert controller.price_error == PRICE_RANGE_ERROR
    assert emitted[-1] == FilterState(
        price_range=(0, 30), features=frozenset({'covered'}), availability='available'
    )
    assert all(low <= high for low, high in (state.price_range for state in emitted))


def test_invalid_initial_state_starts_with_error(emitted):
    controller = FilterStateController(FilterState(price_range=(70, 20)), emitted.append)
    assert controller.price_error == PRICE_RANGE_ERROR
    assert not controller.is_valid


def test_query_params_for_defaults():
    assert FilterState.default().to_query_params() == {
        'minPrice': DEFAULT_PRICE_RANGE[0],
        'maxPrice': DEFAULT_PRICE_RANGE[1],
    }


def test_query_params_map_features_to_amenities():
    state = FilterState(
        price_range=(5, 25),
        features=frozenset({'security', 'covered'}),
        availability='available',
    )
    assert state.to_query_params() == {
        'minPrice': 5,
        'maxPrice': 25,
        'amenities': 'covered-parking,security-camera',
        'availability': 'available',
    }
