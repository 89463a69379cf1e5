import pytest

from chordsim.errors import ConfigurationError
from chordsim.utils import in_finger_interval, mod_add, ring_size


def test_ring_size():
    assert ring_size(1) == 2
    assert ring_size(3) == 8
    assert ring_size(160) == 2 ** 160


@pytest.mark.parametrize('m', [0, -1])
def test_ring_size_rejects_non_positive_m(m):
    with pytest.raises(ConfigurationError):
        ring_size(m)


def test_mod_add_wraps():
    assert mod_add(6, 3, m=3) == 1
    assert mod_add(2, 3, m=3) == 5
    assert mod_add(7, 8, m=3) == 7


def test_in_finger_interval_is_half_open():
    assert in_finger_interval(2, 2, 5)
    assert in_finger_interval(4, 2, 5)
    assert not in_finger_interval(5, 2, 5)
    assert not in_finger_interval(1, 2, 5)


def test_in_finger_interval_wraps_past_zero():
    assert in_finger_interval(5, 5, 1)
    assert in_finger_interval(7, 5, 1)
    assert in_finger_interval(0, 5, 1)
    assert not in_finger_interval(1, 5, 1)
    assert not in_finger_interval(3, 5, 1)


def test_in_finger_interval_start_equal_end_covers_ring():
    for key in range(8):
        assert in_finger_interval(key, 4, 4)
