import pytest

from waitlist_queue.wait_time import estimate_wait, estimate_wait_minutes, format_wait


def test_estimate_wait():
    assert estimate_wait(1) == "5m"
    assert estimate_wait(4) == "20m"
    assert estimate_wait(12) == "1h 0m"
    assert estimate_wait(13) == "1h 5m"
    assert estimate_wait(25) == "2h 5m"


def test_format_wait_under_an_hour():
    assert format_wait(0) == "0m"
    assert format_wait(59) == "59m"


@pytest.mark.parametrize("position", [0, -1, 1.5, True])
def test_estimate_wait_rejects_bad_position(position):
    with pytest.raises(ValueError):
        estimate_wait_minutes(position)
