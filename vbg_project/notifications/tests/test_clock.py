from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from notifications.services.expirations import Clock, FixedClock

UTC = ZoneInfo("UTC")
NEW_YORK = ZoneInfo("America/New_York")


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2024, 1, 1, 8, 0), datetime(2024, 1, 1, 9, 0)),
        (datetime(2024, 1, 1, 10, 0), datetime(2024, 1, 2, 9, 0)),
        # strictly after now
        (datetime(2024, 1, 1, 9, 0), datetime(2024, 1, 2, 9, 0)),
        (datetime(2024, 12, 31, 23, 30), datetime(2025, 1, 1, 9, 0)),
    ],
)
def test_next_trigger(now, expected):
    clock = Clock(tz=UTC)

    result = clock.next_trigger(9, now.replace(tzinfo=UTC))

    assert result == expected.replace(tzinfo=UTC)


def test_next_trigger_uses_local_wall_clock():
    clock = Clock(tz=NEW_YORK)

    # 13:30 UTC is 08:30 in New York
    result = clock.next_trigger(9, datetime(2024, 1, 1, 13, 30, tzinfo=UTC))

    assert result == datetime(2024, 1, 1, 9, 0, tzinfo=NEW_YORK)


def test_next_trigger_across_dst_change_keeps_local_hour():
    clock = Clock(tz=NEW_YORK)

    result = clock.next_trigger(9, datetime(2024, 3, 9, 10, 0, tzinfo=NEW_YORK))

    assert result.date() == date(2024, 3, 10)
    assert result.hour == 9


def test_day_window_is_half_open_local_day():
    clock = Clock(tz=NEW_YORK)

    start, end = clock.day_window(date(2024, 1, 4))

    assert start == datetime(2024, 1, 4, 0, 0, tzinfo=NEW_YORK)
    assert end == datetime(2024, 1, 5, 0, 0, tzinfo=NEW_YORK)


def test_fixed_clock_returns_local_time_and_advances():
    clock = FixedClock(datetime(2024, 1, 1, 23, 30, tzinfo=UTC), tz=UTC)

    assert clock.today() == date(2024, 1, 1)

    clock.advance(hours=1)

    assert clock.today() == date(2024, 1, 2)
