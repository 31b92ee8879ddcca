from datetime import datetime, timedelta, timezone

import pytest

from taskboard.exceptions import InvalidTimestamp
from taskboard.utils import dates

PLUS_FIVE = timezone(timedelta(hours=5))


def test_parse_timestamp_accepts_z_suffix():
    parsed = dates.parse_timestamp("2024-01-10T09:00:00Z", "deadline")
    assert parsed == datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)


def test_parse_timestamp_reads_naive_values_as_utc():
    parsed = dates.parse_timestamp(datetime(2024, 1, 10, 9, 0))
    assert parsed.tzinfo == timezone.utc


@pytest.mark.parametrize("value", ["not a date", "2024-13-40", "", 12345])
def test_parse_timestamp_rejects_garbage(value):
    with pytest.raises(InvalidTimestamp) as exc:
        dates.parse_timestamp(value, "deadline")
    assert exc.value.field == "deadline"


def test_parse_timestamp_rejects_missing():
    with pytest.raises(InvalidTimestamp):
        dates.parse_timestamp(None, "completed_at")


def test_is_same_day_uses_reference_timezone():
    # 20:00 UTC on the 10th is 01:00 on the 11th at +05:00
    deadline = datetime(2024, 1, 10, 20, 0, tzinfo=timezone.utc)
    assert dates.is_same_day(deadline, datetime(2024, 1, 11, 9, 0, tzinfo=PLUS_FIVE))
    assert not dates.is_same_day(deadline, datetime(2024, 1, 11, 9, 0, tzinfo=timezone.utc))


def test_is_past_is_strict():
    moment = datetime(2024, 1, 10, 9, 0)
    assert not dates.is_past(moment, moment)
    assert dates.is_past(moment, moment + timedelta(seconds=1))


def test_now_is_timezone_aware():
    assert dates.now().tzinfo is not None


def test_to_utc_converts_offsets():
    assert dates.to_utc(datetime(2024, 1, 10, 5, 0, tzinfo=PLUS_FIVE)) == datetime(
        2024, 1, 10, 0, 0, tzinfo=timezone.utc
    )
