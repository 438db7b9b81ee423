from datetime import date, datetime

import pytest

from services.exceptions import InvalidDateError, ValidationError
from services.watering_service import (
    DUE_TODAY,
    OVERDUE,
    UPCOMING,
    WateringStatus,
    classify_status,
    compute_next_watering,
    parse_date,
    status_message,
)


def test_compute_next_watering_same_month():
    assert compute_next_watering("2023-10-20", 7) == date(2023, 10, 27)


def test_compute_next_watering_crosses_year():
    assert compute_next_watering("2023-12-28", 10) == date(2024, 1, 7)


def test_compute_next_watering_leap_day():
    assert compute_next_watering(date(2024, 2, 27), 2) == date(2024, 2, 29)
    assert compute_next_watering(date(2023, 2, 27), 2) == date(2023, 3, 1)


def test_compute_next_watering_ignores_time_of_day():
    assert compute_next_watering(datetime(2023, 10, 31, 23, 30), 1) == date(2023, 11, 1)


@pytest.mark.parametrize("frequency", [0, -3, 2.5, "7", True, None])
def test_compute_next_watering_rejects_bad_frequency(frequency):
    with pytest.raises(ValidationError):
        compute_next_watering("2023-10-20", frequency)


@pytest.mark.parametrize("value", [
    "2023-13-01", "2023-02-30", "20/10/2023", "2023-1-5", "2023-10-2", "2023-1-05", "", None, 20231020,
])
def test_parse_date_rejects_malformed_input(value):
    with pytest.raises(InvalidDateError):
        parse_date(value)


def test_invalid_date_is_a_validation_error():
    with pytest.raises(ValidationError):
        compute_next_watering("not-a-date", 7)


def test_classify_status_due_today():
    assert classify_status("2023-10-27", date(2023, 10, 27)) == WateringStatus(DUE_TODAY, 0)


def test_classify_status_upcoming():
    assert classify_status("2023-10-27", date(2023, 10, 24)) == WateringStatus(UPCOMING, 3)


def test_classify_status_overdue():
    assert classify_status(date(2023, 10, 27), date(2023, 11, 1)) == WateringStatus(OVERDUE, 5)


def test_classify_status_strips_time_of_day():
    status = classify_status(datetime(2023, 10, 27, 8, 0), datetime(2023, 10, 27, 23, 59))
    assert status.state == DUE_TODAY


def test_classify_status_is_idempotent():
    first = classify_status("2023-10-27", "2023-10-20")
    assert classify_status("2023-10-27", "2023-10-20") == first


def test_classify_status_defaults_to_today():
    assert classify_status(date.today()).state == DUE_TODAY


def test_status_message():
    assert status_message(WateringStatus(DUE_TODAY, 0), "2023-10-27") == "Arrosez-moi aujourd'hui !"
    assert "3 jour(s), le 2023-10-27" in status_message(WateringStatus(UPCOMING, 3), "2023-10-27")
    assert "2023-10-27" in status_message(WateringStatus(OVERDUE, 2), date(2023, 10, 27))
