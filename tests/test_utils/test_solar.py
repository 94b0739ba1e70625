"""
Tests for sunrise/sunset and daylight operating window calculation.
"""

import pytest
from datetime import date, datetime, timedelta, timezone

from metar_minima.utils.solar import SolarCalculator, UDP_MARGIN

from conftest import utc

EHAM = (52.31, 4.76)


def _minutes_of_day(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


class TestJulianDay:

    def test_j2000(self):
        assert SolarCalculator.julian_day(2000, 1, 1) == 2451545

    def test_consecutive_days(self):
        assert SolarCalculator.julian_day(2024, 3, 1) - SolarCalculator.julian_day(2024, 2, 28) == 2
        assert SolarCalculator.julian_day(2023, 3, 1) - SolarCalculator.julian_day(2023, 2, 28) == 1

    def test_year_boundary(self):
        assert SolarCalculator.julian_day(2025, 1, 1) - SolarCalculator.julian_day(2024, 12, 31) == 1


class TestSunriseSunset:

    def test_summer_solstice_amsterdam(self):
        sunrise, sunset = SolarCalculator.sunrise_sunset(date(2024, 6, 21), *EHAM)

        # About 03:19 and 20:07 UTC
        assert abs(_minutes_of_day(sunrise) - (3 * 60 + 19)) <= 3
        assert abs(_minutes_of_day(sunset) - (20 * 60 + 7)) <= 3
        assert sunrise.date() == date(2024, 6, 21)
        assert sunrise.tzinfo == timezone.utc

    def test_winter_solstice_amsterdam(self):
        sunrise, sunset = SolarCalculator.sunrise_sunset(date(2024, 12, 21), *EHAM)

        # About 07:48 and 15:29 UTC
        assert abs(_minutes_of_day(sunrise) - (7 * 60 + 48)) <= 5
        assert abs(_minutes_of_day(sunset) - (15 * 60 + 29)) <= 5

    def test_whole_minutes(self):
        sunrise, sunset = SolarCalculator.sunrise_sunset(date(2024, 3, 10), *EHAM)
        assert sunrise.second == 0 and sunrise.microsecond == 0
        assert sunset.second == 0 and sunset.microsecond == 0

    def test_datetime_uses_utc_date(self):
        by_date = SolarCalculator.sunrise_sunset(date(2024, 3, 10), *EHAM)
        by_datetime = SolarCalculator.sunrise_sunset(utc(2024, 3, 10, 23, 59), *EHAM)
        assert by_date == by_datetime

    def test_east_is_earlier(self):
        west, _ = SolarCalculator.sunrise_sunset(date(2024, 3, 10), 52.0, 4.0)
        east, _ = SolarCalculator.sunrise_sunset(date(2024, 3, 10), 52.0, 7.0)
        assert east < west

    def test_polar_day(self):
        sunrise, sunset = SolarCalculator.sunrise_sunset(date(2024, 6, 21), 80.0, 15.0)
        assert sunrise == datetime(2024, 6, 21, 0, 0, 0, tzinfo=timezone.utc)
        assert sunset == datetime(2024, 6, 21, 23, 59, 59, tzinfo=timezone.utc)

    def test_polar_night(self):
        sunrise, sunset = SolarCalculator.sunrise_sunset(date(2024, 12, 21), 80.0, 15.0)
        noon = datetime(2024, 12, 21, 12, 0, 0, tzinfo=timezone.utc)
        assert sunrise == noon
        assert sunset == noon

    def test_station_helper(self):
        assert SolarCalculator.sunrise_sunset_for_station(date(2024, 3, 10), "EHAM") == \
            SolarCalculator.sunrise_sunset(date(2024, 3, 10), *EHAM)

    def test_unknown_station_falls_back(self):
        assert SolarCalculator.sunrise_sunset_for_station(date(2024, 3, 10), "EHRD") == \
            SolarCalculator.sunrise_sunset_for_station(date(2024, 3, 10), "EHAM")

    def test_groningen_differs_from_amsterdam(self):
        eham = SolarCalculator.sunrise_sunset_for_station(date(2024, 3, 10), "EHAM")
        ehgg = SolarCalculator.sunrise_sunset_for_station(date(2024, 3, 10), "EHGG")
        assert eham != ehgg


class TestDaylightWindow:

    def setup_method(self):
        self.day = date(2024, 3, 10)
        self.sunrise, self.sunset = SolarCalculator.sunrise_sunset(self.day, *EHAM)

    def test_margin(self):
        assert UDP_MARGIN == timedelta(minutes=15)
        start, end = SolarCalculator.daylight_window(self.day, *EHAM)
        assert start == self.sunrise - UDP_MARGIN
        assert end == self.sunset + UDP_MARGIN

    def test_inclusive_start(self):
        start = self.sunrise - UDP_MARGIN
        assert SolarCalculator.is_daylight_window(start, *EHAM)
        assert not SolarCalculator.is_daylight_window(start - timedelta(minutes=1), *EHAM)

    def test_inclusive_end(self):
        end = self.sunset + UDP_MARGIN
        assert SolarCalculator.is_daylight_window(end, *EHAM)
        assert not SolarCalculator.is_daylight_window(end + timedelta(minutes=1), *EHAM)

    def test_naive_timestamp_taken_as_utc(self):
        assert SolarCalculator.is_daylight_window(datetime(2024, 3, 10, 12, 0), *EHAM)
        assert not SolarCalculator.is_daylight_window(datetime(2024, 3, 10, 0, 30), *EHAM)
        assert SolarCalculator.is_udp(datetime(2024, 3, 10, 12, 0), "EHAM")

    def test_noon_and_midnight(self):
        assert SolarCalculator.is_udp(utc(2024, 3, 10, 12, 0), "EHAM")
        assert not SolarCalculator.is_udp(utc(2024, 3, 10, 0, 30), "EHAM")
        assert not SolarCalculator.is_udp(utc(2024, 3, 10, 23, 30), "EHAM")

    def test_summer_evening(self):
        # Around 20:15 UTC the window is still open in late June
        assert SolarCalculator.is_udp(utc(2024, 6, 21, 20, 0), "EHAM")
        assert not SolarCalculator.is_udp(utc(2024, 12, 21, 20, 0), "EHAM")

    def test_polar_day_window_covers_whole_date(self):
        assert SolarCalculator.is_daylight_window(utc(2024, 6, 21, 0, 0), 80.0, 15.0)
        assert SolarCalculator.is_daylight_window(utc(2024, 6, 21, 23, 59), 80.0, 15.0)

    def test_polar_night_window_is_half_hour(self):
        assert SolarCalculator.is_daylight_window(utc(2024, 12, 21, 12, 10), 80.0, 15.0)
        assert not SolarCalculator.is_daylight_window(utc(2024, 12, 21, 12, 20), 80.0, 15.0)

    @pytest.mark.parametrize("icao", ["EHAM", "EHGG", "EHLE", "EHJK", "EHWO", "ZZZZ"])
    def test_every_station_has_normal_day(self, icao):
        sunrise, sunset = SolarCalculator.sunrise_sunset_for_station(self.day, icao)
        assert sunrise < sunset
        assert 5 <= sunrise.hour <= 7
        assert 16 <= sunset.hour <= 18
