"""
Sunrise, sunset and daylight operating window (UDP) calculation.

Uses the low precision solar position method (mean longitude, mean anomaly,
two term equation of centre), accurate to within a few minutes. All times
are UTC; each date is evaluated on its own UTC calendar day.
"""

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple, Union

from metar_minima.models.station import resolve_station

# Margin before sunrise and after sunset included in the operating window
UDP_MARGIN = timedelta(minutes=15)

# Zenith at sunrise/sunset: 90 deg plus refraction and solar semi-diameter
SUNRISE_ZENITH = 90.833

J2000 = 2451545.0

DayLike = Union[date, datetime]


class SolarCalculator:
    """
    Solar geometry for a fixed point on earth.

    All methods are static, pure functions of their arguments.

    Example:
        sunrise, sunset = SolarCalculator.sunrise_sunset(date(2024, 6, 21), 52.31, 4.76)
        SolarCalculator.is_udp(datetime(2024, 6, 21, 12, 0, tzinfo=timezone.utc), "EHAM")
    """

    @staticmethod
    def julian_day(year: int, month: int, day: int) -> int:
        """Julian day number of a proleptic Gregorian calendar date."""
        a = (14 - month) // 12
        y = year + 4800 - a
        m = month + 12 * a - 3
        return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045

    @classmethod
    def sun_position(cls, day: DayLike) -> Tuple[float, float]:
        """
        Declination and equation of time for a date.

        Args:
            day: Calendar date (datetime values use their UTC date)

        Returns:
            (declination in radians, equation of time in minutes)
        """
        day = _utc_date(day)
        n = cls.julian_day(day.year, day.month, day.day) - J2000

        mean_longitude = (280.46 + 0.9856474 * n) % 360
        mean_anomaly = math.radians((357.528 + 0.9856003 * n) % 360)

        ecliptic_longitude = math.radians(
            mean_longitude
            + 1.915 * math.sin(mean_anomaly)
            + 0.02 * math.sin(2 * mean_anomaly)
        )
        obliquity = math.radians(23.439 - 0.0000004 * n)

        sin_lambda = math.sin(ecliptic_longitude)
        right_ascension = math.degrees(
            math.atan2(math.cos(obliquity) * sin_lambda, math.cos(ecliptic_longitude))
        )
        declination = math.asin(math.sin(obliquity) * sin_lambda)

        equation_of_time = 4 * (mean_longitude % 360 - right_ascension % 360)
        return declination, equation_of_time

    @classmethod
    def sunrise_sunset(cls, day: DayLike, latitude: float, longitude: float) -> Tuple[datetime, datetime]:
        """
        Sunrise and sunset for a date at a location.

        Polar day gives 00:00:00 and 23:59:59 of the date, polar night gives
        12:00:00 for both.

        Args:
            day: Calendar date (datetime values use their UTC date)
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees, east positive

        Returns:
            (sunrise, sunset) as UTC aware datetimes
        """
        day = _utc_date(day)
        declination, equation_of_time = cls.sun_position(day)

        lat = math.radians(latitude)
        cos_h = (
            (math.cos(math.radians(SUNRISE_ZENITH)) - math.sin(lat) * math.sin(declination))
            / (math.cos(lat) * math.cos(declination))
        )

        midnight = datetime.combine(day, time(0, 0), tzinfo=timezone.utc)
        if cos_h < -1:
            return midnight, midnight.replace(hour=23, minute=59, second=59)
        if cos_h > 1:
            noon = midnight.replace(hour=12)
            return noon, noon

        hour_angle = math.degrees(math.acos(cos_h))
        sunrise_minutes = 720 - 4 * (longitude + hour_angle) - equation_of_time
        sunset_minutes = 720 - 4 * (longitude - hour_angle) - equation_of_time

        return (
            midnight + timedelta(minutes=_round_half_up(sunrise_minutes)),
            midnight + timedelta(minutes=_round_half_up(sunset_minutes)),
        )

    @classmethod
    def daylight_window(cls, day: DayLike, latitude: float, longitude: float) -> Tuple[datetime, datetime]:
        """Operating window: sunrise minus margin to sunset plus margin."""
        sunrise, sunset = cls.sunrise_sunset(day, latitude, longitude)
        return sunrise - UDP_MARGIN, sunset + UDP_MARGIN

    @classmethod
    def is_daylight_window(cls, timestamp: datetime, latitude: float, longitude: float) -> bool:
        """
        True if ``timestamp`` lies in the operating window of its own UTC date.

        Both bounds are inclusive. No adjustment is made for times shortly
        after UTC midnight that belong to the previous day's window. A naive
        timestamp is taken as UTC.
        """
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        start, end = cls.daylight_window(timestamp, latitude, longitude)
        return start <= timestamp <= end

    # --- Station keyed helpers ---

    @classmethod
    def sunrise_sunset_for_station(cls, day: DayLike, icao: str) -> Tuple[datetime, datetime]:
        """Sunrise and sunset at a station, unknown codes use the default station."""
        station = resolve_station(icao)
        return cls.sunrise_sunset(day, station.latitude, station.longitude)

    @classmethod
    def is_udp(cls, timestamp: datetime, icao: str) -> bool:
        """Daylight window check at a station, unknown codes use the default station."""
        station = resolve_station(icao)
        return cls.is_daylight_window(timestamp, station.latitude, station.longitude)


def _utc_date(value: DayLike) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def _round_half_up(minutes: float) -> int:
    return int(math.floor(minutes + 0.5))
