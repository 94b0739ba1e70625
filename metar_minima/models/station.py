#!/usr/bin/env python3

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Station:
    """
    A Dutch aerodrome with the reference point used for solar calculations.

    Coordinates are stored in decimal degrees:
    - Latitude: -90 to +90 degrees (negative for South, positive for North)
    - Longitude: -180 to +180 degrees (negative for West, positive for East)
    """

    icao: str
    name: str
    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate coordinates after initialization."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"Latitude must be between -90 and 90 degrees, got {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"Longitude must be between -180 and 180 degrees, got {self.longitude}")


_STATIONS: Dict[str, Station] = {
    s.icao: s for s in (
        Station("EHAM", "Amsterdam Schiphol", 52.31, 4.76),
        Station("EHGG", "Groningen Eelde", 53.12, 6.58),
        Station("EHLE", "Lelystad", 52.46, 5.52),
        Station("EHJK", "De Kooy", 52.92, 4.78),
        Station("EHWO", "Woensdrecht", 51.45, 5.40),
    )
}

DEFAULT_STATION = "EHAM"


def known_stations() -> List[Station]:
    """Return the stations of the table in their declared order."""
    return list(_STATIONS.values())


def lookup_station(icao: str) -> Optional[Station]:
    """
    Look up a station by ICAO code.

    Args:
        icao: Four-letter ICAO code (case insensitive)

    Returns:
        Station or None if the code is not in the table
    """
    if not icao:
        return None
    return _STATIONS.get(icao.upper())


def resolve_station(icao: str, default: str = DEFAULT_STATION) -> Station:
    """
    Look up a station, substituting the default station for unknown codes.

    Args:
        icao: Four-letter ICAO code
        default: ICAO code used when ``icao`` is unknown

    Returns:
        The matching Station, or the default one

    Raises:
        ValueError: If the default itself is not a known station
    """
    station = lookup_station(icao)
    if station is not None:
        return station
    fallback = lookup_station(default)
    if fallback is None:
        raise ValueError(f"Default station {default!r} is not a known station")
    logger.debug("Unknown station %r, using %s coordinates", icao, fallback.icao)
    return fallback
