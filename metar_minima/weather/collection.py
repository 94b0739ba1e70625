"""Queryable collection for observation filtering."""

from datetime import datetime
from typing import Dict, Iterable, List, Union

from metar_minima.models.queryable_collection import QueryableCollection
from metar_minima.utils.solar import SolarCalculator
from metar_minima.weather.models import Observation


class ObservationCollection(QueryableCollection[Observation]):
    """
    Queryable collection of parsed observations.

    Adds filters for station, time and the daylight operating window on top
    of the generic chaining API.

    Example:
        udp_eham = ObservationCollection(observations).for_station("EHAM").inside_udp()
        low_ceilings = collection.with_ceiling_below(1000).chronological().all()
    """

    def __init__(self, items: Union[List[Observation], Iterable[Observation]]):
        super().__init__(items)

    # --- Location filters ---

    def for_station(self, icao: str) -> 'ObservationCollection':
        """Observations reported by one station (exact code match)."""
        return self.filter(lambda o: o.station == icao)

    def for_stations(self, icaos: List[str]) -> 'ObservationCollection':
        """Observations reported by any of the given stations."""
        wanted = set(icaos)
        return self.filter(lambda o: o.station in wanted)

    # --- Time filters ---

    def between(self, start: datetime, end: datetime) -> 'ObservationCollection':
        """Observations with start <= timestamp <= end."""
        return self.filter(lambda o: start <= o.timestamp <= end)

    def in_month(self, year: int, month: int) -> 'ObservationCollection':
        """Observations in a UTC calendar month."""
        return self.filter(lambda o: o.timestamp.year == year and o.timestamp.month == month)

    def chronological(self) -> 'ObservationCollection':
        """Sort by observation time, oldest first."""
        return self.order_by(lambda o: o.timestamp)

    def inside_udp(self) -> 'ObservationCollection':
        """Observations inside their station's daylight operating window."""
        return self.filter(lambda o: SolarCalculator.is_udp(o.timestamp, o.station))

    def outside_udp(self) -> 'ObservationCollection':
        """Observations outside their station's daylight operating window."""
        return self.filter(lambda o: not SolarCalculator.is_udp(o.timestamp, o.station))

    # --- Weather filters ---

    def with_visibility_below(self, meters: int) -> 'ObservationCollection':
        return self.filter(lambda o: o.visibility_m < meters)

    def with_ceiling_below(self, height_ft: int) -> 'ObservationCollection':
        """Observations with a BKN/OVC layer strictly below ``height_ft``."""
        return self.filter(lambda o: o.ceiling_ft is not None and o.ceiling_ft < height_ft)

    # --- Grouping ---

    def group_by_station(self) -> Dict[str, 'ObservationCollection']:
        groups = self.group_by(lambda o: o.station)
        return {k: ObservationCollection(v) for k, v in groups.items()}
