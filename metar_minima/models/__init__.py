from .queryable_collection import QueryableCollection
from .station import (
    Station,
    DEFAULT_STATION,
    known_stations,
    lookup_station,
    resolve_station,
)

__all__ = [
    'QueryableCollection',
    'Station',
    'DEFAULT_STATION',
    'known_stations',
    'lookup_station',
    'resolve_station',
]
