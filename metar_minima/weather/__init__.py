"""
Weather module for parsing Dutch aerodrome METAR reports.

Provides:
- CloudCoverage: FEW/SCT/BKN/OVC enum with ordering
- CloudLayer: One reported cloud layer
- Observation: Parsed METAR/SPECI line
- MetarParser: Parse raw METAR text with an explicit date reference
- ObservationCollection: Queryable collection with station/time filters

Example:
    from metar_minima.weather import MetarParser

    parser = MetarParser.for_month(2024, 3)
    observations = parser.parse_file(text)
"""

from metar_minima.weather.models import (
    CloudCoverage,
    CloudLayer,
    Observation,
    UNRESTRICTED_VISIBILITY,
)
from metar_minima.weather.parser import MetarParser, load_file
from metar_minima.weather.collection import ObservationCollection

__all__ = [
    'CloudCoverage',
    'CloudLayer',
    'Observation',
    'UNRESTRICTED_VISIBILITY',
    'MetarParser',
    'load_file',
    'ObservationCollection',
]
