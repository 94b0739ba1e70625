"""
Weather minima analysis for Dutch aerodrome METAR reports.

This package parses METAR/SPECI lines, classifies observation times against
the daylight operating window (UDP), evaluates observations against
configurable weather minima and rolls violations up into monthly and daily
statistics.

The main public API includes:
- MetarParser: Parse raw report lines into Observation objects
- SolarCalculator: Sunrise/sunset and UDP window calculation
- Limit: Weather minimum definition
- LimitEvaluator: Per observation verdicts
- MinimaStatistics: Monthly, daily and summary statistics
"""

from metar_minima.weather import CloudCoverage, CloudLayer, Observation, MetarParser, ObservationCollection
from metar_minima.utils.solar import SolarCalculator
from metar_minima.minima import (
    CloudRule,
    TimePeriod,
    Limit,
    Verdict,
    MonthlyStat,
    DailyStat,
    LimitSummary,
    LimitEvaluator,
    MinimaStatistics,
)

__version__ = '0.1.0'
__all__ = [
    'CloudCoverage',
    'CloudLayer',
    'Observation',
    'MetarParser',
    'ObservationCollection',
    'SolarCalculator',
    'CloudRule',
    'TimePeriod',
    'Limit',
    'Verdict',
    'MonthlyStat',
    'DailyStat',
    'LimitSummary',
    'LimitEvaluator',
    'MinimaStatistics',
]
