"""
Weather minima evaluation and statistics.

Provides:
- Limit, CloudRule, TimePeriod: user configured minima
- Verdict: evaluation result for one observation and one limit
- MonthlyStat, DailyStat, LimitSummary: aggregated statistics
- LimitEvaluator: relevance and compliance checks
- MinimaStatistics: monthly, daily and summary rollups

Example:
    from metar_minima.minima import Limit, MinimaStatistics

    limit = Limit(id="vfr", name="VFR day", min_visibility_m=5000, max_cloud_height_ft=1500)
    for stat in MinimaStatistics.monthly(observations, limit, "EHAM"):
        print(stat.period, round(stat.percentage, 1))
"""

from metar_minima.minima.models import (
    CloudRule,
    TimePeriod,
    Limit,
    Verdict,
    MonthlyStat,
    DailyStat,
    LimitSummary,
)
from metar_minima.minima.evaluator import LimitEvaluator
from metar_minima.minima.statistics import MinimaStatistics

__all__ = [
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
