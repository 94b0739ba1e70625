"""pandas DataFrame views of statistics, for CSV export and charting."""

from typing import Iterable, List

import pandas as pd

from metar_minima.minima.models import DailyStat, LimitSummary, MonthlyStat, Verdict

MONTHLY_COLUMNS = ['period', 'year', 'month', 'total', 'violations', 'percentage']
DAILY_COLUMNS = [
    'date', 'udp_total', 'udp_violations', 'udp_percentage',
    'non_udp_total', 'non_udp_violations', 'non_udp_percentage',
]
SUMMARY_COLUMNS = ['limit_id', 'name', 'time_period', 'total', 'violations', 'percentage']
VERDICT_COLUMNS = ['station', 'timestamp', 'limit_id', 'relevant', 'violated', 'reason', 'raw']


def monthly_dataframe(stats: Iterable[MonthlyStat]) -> pd.DataFrame:
    rows = [
        {
            'period': s.period,
            'year': s.year,
            'month': s.month,
            'total': s.total,
            'violations': s.violations,
            'percentage': round(s.percentage, 1),
        }
        for s in stats
    ]
    return pd.DataFrame(rows, columns=MONTHLY_COLUMNS)


def daily_dataframe(stats: Iterable[DailyStat]) -> pd.DataFrame:
    rows = [
        {
            'date': s.date,
            'udp_total': s.udp_total,
            'udp_violations': s.udp_violations,
            'udp_percentage': round(s.udp_percentage, 1),
            'non_udp_total': s.non_udp_total,
            'non_udp_violations': s.non_udp_violations,
            'non_udp_percentage': round(s.non_udp_percentage, 1),
        }
        for s in stats
    ]
    return pd.DataFrame(rows, columns=DAILY_COLUMNS)


def summary_dataframe(summaries: Iterable[LimitSummary]) -> pd.DataFrame:
    rows: List[dict] = []
    for summary in summaries:
        row = summary.to_dict()
        row['percentage'] = round(row['percentage'], 1)
        rows.append(row)
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def verdicts_dataframe(verdicts: Iterable[Verdict]) -> pd.DataFrame:
    """One row per verdict; timestamps stay ISO 8601 strings."""
    return pd.DataFrame([v.to_dict() for v in verdicts], columns=VERDICT_COLUMNS)
