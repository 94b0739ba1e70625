"""Monthly and daily rollups of limit violations."""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from metar_minima.minima.evaluator import LimitEvaluator
from metar_minima.minima.models import (
    DailyStat,
    Limit,
    LimitSummary,
    MonthlyStat,
    TimePeriod,
    Verdict,
)
from metar_minima.models.station import known_stations
from metar_minima.utils.solar import SolarCalculator
from metar_minima.weather.collection import ObservationCollection
from metar_minima.weather.models import Observation

logger = logging.getLogger(__name__)


class MinimaStatistics:
    """
    Aggregate verdicts for one limit at one station.

    Inputs are read only; every call builds its own accumulators and
    returns new, independent results. An empty input gives an empty result.

    Example:
        monthly = MinimaStatistics.monthly(observations, limit, "EHAM")
        for stat in monthly:
            print(stat.period, f"{stat.percentage:.1f}%")
    """

    @staticmethod
    def _station_observations(observations: Iterable[Observation], station: str) -> ObservationCollection:
        return ObservationCollection(observations).for_station(station)

    @classmethod
    def monthly(
        cls,
        observations: Iterable[Observation],
        limit: Limit,
        station: str,
    ) -> List[MonthlyStat]:
        """
        Relevant observations and violations per UTC month.

        Observations outside the limit's time period are left out of both
        counts. Months are sorted ascending.
        """
        buckets: Dict[Tuple[int, int], List[int]] = {}
        for observation in cls._station_observations(observations, station):
            verdict = LimitEvaluator.evaluate(observation, limit)
            if not verdict.relevant:
                continue
            key = (observation.timestamp.year, observation.timestamp.month)
            counts = buckets.setdefault(key, [0, 0])
            counts[0] += 1
            if verdict.violated:
                counts[1] += 1

        return [
            MonthlyStat(year=year, month=month, total=total, violations=violations)
            for (year, month), (total, violations) in sorted(buckets.items())
        ]

    @classmethod
    def daily(
        cls,
        observations: Iterable[Observation],
        limit: Limit,
        station: str,
    ) -> List[DailyStat]:
        """
        Observations and violations per UTC day, split by daylight window.

        Every observation of the station creates its day's entry. It is
        counted in the inside-window series unless the limit only applies
        outside the window, and in the outside-window series unless the
        limit only applies inside it. Days are sorted ascending.
        """
        buckets: Dict[str, List[int]] = {}
        for observation in cls._station_observations(observations, station):
            counts = buckets.setdefault(observation.date_key, [0, 0, 0, 0])
            inside = SolarCalculator.is_udp(observation.timestamp, observation.station)
            verdict = LimitEvaluator.evaluate_in_window(observation, limit, inside)

            if inside:
                if limit.time_period != TimePeriod.OUTSIDE_UDP:
                    counts[0] += 1
                    if verdict.violated:
                        counts[1] += 1
            elif limit.time_period != TimePeriod.UDP:
                counts[2] += 1
                if verdict.violated:
                    counts[3] += 1

        return [
            DailyStat(
                date=day,
                udp_total=counts[0],
                udp_violations=counts[1],
                non_udp_total=counts[2],
                non_udp_violations=counts[3],
            )
            for day, counts in sorted(buckets.items())
        ]

    @classmethod
    def summary(
        cls,
        observations: Iterable[Observation],
        limit: Limit,
        station: str,
    ) -> LimitSummary:
        """Overall relevant total and violations, summed from the monthly rollup."""
        monthly = cls.monthly(observations, limit, station)
        return LimitSummary(
            limit=limit,
            total=sum(m.total for m in monthly),
            violations=sum(m.violations for m in monthly),
        )

    @classmethod
    def summaries(
        cls,
        observations: Sequence[Observation],
        limits: Sequence[Limit],
        station: str,
    ) -> List[LimitSummary]:
        """One summary per limit, in the order given."""
        return [cls.summary(observations, limit, station) for limit in limits]

    @classmethod
    def recent_violations(
        cls,
        observations: Iterable[Observation],
        limit: Limit,
        station: str,
        count: int = 10,
    ) -> List[Verdict]:
        """
        The last ``count`` violations in input order, newest first.

        Args:
            observations: Observations in load order
            limit: Limit to evaluate
            station: Station to filter on
            count: Maximum number of verdicts returned
        """
        if count <= 0:
            return []
        violated = [
            verdict
            for verdict in (
                LimitEvaluator.evaluate(o, limit)
                for o in cls._station_observations(observations, station)
            )
            if verdict.violated
        ]
        return list(reversed(violated[-count:]))

    @classmethod
    def monthly_comparison(
        cls,
        observations: Sequence[Observation],
        limits: Sequence[Limit],
        station: str,
    ) -> List[Dict[str, object]]:
        """
        Monthly violation percentage of several limits side by side.

        Returns one row per month with data for any limit, sorted ascending.
        Each row holds ``period`` (``YYYY-MM``) and one key per limit name
        with its percentage rounded to one decimal, 0.0 where the limit has
        no relevant observations that month. A name equal to ``period`` or to
        an earlier limit's key is suffixed with the limit id, e.g.
        ``Day (day2)``.
        """
        per_limit: List[Tuple[str, Dict[str, float]]] = []
        periods = set()
        used = {'period'}
        for limit in limits:
            key = limit.name
            if key in used:
                key = f"{limit.name} ({limit.id})"
            used.add(key)
            stats = {s.period: s.percentage for s in cls.monthly(observations, limit, station)}
            periods.update(stats)
            per_limit.append((key, stats))

        rows = []
        for period in sorted(periods):
            row: Dict[str, object] = {'period': period}
            for key, stats in per_limit:
                row[key] = round(stats.get(period, 0.0), 1)
            rows.append(row)
        return rows

    @staticmethod
    def station_counts(
        observations: Iterable[Observation],
        stations: Optional[Sequence[str]] = None,
    ) -> Dict[str, int]:
        """
        Number of observations per station.

        Args:
            observations: Observations to count
            stations: Stations to report, defaults to all known stations

        Returns:
            Mapping station -> count, including zero counts, in the given order
        """
        if stations is None:
            stations = [s.icao for s in known_stations()]
        counts = {icao: 0 for icao in stations}
        for observation in observations:
            if observation.station in counts:
                counts[observation.station] += 1
        logger.debug("Station counts: %s", counts)
        return counts
