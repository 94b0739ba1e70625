#!/usr/bin/env python3

import sys
import json
import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from dateutil import parser as date_parser

from metar_minima import config
from metar_minima.minima import Limit, MinimaStatistics
from metar_minima.minima.export import (
    daily_dataframe,
    monthly_dataframe,
    summary_dataframe,
    verdicts_dataframe,
)
from metar_minima.weather import MetarParser, Observation, load_file

logger = logging.getLogger(__name__)


class MinimaReport:
    """Runs the statistics for every configured limit at one station."""

    def __init__(self, args):
        self.args = args
        self.station = args.station.upper()
        self.observations: List[Observation] = []
        self.limits: List[Limit] = []

    def _build_parser(self) -> MetarParser:
        if self.args.reference:
            reference = parse_reference(self.args.reference)
            logger.info("Using reference month %04d-%02d", reference.year, reference.month)
            return MetarParser.for_month(reference.year, reference.month)
        return MetarParser.current(datetime.now(timezone.utc))

    def load(self) -> None:
        self.limits = config.load_limits(self.args.limits)
        self.observations = load_file(self.args.metar_file, self._build_parser())

    def build(self) -> dict:
        """Compute all statistics into a JSON serialisable dictionary."""
        result = {
            'station': self.station,
            'station_counts': MinimaStatistics.station_counts(self.observations),
            'summaries': [
                s.to_dict() for s in MinimaStatistics.summaries(self.observations, self.limits, self.station)
            ],
            'monthly_comparison': MinimaStatistics.monthly_comparison(
                self.observations, self.limits, self.station
            ),
            'limits': {},
        }
        for limit in self.limits:
            entry = {
                'monthly': [m.to_dict() for m in MinimaStatistics.monthly(self.observations, limit, self.station)],
                'recent_violations': [
                    v.to_dict()
                    for v in MinimaStatistics.recent_violations(
                        self.observations, limit, self.station, count=self.args.recent
                    )
                ],
            }
            if self.args.daily:
                entry['daily'] = [d.to_dict() for d in MinimaStatistics.daily(self.observations, limit, self.station)]
            result['limits'][limit.id] = entry
        return result

    def print_report(self) -> None:
        summaries = MinimaStatistics.summaries(self.observations, self.limits, self.station)
        print(f"Station {self.station}: {len(self.observations)} observations loaded")
        print(summary_dataframe(summaries).to_string(index=False))

        for limit in self.limits:
            print()
            print(f"{limit.name} ({limit.time_period.label})")
            monthly = MinimaStatistics.monthly(self.observations, limit, self.station)
            if not monthly:
                print("  no relevant observations")
                continue
            for stat in monthly:
                print(f"  {stat.period}: {stat.violations}/{stat.total} ({stat.percentage:.1f}%)")
            if self.args.daily:
                for stat in MinimaStatistics.daily(self.observations, limit, self.station):
                    print(
                        f"    {stat.date}: UDP {stat.udp_violations}/{stat.udp_total} "
                        f"({stat.udp_percentage:.1f}%), outside {stat.non_udp_violations}/{stat.non_udp_total} "
                        f"({stat.non_udp_percentage:.1f}%)"
                    )

    def export_csv(self, directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        summaries = MinimaStatistics.summaries(self.observations, self.limits, self.station)
        summary_dataframe(summaries).to_csv(directory / f"{self.station}_summary.csv", index=False)
        for limit in self.limits:
            prefix = f"{self.station}_{limit.id}"
            monthly = MinimaStatistics.monthly(self.observations, limit, self.station)
            monthly_dataframe(monthly).to_csv(directory / f"{prefix}_monthly.csv", index=False)
            daily = MinimaStatistics.daily(self.observations, limit, self.station)
            daily_dataframe(daily).to_csv(directory / f"{prefix}_daily.csv", index=False)
            recent = MinimaStatistics.recent_violations(
                self.observations, limit, self.station, count=self.args.recent
            )
            verdicts_dataframe(recent).to_csv(directory / f"{prefix}_violations.csv", index=False)
        logger.info("Wrote CSV files to %s", directory)

    def run(self) -> int:
        try:
            self.load()
        except (OSError, ValueError) as e:
            logger.error("Failed to load input: %s", e)
            return 1

        if not self.observations:
            logger.error(
                "No valid METAR records found. Make sure the file contains Dutch airport METARs (%s).",
                ", ".join(MinimaStatistics.station_counts([]).keys()),
            )
            return 1

        if self.args.json:
            with open(self.args.json, 'w', encoding='utf-8') as f:
                json.dump(self.build(), f, indent=2, ensure_ascii=False, default=str)
            logger.info("Exported results to %s", self.args.json)
        if self.args.csv_dir:
            self.export_csv(Path(self.args.csv_dir))

        self.print_report()
        return 0


def parse_reference(value: str) -> datetime:
    """
    Parse a reference month such as ``2024-03`` or ``March 2024``.

    Raises:
        ValueError: If the value is not a recognisable date
    """
    default = datetime(2000, 1, 1)
    try:
        return date_parser.parse(value, default=default)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid reference month: {value!r}") from e


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Evaluate METAR reports against weather minima')

    parser.add_argument('metar_file', help='Text file with one METAR/SPECI report per line')
    parser.add_argument('-l', '--limits', help='JSON file with limit definitions', required=True)
    parser.add_argument('-s', '--station', help='Station to report on', default=config.DEFAULT_STATION)
    parser.add_argument('-r', '--reference', help='Year and month of the reports (e.g. 2024-03), defaults to now')
    parser.add_argument('--daily', help='Include daily statistics', action='store_true')
    parser.add_argument('--recent', help='Number of recent violations to list', type=int, default=config.RECENT_VIOLATIONS)
    parser.add_argument('--csv-dir', help='Directory to write CSV exports')
    parser.add_argument('--json', help='JSON output file')
    parser.add_argument('-v', '--verbose', help='Verbose output', action='store_true')

    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO), format=config.LOG_FORMAT)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.reference:
        try:
            parse_reference(args.reference)
        except ValueError as e:
            parser.error(str(e))

    return MinimaReport(args).run()


if __name__ == '__main__':
    sys.exit(main())
