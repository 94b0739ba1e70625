"""METAR line parser for Dutch aerodrome reports."""

import re
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, List, Union

from metar_minima.weather.models import (
    CloudCoverage,
    CloudLayer,
    Observation,
    STATION_PATTERN,
    UNRESTRICTED_VISIBILITY,
)

logger = logging.getLogger(__name__)

_REPORT_PREFIXES = ("METAR", "SPECI")
_DATETIME_RE = re.compile(r'^(\d{2})(\d{2})(\d{2})Z$', re.ASCII)
_VISIBILITY_RE = re.compile(r'^\d{4}$', re.ASCII)
_DIRECTIONAL_VISIBILITY_RE = re.compile(r'^(\d{4})(N|NE|E|SE|S|SW|W|NW)$', re.ASCII)
_CLOUD_RE = re.compile(r'^(FEW|SCT|BKN|OVC)(\d{3})', re.ASCII)

_MIN_TOKENS = 3


class MetarParser:
    """
    Parse METAR/SPECI lines into Observation objects.

    Reports only carry day, hour and minute; year and month come from an
    explicit reference. Two modes exist:

    - current mode (``MetarParser.current(now)``): year and month of ``now``,
      directional visibility groups such as ``4000NE`` are honoured.
    - explicit mode (``MetarParser.for_month(year, month)``): a known period
      for historical imports, directional groups are ignored.

    A line that fails validation yields None, never an exception.

    Example:
        parser = MetarParser.for_month(2024, 3)
        obs = parser.parse_line("METAR EHAM 151450Z 24010KT 4000 BKN008 08/06 Q1012")
    """

    def __init__(self, year: int, month: int, directional_visibility: bool = False):
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        self.year = year
        self.month = month
        self.directional_visibility = directional_visibility

    @classmethod
    def current(cls, now: datetime) -> 'MetarParser':
        """Parser inferring year and month from ``now`` (current processing time)."""
        return cls(now.year, now.month, directional_visibility=True)

    @classmethod
    def for_month(cls, year: int, month: int) -> 'MetarParser':
        """Parser for reports known to belong to ``year``/``month``."""
        return cls(year, month, directional_visibility=False)

    def parse_line(self, raw: str) -> Optional[Observation]:
        """
        Parse one report line.

        Args:
            raw: Raw METAR text (may include "METAR" or "SPECI" prefix)

        Returns:
            Observation or None if the line is rejected
        """
        tokens = raw.strip().split()
        if tokens and tokens[0] in _REPORT_PREFIXES:
            tokens = tokens[1:]

        if len(tokens) < _MIN_TOKENS:
            logger.debug("Rejected line with too few tokens: %s", raw[:80])
            return None

        station = tokens[0]
        if not STATION_PATTERN.match(station):
            logger.debug("Rejected line for station %r: %s", station, raw[:80])
            return None

        timestamp = self._extract_timestamp(tokens)
        if timestamp is None:
            logger.debug("Rejected line without usable date/time group: %s", raw[:80])
            return None

        return Observation(
            station=station,
            timestamp=timestamp,
            visibility_m=self._extract_visibility(tokens),
            clouds=self._extract_clouds(tokens),
            raw_text=raw,
        )

    def parse_file(self, text: str) -> List[Observation]:
        """
        Parse a multi-line text, one report per line.

        Blank lines are skipped and rejected lines dropped; order is preserved.
        """
        lines = [line.strip() for line in text.splitlines()]
        lines = [line for line in lines if line]

        observations = []
        for line in lines:
            observation = self.parse_line(line)
            if observation is not None:
                observations.append(observation)

        logger.info("Parsed %d observations from %d lines", len(observations), len(lines))
        return observations

    # --- Field extraction helpers ---

    def _extract_timestamp(self, tokens: List[str]) -> Optional[datetime]:
        """
        Build the UTC observation time from the first DDHHMMZ group.

        Fields are offsets from the start of the reference month, so values
        past the end of the month (day 31 in April, hour 24) roll over into
        the next month and day 00 falls on the last day of the previous one.
        """
        for token in tokens:
            match = _DATETIME_RE.match(token)
            if match:
                day, hour, minute = (int(g) for g in match.groups())
                month_start = datetime(self.year, self.month, 1, tzinfo=timezone.utc)
                return month_start + timedelta(days=day - 1, hours=hour, minutes=minute)
        return None

    def _extract_visibility(self, tokens: List[str]) -> int:
        """
        Visibility in meters, first match wins.

        CAVOK and a plain four digit group stop the scan. Directional groups
        (current mode only) update the value but keep scanning, so a later
        plain group still takes precedence.
        """
        visibility = UNRESTRICTED_VISIBILITY
        for token in tokens:
            if token == "CAVOK":
                return UNRESTRICTED_VISIBILITY
            if _VISIBILITY_RE.match(token):
                value = int(token)
                if value <= UNRESTRICTED_VISIBILITY:
                    return value
            if self.directional_visibility:
                match = _DIRECTIONAL_VISIBILITY_RE.match(token)
                if match:
                    visibility = int(match.group(1))
        return visibility

    @staticmethod
    def _extract_clouds(tokens: List[str]) -> tuple:
        """Cloud layers in report order, suffixes such as CB or TCU ignored."""
        layers = []
        for token in tokens:
            match = _CLOUD_RE.match(token)
            if match:
                layers.append(CloudLayer(CloudCoverage(match.group(1)), int(match.group(2)) * 100))
        return tuple(layers)


def load_file(path: Union[str, Path], parser: MetarParser) -> List[Observation]:
    """
    Read a METAR text file and parse it.

    Raises:
        OSError: If the file cannot be read
    """
    path = Path(path)
    logger.info("Loading METAR reports from %s", path)
    text = path.read_text(encoding='utf-8')
    return parser.parse_file(text)
