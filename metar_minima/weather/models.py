"""Weather observation data models."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Tuple


class CloudCoverage(Enum):
    """
    Cloud layer coverage codes.

    Ordered by increasing sky coverage: FEW < SCT < BKN < OVC.
    """

    FEW = "FEW"
    SCT = "SCT"
    BKN = "BKN"
    OVC = "OVC"

    @property
    def order(self) -> int:
        """Numeric ordering from least (0) to most (3) coverage."""
        return _COVERAGE_ORDER[self]

    @property
    def is_ceiling(self) -> bool:
        """True for the coverages that form a ceiling (BKN, OVC)."""
        return self in (CloudCoverage.BKN, CloudCoverage.OVC)

    def __lt__(self, other: 'CloudCoverage') -> bool:
        if not isinstance(other, CloudCoverage):
            return NotImplemented
        return self.order < other.order

    def __le__(self, other: 'CloudCoverage') -> bool:
        if not isinstance(other, CloudCoverage):
            return NotImplemented
        return self.order <= other.order

    def __gt__(self, other: 'CloudCoverage') -> bool:
        if not isinstance(other, CloudCoverage):
            return NotImplemented
        return self.order > other.order

    def __ge__(self, other: 'CloudCoverage') -> bool:
        if not isinstance(other, CloudCoverage):
            return NotImplemented
        return self.order >= other.order


_COVERAGE_ORDER = {
    CloudCoverage.FEW: 0,
    CloudCoverage.SCT: 1,
    CloudCoverage.BKN: 2,
    CloudCoverage.OVC: 3,
}

# Dutch aerodromes only
STATION_PATTERN = re.compile(r'^EH[A-Z]{2}$')

# Reported visibility for "10 km or more"
UNRESTRICTED_VISIBILITY = 9999


@dataclass(frozen=True)
class CloudLayer:
    """
    One reported cloud layer.

    Attributes:
        coverage: Layer coverage
        height_ft: Base height in feet above ground, a multiple of 100
    """

    coverage: CloudCoverage
    height_ft: int

    def __post_init__(self):
        if not isinstance(self.coverage, CloudCoverage):
            try:
                object.__setattr__(self, 'coverage', CloudCoverage(self.coverage))
            except ValueError:
                raise ValueError(f"Unknown cloud coverage: {self.coverage!r}")
        if self.height_ft < 0:
            raise ValueError(f"Cloud height must not be negative, got {self.height_ft}")
        if self.height_ft % 100 != 0:
            raise ValueError(f"Cloud height must be a multiple of 100 ft, got {self.height_ft}")

    @property
    def code(self) -> str:
        """METAR group for this layer, e.g. ``BKN008``."""
        return f"{self.coverage.value}{self.height_ft // 100:03d}"

    def to_dict(self) -> dict:
        return {'type': self.coverage.value, 'height': self.height_ft}

    @classmethod
    def from_dict(cls, data: dict) -> 'CloudLayer':
        return cls(coverage=CloudCoverage(data['type']), height_ft=int(data['height']))

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class Observation:
    """
    A parsed METAR/SPECI observation.

    Instances are immutable; the parser is the only producer in normal use.

    Attributes:
        station: ICAO code of the reporting aerodrome
        timestamp: Observation time, timezone aware (UTC)
        visibility_m: Prevailing visibility in meters, 9999 means 10 km or more
        clouds: Cloud layers in the order they were reported
        raw_text: Original report line
    """

    station: str
    timestamp: datetime
    visibility_m: int = UNRESTRICTED_VISIBILITY
    clouds: Tuple[CloudLayer, ...] = field(default_factory=tuple)
    raw_text: str = ""

    def __post_init__(self):
        if not STATION_PATTERN.match(self.station or ""):
            raise ValueError(f"Station must be a Dutch ICAO code (EH??), got {self.station!r}")
        if self.timestamp.tzinfo is None or self.timestamp.utcoffset() != timedelta(0):
            raise ValueError(f"Observation timestamp must be UTC aware, got {self.timestamp!r}")
        if not 0 <= self.visibility_m <= UNRESTRICTED_VISIBILITY:
            raise ValueError(f"Visibility must be between 0 and 9999 m, got {self.visibility_m}")
        if not isinstance(self.clouds, tuple):
            object.__setattr__(self, 'clouds', tuple(self.clouds))

    @property
    def ceiling_ft(self) -> Optional[int]:
        """Lowest BKN or OVC layer height, None without a ceiling."""
        heights = [c.height_ft for c in self.clouds if c.coverage.is_ceiling]
        return min(heights) if heights else None

    @property
    def date_key(self) -> str:
        """UTC calendar date as ``YYYY-MM-DD``."""
        return self.timestamp.strftime('%Y-%m-%d')

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON export."""
        return {
            'station': self.station,
            'timestamp': self.timestamp.isoformat(),
            'visibility': self.visibility_m,
            'clouds': [c.to_dict() for c in self.clouds],
            'raw': self.raw_text,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Observation':
        """Create Observation from dictionary."""
        return cls(
            station=data['station'],
            timestamp=datetime.fromisoformat(data['timestamp']),
            visibility_m=int(data.get('visibility', UNRESTRICTED_VISIBILITY)),
            clouds=tuple(CloudLayer.from_dict(c) for c in data.get('clouds', [])),
            raw_text=data.get('raw', ''),
        )

    def __repr__(self) -> str:
        parts = [self.station, f"{self.timestamp:%Y-%m-%dT%H:%MZ}", f"{self.visibility_m}m"]
        parts.extend(c.code for c in self.clouds)
        return f"Observation({' '.join(parts)})"
