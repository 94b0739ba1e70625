"""Weather minima definitions, verdicts and aggregated statistics."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from metar_minima.weather.models import CloudCoverage, Observation


class CloudRule(Enum):
    """
    Which cloud coverages count against the ceiling threshold.

    STRICT: SCT, BKN and OVC layers count.
    FEW_OK: only BKN and OVC layers count.
    """

    STRICT = "strict"
    FEW_OK = "few-ok"

    @property
    def coverages(self) -> frozenset:
        return _RULE_COVERAGES[self]


_RULE_COVERAGES = {
    CloudRule.STRICT: frozenset({CloudCoverage.SCT, CloudCoverage.BKN, CloudCoverage.OVC}),
    CloudRule.FEW_OK: frozenset({CloudCoverage.BKN, CloudCoverage.OVC}),
}


class TimePeriod(Enum):
    """When a limit applies relative to the daylight operating window (UDP)."""

    UDP = "udp"
    OUTSIDE_UDP = "outside-udp"
    ALWAYS = "24/7"

    @property
    def label(self) -> str:
        return _PERIOD_LABELS[self]


_PERIOD_LABELS = {
    TimePeriod.UDP: "UDP",
    TimePeriod.OUTSIDE_UDP: "Outside UDP",
    TimePeriod.ALWAYS: "24/7",
}


def _percentage(violations: int, total: int) -> float:
    return violations / total * 100 if total > 0 else 0.0


@dataclass(frozen=True)
class Limit:
    """
    A user configured weather minimum.

    Limits are owned by the application; evaluation code only reads them.
    Threshold values are not validated here.

    Attributes:
        id: Opaque unique key
        name: Display label
        min_visibility_m: Visibility below this value violates
        cloud_rule: Which coverages count against the ceiling threshold
        max_cloud_height_ft: Qualifying layers below this height violate
        time_period: When the limit is evaluated
    """

    id: str
    name: str
    min_visibility_m: int = 5000
    cloud_rule: CloudRule = CloudRule.STRICT
    max_cloud_height_ft: int = 1000
    time_period: TimePeriod = TimePeriod.UDP

    def __post_init__(self):
        if not isinstance(self.cloud_rule, CloudRule):
            object.__setattr__(self, 'cloud_rule', _enum_value(CloudRule, self.cloud_rule, 'cloud rule'))
        if not isinstance(self.time_period, TimePeriod):
            object.__setattr__(self, 'time_period', _enum_value(TimePeriod, self.time_period, 'time period'))

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'minVisibility': self.min_visibility_m,
            'cloudRule': self.cloud_rule.value,
            'maxCloudHeight': self.max_cloud_height_ft,
            'timePeriod': self.time_period.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Limit':
        """
        Create a Limit from a dictionary.

        Accepts both the camelCase keys written by ``to_dict`` and the
        snake_case attribute names.

        Raises:
            ValueError: For a missing id, a non numeric threshold or an
                unknown rule/period value
        """
        def pick(camel: str, snake: str, default):
            if camel in data:
                return data[camel]
            return data.get(snake, default)

        limit_id = data.get('id')
        if limit_id is None or limit_id == '':
            raise ValueError("Limit definition requires an 'id'")

        return cls(
            id=str(limit_id),
            name=data.get('name', str(limit_id)),
            min_visibility_m=_int_value(pick('minVisibility', 'min_visibility_m', 5000), 'minVisibility'),
            cloud_rule=_enum_value(CloudRule, pick('cloudRule', 'cloud_rule', 'strict'), 'cloud rule'),
            max_cloud_height_ft=_int_value(pick('maxCloudHeight', 'max_cloud_height_ft', 1000), 'maxCloudHeight'),
            time_period=_enum_value(TimePeriod, pick('timePeriod', 'time_period', 'udp'), 'time period'),
        )


def _int_value(value, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Limit {what} must be a whole number, got {value!r}")


def _enum_value(enum_cls, value, what: str):
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        allowed = ", ".join(repr(m.value) for m in enum_cls)
        raise ValueError(f"Unknown {what} {value!r}, expected one of {allowed}")


@dataclass(frozen=True)
class Verdict:
    """
    Result of evaluating one observation against one limit.

    ``violated`` is only meaningful when ``relevant``; ``reason`` is set
    only when violated.
    """

    observation: Observation
    limit: Limit
    relevant: bool
    violated: bool = False
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'station': self.observation.station,
            'timestamp': self.observation.timestamp.isoformat(),
            'limit_id': self.limit.id,
            'relevant': self.relevant,
            'violated': self.violated,
            'reason': self.reason,
            'raw': self.observation.raw_text,
        }


@dataclass(frozen=True)
class MonthlyStat:
    """Relevant observations and violations for one UTC month."""

    year: int
    month: int
    total: int
    violations: int

    @property
    def period(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def percentage(self) -> float:
        return _percentage(self.violations, self.total)

    def to_dict(self) -> dict:
        return {
            'year': self.year,
            'month': self.month,
            'total': self.total,
            'violations': self.violations,
            'percentage': self.percentage,
        }


@dataclass(frozen=True)
class DailyStat:
    """
    Observations and violations for one UTC day, split by daylight window.

    A series stays at zero when the limit's time period excludes it.
    """

    date: str
    udp_total: int = 0
    udp_violations: int = 0
    non_udp_total: int = 0
    non_udp_violations: int = 0

    @property
    def total(self) -> int:
        return self.udp_total + self.non_udp_total

    @property
    def violations(self) -> int:
        return self.udp_violations + self.non_udp_violations

    @property
    def udp_percentage(self) -> float:
        return _percentage(self.udp_violations, self.udp_total)

    @property
    def non_udp_percentage(self) -> float:
        return _percentage(self.non_udp_violations, self.non_udp_total)

    def to_dict(self) -> dict:
        return {
            'date': self.date,
            'udpTotal': self.udp_total,
            'udpViolations': self.udp_violations,
            'nonUdpTotal': self.non_udp_total,
            'nonUdpViolations': self.non_udp_violations,
        }


@dataclass(frozen=True)
class LimitSummary:
    """Overall totals for one limit at one station."""

    limit: Limit
    total: int
    violations: int

    @property
    def percentage(self) -> float:
        return _percentage(self.violations, self.total)

    def to_dict(self) -> dict:
        return {
            'limit_id': self.limit.id,
            'name': self.limit.name,
            'time_period': self.limit.time_period.label,
            'total': self.total,
            'violations': self.violations,
            'percentage': self.percentage,
        }
