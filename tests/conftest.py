import pytest
from datetime import datetime, timezone

from metar_minima.weather.models import CloudCoverage, CloudLayer, Observation
from metar_minima.minima.models import CloudRule, Limit, TimePeriod


def utc(year, month, day, hour=0, minute=0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def make_observation(station="EHAM", when=None, visibility=9999, clouds=(), raw=""):
    """Build an observation; ``clouds`` is a sequence of (coverage, height_ft)."""
    return Observation(
        station=station,
        timestamp=when or utc(2024, 3, 10, 12, 0),
        visibility_m=visibility,
        clouds=tuple(CloudLayer(CloudCoverage(c), h) for c, h in clouds),
        raw_text=raw,
    )


@pytest.fixture
def make_limit():
    def _make(period=TimePeriod.ALWAYS, rule=CloudRule.STRICT, visibility=5000, ceiling=1000, limit_id="test"):
        return Limit(
            id=limit_id,
            name=limit_id.title(),
            min_visibility_m=visibility,
            cloud_rule=rule,
            max_cloud_height_ft=ceiling,
            time_period=period,
        )
    return _make


@pytest.fixture
def sample_observations():
    """
    Mixed dataset around EHAM (plus one EHGG report), deliberately unsorted.

    At EHAM in March/April 12:00-12:30 UTC is inside the daylight window and
    00:30 UTC is outside it.
    """
    return [
        make_observation(when=utc(2024, 4, 2, 12, 0), clouds=[("BKN", 500)], raw="EHAM 021200Z 9999 BKN005"),
        make_observation(when=utc(2024, 3, 10, 12, 0), raw="EHAM 101200Z 9999"),
        make_observation(when=utc(2024, 3, 10, 12, 30), visibility=3000, raw="EHAM 101230Z 3000"),
        make_observation(when=utc(2024, 3, 10, 0, 30), visibility=3000, raw="EHAM 100030Z 3000"),
        make_observation(station="EHGG", when=utc(2024, 3, 10, 12, 0), visibility=1000, raw="EHGG 101200Z 1000"),
    ]


@pytest.fixture
def metar_text() -> str:
    return "\n".join([
        "METAR EHAM 101200Z 24010KT 9999 FEW030 08/04 Q1015",
        "",
        "METAR EHAM 101230Z 24012KT 3000 BR SCT012 07/05 Q1015",
        "   ",
        "SPECI EHAM 100030Z 22005KT 3000 BKN004 05/04 Q1016",
        "METAR EGLL 101200Z 27010KT 9999 FEW040 10/05 Q1020",
        "METAR EHGG 101200Z 20008KT 1000 FG OVC002 04/04 Q1014",
        "METAR EHAM NIL",
    ])
