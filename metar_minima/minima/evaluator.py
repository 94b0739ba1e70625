"""Evaluate observations against weather minima."""

from metar_minima.minima.models import Limit, TimePeriod, Verdict
from metar_minima.utils.solar import SolarCalculator
from metar_minima.weather.models import Observation


class LimitEvaluator:
    """
    Decide relevance and compliance of an observation for a limit.

    All methods are static, pure functions with no state.
    """

    @staticmethod
    def is_relevant(inside_window: bool, time_period: TimePeriod) -> bool:
        """Whether a limit with ``time_period`` applies at a time inside/outside the window."""
        if time_period == TimePeriod.ALWAYS:
            return True
        if time_period == TimePeriod.UDP:
            return inside_window
        return not inside_window

    @classmethod
    def evaluate(cls, observation: Observation, limit: Limit) -> Verdict:
        """
        Evaluate one observation against one limit.

        Visibility is checked first; cloud layers are only inspected when
        visibility complies. Both comparisons are strict, a value equal to
        the threshold complies. A cloud violation cites the first
        qualifying layer in report order.

        Args:
            observation: Parsed observation
            limit: Limit definition

        Returns:
            Verdict for the pair
        """
        inside = SolarCalculator.is_udp(observation.timestamp, observation.station)
        return cls.evaluate_in_window(observation, limit, inside)

    @classmethod
    def evaluate_in_window(cls, observation: Observation, limit: Limit, inside_window: bool) -> Verdict:
        """Same as ``evaluate`` with the daylight window status already known."""
        if not cls.is_relevant(inside_window, limit.time_period):
            return Verdict(observation=observation, limit=limit, relevant=False)

        if observation.visibility_m < limit.min_visibility_m:
            return Verdict(
                observation=observation,
                limit=limit,
                relevant=True,
                violated=True,
                reason=f"Visibility {observation.visibility_m}m < {limit.min_visibility_m}m",
            )

        counted = limit.cloud_rule.coverages
        for layer in observation.clouds:
            if layer.coverage in counted and layer.height_ft < limit.max_cloud_height_ft:
                return Verdict(
                    observation=observation,
                    limit=limit,
                    relevant=True,
                    violated=True,
                    reason=(
                        f"Cloud layer {layer.code} at {layer.height_ft}ft "
                        f"< {limit.max_cloud_height_ft}ft"
                    ),
                )

        return Verdict(observation=observation, limit=limit, relevant=True)
