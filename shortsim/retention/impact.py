"""
Counterfactual trigger impact analysis.

Each distinct trigger of a timeline is removed in turn and the retention model
is re-run; the drop in finish rate is that trigger's impact.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from ..config import RetentionConfig
from ..models import TimelineEvent, TriggerImpact
from .editing import remove_trigger, trigger_inventory
from .model import RetentionModel


class TriggerImpactAnalyzer:
    """Ranks triggers by their marginal contribution to the finish rate."""

    def __init__(
        self,
        config: Optional[RetentionConfig] = None,
        max_workers: int = 1,
    ):
        """Initialize the analyzer.

        Args:
            config: Retention model configuration. Defaults to the built-in curve.
            max_workers: Threads used for the counterfactual runs. 1 runs them
                inline.
        """
        self.model = RetentionModel(config)
        self.max_workers = max_workers

    @property
    def config(self) -> RetentionConfig:
        return self.model.config

    def _finish_rate_without(
        self, timeline: Sequence[TimelineEvent], duration: int, trigger: str
    ) -> float:
        return self.model.analyze(remove_trigger(timeline, trigger), duration).predicted_finish_rate

    def analyze(self, timeline: Sequence[TimelineEvent], duration: int) -> list[TriggerImpact]:
        """Compute impacts sorted by descending impact.

        Triggers whose impact does not exceed the noise floor are dropped.
        Equal impacts keep first-discovery order.
        """
        baseline_rate = self.model.analyze(timeline, duration).predicted_finish_rate
        triggers = trigger_inventory(timeline)
        if not triggers:
            return []

        if self.max_workers > 1 and len(triggers) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # map() yields in submission order
                rates = list(
                    executor.map(
                        lambda trigger: self._finish_rate_without(timeline, duration, trigger),
                        triggers,
                    )
                )
        else:
            rates = [self._finish_rate_without(timeline, duration, t) for t in triggers]

        impacts = [
            TriggerImpact(trigger=trigger, impact=(baseline_rate - rate) * 100)
            for trigger, rate in zip(triggers, rates)
        ]
        impacts = [i for i in impacts if i.impact > self.config.impact_noise_floor]
        return sorted(impacts, key=lambda i: i.impact, reverse=True)


def analyze_trigger_impact(
    timeline: Sequence[TimelineEvent],
    duration: int,
    config: Optional[RetentionConfig] = None,
    max_workers: int = 1,
) -> list[TriggerImpact]:
    """Convenience wrapper around ``TriggerImpactAnalyzer(config).analyze``."""
    return TriggerImpactAnalyzer(config, max_workers=max_workers).analyze(timeline, duration)
