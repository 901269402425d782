"""
Per-second retention simulation.

The model is a memoryless multiplicative survival model: each second gets an
independent stay probability (baseline plus the weights of the triggers
active at that second) and the finish rate is the product of all of them.
"""

from typing import Optional, Sequence

from ..config import RetentionConfig
from ..models import RetentionResult, TimelineEvent


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def active_triggers(timeline: Sequence[TimelineEvent], second: int) -> list[str]:
    """Triggers of all events active at a second, each counted once.

    Order is first appearance across events in timeline order.
    """
    seen: dict[str, None] = {}
    for event in timeline:
        if not event.is_active_at(second):
            continue
        for trigger in event.triggers:
            seen.setdefault(trigger, None)
    return list(seen)


class RetentionModel:
    """Estimates a retention curve, finish rate and replay score for a timeline.

    The model holds only its configuration; every call to ``analyze`` is
    independent and side-effect free.
    """

    def __init__(self, config: Optional[RetentionConfig] = None):
        self.config = config if config is not None else RetentionConfig()

    def stay_probability(self, second: int, triggers: Sequence[str]) -> float:
        """Stay probability at a second given its deduplicated triggers."""
        modifier = 0.0
        for trigger in triggers:
            modifier += self.config.weight_for(trigger)
        return clamp(
            self.config.baseline_at(second) + modifier,
            0.0,
            self.config.max_stay_probability,
        )

    def analyze(self, timeline: Sequence[TimelineEvent], duration: int) -> RetentionResult:
        """Simulate retention over ``duration`` whole seconds.

        Args:
            timeline: Events of the script. May be empty, overlapping or
                malformed; events with ``sec_end <= sec_start`` are never
                active.
            duration: Length in seconds. Values <= 0 give an empty curve.

        Returns:
            RetentionResult with one stay probability per second.
        """
        curve: list[float] = []
        loop_bonus = 0.0

        for t in range(max(duration, 0)):
            triggers = active_triggers(timeline, t)
            curve.append(self.stay_probability(t, triggers))
            if self.config.loop_trigger in triggers:
                loop_bonus += self.config.loop_bonus

        finish_rate = 1.0
        for p in curve:
            finish_rate *= p

        return RetentionResult(
            predicted_P_stay=tuple(curve),
            predicted_finish_rate=finish_rate,
            predicted_replay_score=clamp(self.config.base_replay_score + loop_bonus, 0.0, 1.0),
        )


def analyze_retention(
    timeline: Sequence[TimelineEvent],
    duration: int,
    config: Optional[RetentionConfig] = None,
) -> RetentionResult:
    """Convenience wrapper around ``RetentionModel(config).analyze``."""
    return RetentionModel(config).analyze(timeline, duration)
