"""Copy-on-write edits of script timelines."""

from dataclasses import replace
from typing import Sequence

from ..models import ScriptVariant, TimelineEvent, Trigger, trigger_id


def remove_trigger(
    timeline: Sequence[TimelineEvent], trigger: Trigger | str
) -> tuple[TimelineEvent, ...]:
    """Return a copy of the timeline with a trigger removed from every event.

    Only ``triggers`` changes; suggestions, the weak flag and descriptive
    fields are carried over unchanged.
    """
    target = trigger_id(trigger)
    return tuple(
        replace(event, triggers=tuple(t for t in event.triggers if t != target))
        for event in timeline
    )


def apply_trigger(
    variant: ScriptVariant, event_index: int, trigger: Trigger | str
) -> ScriptVariant:
    """Apply a (usually suggested) trigger to one event of a variant.

    The trigger is appended to the event's triggers unless already present
    and dropped from its suggestions. The input variant is left untouched.

    Raises:
        IndexError: If ``event_index`` does not address an event.
    """
    if not 0 <= event_index < len(variant.timeline):
        raise IndexError(
            f"Event index {event_index} out of range for variant "
            f"'{variant.variant_id}' with {len(variant.timeline)} events"
        )

    target = trigger_id(trigger)
    event = variant.timeline[event_index]
    triggers = event.triggers if target in event.triggers else event.triggers + (target,)
    updated = replace(
        event,
        triggers=triggers,
        suggested_triggers=tuple(t for t in event.suggested_triggers if t != target),
    )

    timeline = list(variant.timeline)
    timeline[event_index] = updated
    return replace(variant, timeline=tuple(timeline))


def weak_events(variant: ScriptVariant) -> list[tuple[int, TimelineEvent]]:
    """Events the producer flagged as a retention risk, with their indices."""
    return [(i, event) for i, event in enumerate(variant.timeline) if event.is_weak]


def trigger_inventory(timeline: Sequence[TimelineEvent]) -> list[str]:
    """Distinct triggers across the whole timeline, in first-discovery order."""
    seen: dict[str, None] = {}
    for event in timeline:
        for trigger in event.triggers:
            seen.setdefault(trigger, None)
    return list(seen)
