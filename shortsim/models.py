"""
Data models for script variants and retention analysis.

This module defines the value objects exchanged between the script producer,
the retention engine and the presentation/export layers. All of them are
immutable: editing helpers return fresh copies instead of mutating in place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional


class Trigger(str, Enum):
    """Narrative and editing techniques that influence retention."""

    HOOK = "hook"
    SHOCK = "shock"
    CONTEXT = "context"
    CTA = "cta"
    LOOP_HINT = "loop_hint"  # Invites a rewatch from the start
    CURIOSITY_QUESTION = "curiosity_question"
    JUMP_CUT = "jump_cut"
    MUSIC_CUE = "music_cue"
    TEXT_OVERLAY_BOLD = "text_overlay_bold"
    POIGNANT_POV = "poignant_pov"
    SURPRISE_REVEAL = "surprise_reveal"
    SOUND_EFFECT = "sound_effect"
    PATTERN_INTERRUPT = "pattern_interrupt"
    QUICK_ZOOM = "quick_zoom"
    POINT_OF_VIEW_SHOT = "point_of_view_shot"
    SATISFYING_VISUAL = "satisfying_visual"
    CALLBACK_JOKE = "callback_joke"
    FORESHADOWING = "foreshadowing"
    VISUAL_METAPHOR = "visual_metaphor"

    @classmethod
    def is_known(cls, trigger: str) -> bool:
        return trigger in _TRIGGER_IDS

    @property
    def label(self) -> str:
        """Human-readable name, e.g. "loop hint"."""
        return self.value.replace("_", " ")


_TRIGGER_IDS = frozenset(t.value for t in Trigger)


def trigger_id(trigger: "Trigger | str") -> str:
    """Normalize a trigger to its plain string id.

    Events store plain strings so that ids outside the vocabulary survive
    ingestion and simply weigh nothing.
    """
    if isinstance(trigger, Trigger):
        return trigger.value
    return str(trigger)


def _trigger_tuple(triggers: Optional[Iterable["Trigger | str"]]) -> tuple[str, ...]:
    if not triggers:
        return ()
    return tuple(trigger_id(t) for t in triggers)


def _mapping(value: Any, name: str) -> dict:
    if not isinstance(value, dict):
        raise TypeError(f"{name} must be an object, got {type(value).__name__}")
    return value


def _list(value: Any, name: str) -> list:
    """A JSON array field; null counts as empty."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"{name} must be a list, got {type(value).__name__}")
    return list(value)


def _flag(value: Any, name: str) -> bool:
    """A JSON boolean, also accepting the strings "true" and "false"."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise TypeError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class TimelineEvent:
    """A half-open interval [sec_start, sec_end) of a script timeline."""

    sec_start: int
    sec_end: int
    triggers: tuple[str, ...] = ()
    suggested_triggers: tuple[str, ...] = ()  # Advisory, never read by the engine
    is_weak: bool = False  # Producer-supplied retention-risk flag
    visual: str = ""
    audio: str = ""
    caption: str = ""

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize via object.__setattr__
        object.__setattr__(self, "triggers", _trigger_tuple(self.triggers))
        object.__setattr__(self, "suggested_triggers", _trigger_tuple(self.suggested_triggers))

    def is_active_at(self, second: int) -> bool:
        return self.sec_start <= second < self.sec_end

    @property
    def duration(self) -> int:
        return self.sec_end - self.sec_start

    def to_dict(self) -> dict:
        return {
            "sec_start": self.sec_start,
            "sec_end": self.sec_end,
            "visual": self.visual,
            "audio": self.audio,
            "caption": self.caption,
            "triggers": list(self.triggers),
            "suggested_triggers": list(self.suggested_triggers),
            "isWeak": self.is_weak,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimelineEvent":
        return cls(
            sec_start=int(data["sec_start"]),
            sec_end=int(data["sec_end"]),
            triggers=_list(data.get("triggers"), "triggers"),
            suggested_triggers=_list(data.get("suggested_triggers"), "suggested_triggers"),
            is_weak=_flag(data.get("isWeak", data.get("is_weak")), "isWeak"),
            visual=data.get("visual", ""),
            audio=data.get("audio", ""),
            caption=data.get("caption", ""),
        )


@dataclass(frozen=True)
class Source:
    """A citation attached to a script variant."""

    title: str
    uri: str

    def to_dict(self) -> dict:
        return {"title": self.title, "uri": self.uri}

    @classmethod
    def from_dict(cls, data: dict) -> "Source":
        return cls(title=data.get("title", ""), uri=data.get("uri", ""))


@dataclass(frozen=True)
class TransitionPointAnalysis:
    """How well the last moment of a video flows back into the first."""

    last_event_visual: str = ""
    first_event_visual: str = ""
    visual_match_score: int = 0  # 0-10
    last_event_audio: str = ""
    first_event_audio: str = ""
    audio_match_score: int = 0  # 0-10
    suggestion_for_improvement: str = ""

    def to_dict(self) -> dict:
        return {
            "last_event_visual": self.last_event_visual,
            "first_event_visual": self.first_event_visual,
            "visual_match_score": self.visual_match_score,
            "last_event_audio": self.last_event_audio,
            "first_event_audio": self.first_event_audio,
            "audio_match_score": self.audio_match_score,
            "suggestion_for_improvement": self.suggestion_for_improvement,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TransitionPointAnalysis":
        return cls(
            last_event_visual=data.get("last_event_visual", ""),
            first_event_visual=data.get("first_event_visual", ""),
            visual_match_score=int(data.get("visual_match_score", 0)),
            last_event_audio=data.get("last_event_audio", ""),
            first_event_audio=data.get("first_event_audio", ""),
            audio_match_score=int(data.get("audio_match_score", 0)),
            suggestion_for_improvement=data.get("suggestion_for_improvement", ""),
        )


@dataclass(frozen=True)
class LoopabilityAnalysis:
    """Producer's assessment of how naturally a variant loops."""

    score: int  # 0-10
    analysis: str = ""
    transition_point_analysis: Optional[TransitionPointAnalysis] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"score": self.score, "analysis": self.analysis}
        if self.transition_point_analysis is not None:
            data["transition_point_analysis"] = self.transition_point_analysis.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "LoopabilityAnalysis":
        transition = data.get("transition_point_analysis")
        return cls(
            score=int(data.get("score", 0)),
            analysis=data.get("analysis", ""),
            transition_point_analysis=(
                TransitionPointAnalysis.from_dict(
                    _mapping(transition, "transition_point_analysis")
                )
                if transition
                else None
            ),
        )


@dataclass(frozen=True)
class ScriptVariant:
    """One generated script: a duration and an ordered event timeline.

    Events may overlap and need not cover the whole duration.
    """

    variant_id: str
    duration_s: int
    timeline: tuple[TimelineEvent, ...] = ()
    sources: tuple[Source, ...] = ()
    loopability_analysis: Optional[LoopabilityAnalysis] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timeline", tuple(self.timeline))
        object.__setattr__(self, "sources", tuple(self.sources))

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "variant_id": self.variant_id,
            "duration_s": self.duration_s,
            "timeline": [e.to_dict() for e in self.timeline],
        }
        if self.sources:
            data["sources"] = [s.to_dict() for s in self.sources]
        if self.loopability_analysis is not None:
            data["loopability_analysis"] = self.loopability_analysis.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ScriptVariant":
        loop = data.get("loopability_analysis")
        return cls(
            variant_id=str(data.get("variant_id", "")),
            duration_s=int(data["duration_s"]),
            timeline=tuple(
                TimelineEvent.from_dict(_mapping(e, f"timeline[{i}]"))
                for i, e in enumerate(_list(data.get("timeline"), "timeline"))
            ),
            sources=tuple(
                Source.from_dict(_mapping(s, f"sources[{i}]"))
                for i, s in enumerate(_list(data.get("sources"), "sources"))
            ),
            loopability_analysis=(
                LoopabilityAnalysis.from_dict(_mapping(loop, "loopability_analysis"))
                if loop
                else None
            ),
        )


@dataclass(frozen=True)
class RetentionResult:
    """Output of the retention model for one timeline."""

    predicted_P_stay: tuple[float, ...]
    predicted_finish_rate: float
    predicted_replay_score: float

    def to_dict(self) -> dict:
        return {
            "predicted_P_stay": list(self.predicted_P_stay),
            "predicted_finish_rate": self.predicted_finish_rate,
            "predicted_replay_score": self.predicted_replay_score,
        }


@dataclass(frozen=True)
class TriggerImpact:
    """Finish-rate change, in percentage points, from removing a trigger."""

    trigger: str
    impact: float

    def to_dict(self) -> dict:
        return {"trigger": self.trigger, "impact": self.impact}


@dataclass(frozen=True)
class ValidationIssue:
    """A problem found at the ingestion boundary."""

    severity: str  # "error" or "warning"
    message: str
    variant_id: str = ""
    event_index: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity,
            "message": self.message,
            "variant_id": self.variant_id,
            "event_index": self.event_index,
        }


@dataclass(frozen=True)
class VariantReport:
    """Everything the presentation layer shows for one variant."""

    variant_id: str
    duration_s: int
    retention: RetentionResult
    trigger_impacts: tuple[TriggerImpact, ...] = ()
    weak_seconds: tuple[int, ...] = ()
    weak_event_indices: tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {
            "variant_id": self.variant_id,
            "duration_s": self.duration_s,
            "retention": self.retention.to_dict(),
            "trigger_impacts": [i.to_dict() for i in self.trigger_impacts],
            "weak_seconds": list(self.weak_seconds),
            "weak_event_indices": list(self.weak_event_indices),
        }
