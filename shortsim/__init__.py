"""Retention simulation for short-form video scripts.

Estimates per-second viewer retention, finish rate and replay likelihood for
a timed script, and ranks the narrative triggers by their contribution.
"""

from .config import Config, RetentionConfig, load_config
from .models import (
    RetentionResult,
    ScriptVariant,
    TimelineEvent,
    Trigger,
    TriggerImpact,
    VariantReport,
)
from .retention import (
    RetentionModel,
    TriggerImpactAnalyzer,
    analyze_retention,
    analyze_trigger_impact,
    build_report,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "RetentionConfig",
    "RetentionModel",
    "RetentionResult",
    "ScriptVariant",
    "TimelineEvent",
    "Trigger",
    "TriggerImpact",
    "TriggerImpactAnalyzer",
    "VariantReport",
    "analyze_retention",
    "analyze_trigger_impact",
    "build_report",
    "load_config",
]
