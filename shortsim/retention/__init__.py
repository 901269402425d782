"""Retention simulation and trigger impact analysis.

Usage:
    from shortsim.retention import analyze_retention, analyze_trigger_impact

    result = analyze_retention(variant.timeline, variant.duration_s)
    impacts = analyze_trigger_impact(variant.timeline, variant.duration_s)
"""

from .editing import apply_trigger, remove_trigger, trigger_inventory, weak_events
from .impact import TriggerImpactAnalyzer, analyze_trigger_impact
from .model import RetentionModel, active_triggers, analyze_retention
from .report import build_report, weak_seconds

__all__ = [
    "RetentionModel",
    "TriggerImpactAnalyzer",
    "active_triggers",
    "analyze_retention",
    "analyze_trigger_impact",
    "apply_trigger",
    "build_report",
    "remove_trigger",
    "trigger_inventory",
    "weak_events",
    "weak_seconds",
]
