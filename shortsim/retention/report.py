"""Per-variant analysis reports combining retention, impact and weak zones."""

from typing import Optional

from ..config import RetentionConfig
from ..models import RetentionResult, ScriptVariant, VariantReport
from .editing import weak_events
from .impact import TriggerImpactAnalyzer


def weak_seconds(result: RetentionResult, threshold: float = 0.80) -> list[int]:
    """Seconds whose stay probability falls below the weak-zone threshold."""
    return [t for t, p in enumerate(result.predicted_P_stay) if p < threshold]


def build_report(
    variant: ScriptVariant,
    config: Optional[RetentionConfig] = None,
    max_workers: int = 1,
) -> VariantReport:
    """Run the full analysis for one script variant."""
    analyzer = TriggerImpactAnalyzer(config, max_workers=max_workers)
    retention = analyzer.model.analyze(variant.timeline, variant.duration_s)
    impacts = analyzer.analyze(variant.timeline, variant.duration_s)

    return VariantReport(
        variant_id=variant.variant_id,
        duration_s=variant.duration_s,
        retention=retention,
        trigger_impacts=tuple(impacts),
        weak_seconds=tuple(weak_seconds(retention, analyzer.config.weak_threshold)),
        weak_event_indices=tuple(i for i, _ in weak_events(variant)),
    )
