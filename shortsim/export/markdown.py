"""Markdown export of script variants."""

from pathlib import Path
from typing import Optional, Sequence

from ..models import ScriptVariant, VariantReport


def _format_triggers(triggers: Sequence[str]) -> str:
    return ", ".join(f"`{t.replace('_', ' ')}`" for t in triggers)


def variant_to_markdown(
    variant: ScriptVariant,
    index: int = 1,
    report: Optional[VariantReport] = None,
) -> str:
    """Render one variant as a markdown document.

    Args:
        variant: The script variant.
        index: 1-based position used in the document title.
        report: Optional analysis results to include under Metrics.
    """
    lines = [f"# Script Variant {index}", "", "## Metrics"]
    lines.append(f"- **Duration:** {variant.duration_s} seconds")
    if variant.loopability_analysis is not None:
        lines.append(f"- **Loopability Score:** {variant.loopability_analysis.score}/10")
        lines.append(f"- **Loop Analysis:** {variant.loopability_analysis.analysis}")
    if report is not None:
        retention = report.retention
        lines.append(f"- **Predicted Finish Rate:** {retention.predicted_finish_rate * 100:.2f}%")
        lines.append(f"- **Replay Score:** {retention.predicted_replay_score:.2f}")
        if report.trigger_impacts:
            top = ", ".join(
                f"{i.trigger.replace('_', ' ')} (+{i.impact:.2f} pp)"
                for i in report.trigger_impacts
            )
            lines.append(f"- **Trigger Impact:** {top}")
        if report.weak_seconds:
            seconds = ", ".join(f"{t}s" for t in report.weak_seconds)
            lines.append(f"- **Weak Seconds:** {seconds}")
    lines.append("")

    if variant.sources:
        lines.append("## Sources")
        for source in variant.sources:
            lines.append(f"- [{source.title}]({source.uri})")
        lines.append("")

    lines.append("## Timeline")
    lines.append("")
    for event in variant.timeline:
        lines.append(f"### {event.sec_start}s - {event.sec_end}s")
        lines.append("")
        lines.append(f'**Caption:** "{event.caption}"')
        lines.append("")
        lines.append(f"- **Visual:** {event.visual}")
        lines.append(f"- **Audio:** {event.audio}")
        if event.triggers:
            lines.append(f"- **Triggers:** {_format_triggers(event.triggers)}")
        if event.suggested_triggers:
            lines.append(f"- **AI Suggestions:** {_format_triggers(event.suggested_triggers)}")
        lines.append("")
        lines.append("---")
        lines.append("")

    return "\n".join(lines)


def export_variants(
    variants: Sequence[ScriptVariant],
    output_dir: Path | str,
    reports: Optional[Sequence[VariantReport]] = None,
) -> list[Path]:
    """Write ``variant-<n>.md`` for each variant and return the paths."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for index, variant in enumerate(variants, start=1):
        report = reports[index - 1] if reports else None
        path = output_dir / f"variant-{index}.md"
        path.write_text(variant_to_markdown(variant, index, report))
        paths.append(path)
    return paths
