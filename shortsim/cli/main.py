"""Main CLI entry point for script retention analysis.

Usage:
    python -m shortsim.cli analyze scripts.json               # Finish rate, replay, weak zones
    python -m shortsim.cli analyze --sample --json            # Bundled samples as JSON
    python -m shortsim.cli impact scripts.json --variant v1   # Rank trigger impact
    python -m shortsim.cli curve scripts.json --variant v1    # Per-second stay probability
    python -m shortsim.cli export scripts.json -o out/        # Markdown per variant
    python -m shortsim.cli apply scripts.json --variant v1 --event 2 --trigger jump_cut
    python -m shortsim.cli validate scripts.json              # Ingestion checks

Scripts are JSON files produced by the script generator: a list of variants,
each with duration_s and a timeline of events.
"""

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..config import Config, load_config
from ..export import export_variants
from ..ingestion import (
    ScriptParseError,
    has_errors,
    load_variants,
    save_variants,
    validate_variant,
)
from ..models import ScriptVariant, Trigger
from ..retention import apply_trigger, build_report
from ..samples import load_samples

console = Console()


def _load_config(args: argparse.Namespace) -> Config:
    return load_config(args.config)


def _load(args: argparse.Namespace) -> list[ScriptVariant]:
    """Load variants from the file argument or the bundled samples."""
    if getattr(args, "sample", False):
        return load_samples()
    if not args.source:
        raise ValueError("Provide a script file or --sample")
    return load_variants(args.source, strict=getattr(args, "strict", False))


def _select(variants: list[ScriptVariant], variant_id: str | None) -> list[ScriptVariant]:
    if variant_id is None:
        return variants
    selected = [v for v in variants if v.variant_id == variant_id]
    if not selected:
        available = ", ".join(v.variant_id for v in variants)
        raise ValueError(f"Variant '{variant_id}' not found (available: {available})")
    return selected


def cmd_analyze(args: argparse.Namespace) -> int:
    """Show finish rate, replay score and weak zones per variant."""
    try:
        config = _load_config(args)
        variants = _select(_load(args), args.variant)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    reports = [
        build_report(v, config.retention, max_workers=config.cli.workers) for v in variants
    ]

    if args.json:
        print(json.dumps([r.to_dict() for r in reports], indent=2))
        return 0

    decimals = config.cli.decimals
    table = Table(title="Retention Analysis")
    table.add_column("Variant", style="cyan")
    table.add_column("Duration", justify="right")
    table.add_column("Finish Rate", justify="right")
    table.add_column("Replay Score", justify="right")
    table.add_column("Weak Seconds")
    table.add_column("Weak Events")

    for report in reports:
        retention = report.retention
        table.add_row(
            report.variant_id,
            f"{report.duration_s}s",
            f"{retention.predicted_finish_rate * 100:.{decimals}f}%",
            f"{retention.predicted_replay_score:.{decimals}f}",
            ", ".join(str(t) for t in report.weak_seconds) or "-",
            ", ".join(str(i) for i in report.weak_event_indices) or "-",
        )

    console.print(table)
    return 0


def cmd_impact(args: argparse.Namespace) -> int:
    """Rank triggers by their contribution to the finish rate."""
    try:
        config = _load_config(args)
        variants = _select(_load(args), args.variant)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    workers = args.workers or config.cli.workers
    reports = [build_report(v, config.retention, max_workers=workers) for v in variants]

    if args.json:
        print(json.dumps(
            {r.variant_id: [i.to_dict() for i in r.trigger_impacts] for r in reports},
            indent=2,
        ))
        return 0

    for report in reports:
        if not report.trigger_impacts:
            console.print(f"[dim]{report.variant_id}: no trigger above the noise floor[/dim]")
            continue
        table = Table(title=f"Trigger Impact - {report.variant_id}")
        table.add_column("#", justify="right")
        table.add_column("Trigger", style="cyan")
        table.add_column("Impact (pp)", justify="right")
        for rank, impact in enumerate(report.trigger_impacts, start=1):
            table.add_row(str(rank), impact.trigger, f"+{impact.impact:.{config.cli.decimals}f}")
        console.print(table)

    return 0


def cmd_curve(args: argparse.Namespace) -> int:
    """Print the per-second stay probability curve."""
    try:
        config = _load_config(args)
        variants = _select(_load(args), args.variant)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    threshold = config.retention.weak_threshold
    for variant in variants:
        report = build_report(variant, config.retention)
        curve = report.retention.predicted_P_stay

        if args.json:
            print(json.dumps({"variant_id": variant.variant_id, "predicted_P_stay": list(curve)}))
            continue

        table = Table(title=f"Retention Curve - {variant.variant_id}")
        table.add_column("Second", justify="right")
        table.add_column("P(stay)", justify="right")
        table.add_column("")
        for t, p in enumerate(curve):
            bar = "#" * round(p * 20)
            style = "red" if p < threshold else "green"
            table.add_row(str(t), f"{p * 100:.1f}%", f"[{style}]{bar}[/{style}]")
        console.print(table)

    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Export variants as markdown files."""
    try:
        config = _load_config(args)
        variants = _load(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    reports = None
    if not args.no_metrics:
        reports = [build_report(v, config.retention) for v in variants]

    paths = export_variants(variants, args.output, reports)
    for path in paths:
        print(f"Wrote {path}")
    return 0


def cmd_apply(args: argparse.Namespace) -> int:
    """Apply a suggested trigger to an event and save the edited scripts."""
    if not Trigger.is_known(args.trigger):
        valid = ", ".join(t.value for t in Trigger)
        print(f"Error: Unknown trigger '{args.trigger}'. Valid triggers: {valid}", file=sys.stderr)
        return 1

    try:
        config = _load_config(args)
        variants = load_variants(args.source)
        _select(variants, args.variant)
        edited = [
            apply_trigger(v, args.event, args.trigger) if v.variant_id == args.variant else v
            for v in variants
        ]
    except (FileNotFoundError, ValueError, IndexError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = Path(args.output) if args.output else Path(args.source)
    save_variants(edited, output)

    before = next(v for v in variants if v.variant_id == args.variant)
    after = next(v for v in edited if v.variant_id == args.variant)
    rate_before = build_report(before, config.retention).retention.predicted_finish_rate
    rate_after = build_report(after, config.retention).retention.predicted_finish_rate

    print(f"Applied '{args.trigger}' to event {args.event} of {args.variant}")
    print(f"Finish rate: {rate_before * 100:.2f}% -> {rate_after * 100:.2f}%")
    print(f"Saved to {output}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Report ingestion issues; exit 1 when any error is found."""
    try:
        variants = load_variants(args.source)
    except (FileNotFoundError, ScriptParseError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    issues = [issue for v in variants for issue in validate_variant(v)]
    if not issues:
        print(f"OK: {len(variants)} variant(s), no issues")
        return 0

    for issue in issues:
        print(f"{issue.severity.upper()}: {issue.variant_id}: {issue.message}")

    return 1 if has_errors(issues) else 0


def _add_source_args(parser: argparse.ArgumentParser, allow_sample: bool = True) -> None:
    parser.add_argument("source", nargs="?", help="Path to script variants JSON")
    if allow_sample:
        parser.add_argument(
            "--sample",
            action="store_true",
            help="Use the bundled sample variants instead of a file",
        )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject scripts with malformed timelines",
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Short-form script retention analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config YAML (default: $SHORTSIM_CONFIG or ./config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Finish rate and replay score")
    _add_source_args(analyze_parser)
    analyze_parser.add_argument("--variant", help="Only this variant ID")
    analyze_parser.add_argument("--json", action="store_true", help="Output JSON")
    analyze_parser.set_defaults(func=cmd_analyze)

    # impact command
    impact_parser = subparsers.add_parser("impact", help="Rank trigger impact")
    _add_source_args(impact_parser)
    impact_parser.add_argument("--variant", help="Only this variant ID")
    impact_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads for counterfactual runs (default: from config)",
    )
    impact_parser.add_argument("--json", action="store_true", help="Output JSON")
    impact_parser.set_defaults(func=cmd_impact)

    # curve command
    curve_parser = subparsers.add_parser("curve", help="Per-second retention curve")
    _add_source_args(curve_parser)
    curve_parser.add_argument("--variant", help="Only this variant ID")
    curve_parser.add_argument("--json", action="store_true", help="Output JSON")
    curve_parser.set_defaults(func=cmd_curve)

    # export command
    export_parser = subparsers.add_parser("export", help="Export variants as markdown")
    _add_source_args(export_parser)
    export_parser.add_argument(
        "--output", "-o",
        default="export",
        help="Output directory (default: export)",
    )
    export_parser.add_argument(
        "--no-metrics",
        action="store_true",
        help="Leave predicted metrics out of the export",
    )
    export_parser.set_defaults(func=cmd_export)

    # apply command
    apply_parser = subparsers.add_parser("apply", help="Apply a trigger to an event")
    apply_parser.add_argument("source", help="Path to script variants JSON")
    apply_parser.add_argument("--variant", required=True, help="Variant ID")
    apply_parser.add_argument("--event", type=int, required=True, help="Event index (0-based)")
    apply_parser.add_argument("--trigger", required=True, help="Trigger ID, e.g. jump_cut")
    apply_parser.add_argument(
        "--output", "-o",
        help="Where to write the edited JSON (default: overwrite source)",
    )
    apply_parser.set_defaults(func=cmd_apply)

    # validate command
    validate_parser = subparsers.add_parser("validate", help="Check script JSON")
    validate_parser.add_argument("source", help="Path to script variants JSON")
    validate_parser.set_defaults(func=cmd_validate)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
