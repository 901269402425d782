"""Parse script variants produced by the generative collaborator."""

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from ..models import ScriptVariant
from .validator import ScriptValidationError, has_errors, validate_variant

console = Console(stderr=True)


class ScriptParseError(ValueError):
    """Producer output that cannot be turned into script variants."""

    pass


def _variant_payloads(data: Any) -> list[dict]:
    """Accept a list of variants, a {"variants": [...]} object or one variant."""
    if isinstance(data, list):
        payloads = data
    elif isinstance(data, dict) and "variants" in data:
        payloads = data["variants"]
    elif isinstance(data, dict):
        payloads = [data]
    else:
        raise ScriptParseError(f"Expected a JSON object or array, got {type(data).__name__}")

    for index, payload in enumerate(payloads):
        if not isinstance(payload, dict):
            raise ScriptParseError(f"Variant {index} is not an object")
    return payloads


def parse_variants(data: Any, strict: bool = False, verbose: bool = False) -> list[ScriptVariant]:
    """Build ScriptVariants from decoded producer JSON.

    Args:
        data: Decoded JSON payload.
        strict: Raise ScriptValidationError when any variant has errors.
        verbose: Print validation issues to stderr.

    Returns:
        Parsed variants in payload order. Variants without an id are
        numbered ``v1``, ``v2``, ...

    Raises:
        ScriptParseError: If required keys are missing or mistyped.
        ScriptValidationError: In strict mode, if validation finds errors.
    """
    variants = []
    for index, payload in enumerate(_variant_payloads(data)):
        if not payload.get("variant_id"):
            payload = {**payload, "variant_id": f"v{index + 1}"}
        try:
            variants.append(ScriptVariant.from_dict(payload))
        except KeyError as e:
            raise ScriptParseError(f"Variant {index}: missing required key {e}") from e
        except (TypeError, ValueError) as e:
            raise ScriptParseError(f"Variant {index}: {e}") from e

    issues = [issue for variant in variants for issue in validate_variant(variant)]
    if verbose:
        for issue in issues:
            color = "red" if issue.severity == "error" else "yellow"
            console.print(
                f"[{color}]{issue.severity}[/{color}] "
                f"{escape(issue.variant_id)}: {escape(issue.message)}"
            )
    if strict and has_errors(issues):
        raise ScriptValidationError(issues)

    return variants


def load_variants(path: Path | str, strict: bool = False, verbose: bool = False) -> list[ScriptVariant]:
    """Load script variants from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Script file not found: {path}")

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ScriptParseError(f"Invalid JSON in {path}: {e}") from e

    return parse_variants(data, strict=strict, verbose=verbose)


def save_variants(variants: list[ScriptVariant], path: Path | str) -> Path:
    """Write variants back out in the producer's JSON layout."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps([v.to_dict() for v in variants], indent=2))
    return path
