"""Sanity checks for producer-supplied script variants.

The retention engine tolerates any input, so these checks live at the
ingestion boundary. Errors describe timelines the engine would silently
misread; warnings describe data it would silently ignore.
"""

from ..models import ScriptVariant, Trigger, ValidationIssue

ERROR = "error"
WARNING = "warning"


class ScriptValidationError(ValueError):
    """Raised by strict ingestion when a variant fails validation."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        errors = [i for i in issues if i.severity == ERROR]
        summary = "; ".join(i.message for i in errors[:3])
        if len(errors) > 3:
            summary += f" (+{len(errors) - 3} more)"
        super().__init__(f"{len(errors)} validation error(s): {summary}")


def validate_variant(variant: ScriptVariant) -> list[ValidationIssue]:
    """Collect every issue found in a variant."""
    issues: list[ValidationIssue] = []
    vid = variant.variant_id

    def add(severity: str, message: str, index: int | None = None) -> None:
        issues.append(ValidationIssue(severity, message, variant_id=vid, event_index=index))

    if variant.duration_s < 0:
        add(ERROR, f"duration_s must be >= 0, got {variant.duration_s}")

    for index, event in enumerate(variant.timeline):
        where = f"event {index} [{event.sec_start}, {event.sec_end})"
        if event.sec_start < 0:
            add(ERROR, f"{where}: sec_start must be >= 0", index)
        if event.sec_end <= event.sec_start:
            add(ERROR, f"{where}: sec_end must be greater than sec_start", index)
        if event.sec_end > variant.duration_s >= 0:
            add(WARNING, f"{where}: extends past duration {variant.duration_s}s", index)
        for trigger in event.triggers:
            if not Trigger.is_known(trigger):
                add(WARNING, f"{where}: unknown trigger '{trigger}' has no effect", index)
        for trigger in event.suggested_triggers:
            if not Trigger.is_known(trigger):
                add(WARNING, f"{where}: unknown suggested trigger '{trigger}'", index)

    return issues


def has_errors(issues: list[ValidationIssue]) -> bool:
    return any(issue.severity == ERROR for issue in issues)
