"""Tests for script ingestion and boundary validation."""

import json

import pytest

from shortsim.ingestion import (
    ScriptParseError,
    ScriptValidationError,
    has_errors,
    load_variants,
    parse_variants,
    save_variants,
    validate_variant,
)
from shortsim.models import ScriptVariant, TimelineEvent
from shortsim.samples import SAMPLE_VARIANTS


def variant_payload(*events, duration=5, variant_id="bad"):
    return {"variant_id": variant_id, "duration_s": duration, "timeline": list(events)}


class TestParseVariants:
    def test_list_payload(self):
        variants = parse_variants(SAMPLE_VARIANTS)
        assert [v.variant_id for v in variants] == ["v1", "v2"]

    def test_wrapped_payload(self):
        variants = parse_variants({"variants": SAMPLE_VARIANTS})
        assert len(variants) == 2

    def test_single_variant_payload(self):
        variants = parse_variants(SAMPLE_VARIANTS[0])
        assert len(variants) == 1
        assert variants[0].duration_s == 20

    def test_missing_ids_are_numbered(self):
        payload = [
            {"duration_s": 3, "timeline": []},
            {"duration_s": 4, "timeline": []},
        ]
        assert [v.variant_id for v in parse_variants(payload)] == ["v1", "v2"]

    def test_missing_duration(self):
        with pytest.raises(ScriptParseError, match="duration_s"):
            parse_variants([{"variant_id": "x", "timeline": []}])

    def test_missing_event_bounds(self):
        with pytest.raises(ScriptParseError, match="sec_end"):
            parse_variants(variant_payload({"sec_start": 0}))

    def test_mistyped_value(self):
        with pytest.raises(ScriptParseError):
            parse_variants(variant_payload({"sec_start": None, "sec_end": 2}))

    def test_not_an_object(self):
        with pytest.raises(ScriptParseError):
            parse_variants("just a string")
        with pytest.raises(ScriptParseError, match="Variant 1"):
            parse_variants([SAMPLE_VARIANTS[0], 42])

    def test_string_source_entry(self):
        payload = {"duration_s": 3, "timeline": [], "sources": ["http://x"]}
        with pytest.raises(ScriptParseError, match=r"sources\[0\] must be an object"):
            parse_variants(payload)

    def test_string_loopability(self):
        payload = {"duration_s": 3, "timeline": [], "loopability_analysis": "loops well"}
        with pytest.raises(ScriptParseError, match="loopability_analysis"):
            parse_variants(payload)

    def test_string_timeline_and_events(self):
        with pytest.raises(ScriptParseError, match="timeline must be a list"):
            parse_variants({"duration_s": 3, "timeline": "0-3"})
        with pytest.raises(ScriptParseError, match=r"timeline\[0\]"):
            parse_variants(variant_payload("0-3"))

    def test_string_triggers_not_split(self):
        payload = variant_payload({"sec_start": 0, "sec_end": 2, "triggers": "hook"})
        with pytest.raises(ScriptParseError, match="triggers must be a list"):
            parse_variants(payload)

    def test_weak_flag_string(self):
        payload = variant_payload({"sec_start": 0, "sec_end": 2, "isWeak": "false"})
        assert parse_variants(payload)[0].timeline[0].is_weak is False

    def test_lenient_keeps_malformed_timeline(self):
        payload = variant_payload({"sec_start": 3, "sec_end": 1, "triggers": ["hook"]})
        variants = parse_variants(payload)
        assert variants[0].timeline[0].sec_end == 1

    def test_strict_rejects_malformed_timeline(self):
        payload = variant_payload({"sec_start": 3, "sec_end": 1, "triggers": ["hook"]})

        with pytest.raises(ScriptValidationError) as exc_info:
            parse_variants(payload, strict=True)

        assert len(exc_info.value.issues) == 1
        assert "sec_end must be greater" in str(exc_info.value)

    def test_strict_allows_warnings(self):
        payload = variant_payload({"sec_start": 0, "sec_end": 2, "triggers": ["sparkle"]})
        variants = parse_variants(payload, strict=True)
        assert variants[0].timeline[0].triggers == ("sparkle",)

    def test_verbose_reports_issues(self, capsys):
        payload = variant_payload({"sec_start": 0, "sec_end": 2, "triggers": ["sparkle"]})
        parse_variants(payload, verbose=True)

        captured = capsys.readouterr()
        assert "sparkle" in captured.err


class TestValidateVariant:
    def test_samples_are_clean(self):
        for data in SAMPLE_VARIANTS:
            assert validate_variant(ScriptVariant.from_dict(data)) == []

    def test_inverted_and_negative_intervals(self):
        variant = ScriptVariant(
            "x",
            5,
            timeline=(TimelineEvent(2, 2), TimelineEvent(-1, 1)),
        )
        issues = validate_variant(variant)

        assert [(i.severity, i.event_index) for i in issues] == [("error", 0), ("error", 1)]
        assert has_errors(issues)

    def test_negative_duration(self):
        issues = validate_variant(ScriptVariant("x", -1))
        assert has_errors(issues)
        assert "duration_s" in issues[0].message

    def test_event_past_duration_is_warning(self):
        variant = ScriptVariant("x", 3, timeline=(TimelineEvent(2, 6),))
        issues = validate_variant(variant)

        assert [i.severity for i in issues] == ["warning"]
        assert not has_errors(issues)

    def test_unknown_triggers_are_warnings(self):
        event = TimelineEvent(0, 1, triggers=("hook", "zap"), suggested_triggers=("boom",))
        issues = validate_variant(ScriptVariant("x", 1, timeline=(event,)))

        assert len(issues) == 2
        assert all(i.severity == "warning" for i in issues)
        assert issues[0].variant_id == "x"


class TestFiles:
    def test_load_variants(self, samples_file):
        variants = load_variants(samples_file)
        assert [v.duration_s for v in variants] == [20, 22]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_variants(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ScriptParseError, match="Invalid JSON"):
            load_variants(path)

    def test_save_then_load(self, tmp_path, sample_variants):
        path = save_variants(sample_variants, tmp_path / "out" / "scripts.json")

        assert json.loads(path.read_text())[0]["variant_id"] == "v1"
        assert load_variants(path) == sample_variants
