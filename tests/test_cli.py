"""Tests for the command line interface."""

import json

import pytest
import yaml

from shortsim.cli.main import main


@pytest.fixture(autouse=True)
def in_tmp_dir(tmp_path, monkeypatch):
    """Run each command from an empty directory so no config.yaml is picked up."""
    monkeypatch.chdir(tmp_path)


class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "analyze" in capsys.readouterr().out

    def test_unknown_command_exits(self):
        with pytest.raises(SystemExit):
            main(["frobnicate"])


class TestAnalyze:
    def test_sample_json(self, capsys):
        assert main(["analyze", "--sample", "--json"]) == 0

        reports = json.loads(capsys.readouterr().out)
        assert [r["variant_id"] for r in reports] == ["v1", "v2"]
        assert 0 < reports[0]["retention"]["predicted_finish_rate"] <= 1
        assert reports[0]["weak_seconds"] == [11, 12]

    def test_table_output(self, samples_file, capsys):
        assert main(["analyze", str(samples_file)]) == 0

        out = capsys.readouterr().out
        assert "Retention Analysis" in out
        assert "v1" in out
        assert "v2" in out

    def test_variant_filter(self, capsys):
        assert main(["analyze", "--sample", "--variant", "v2", "--json"]) == 0
        reports = json.loads(capsys.readouterr().out)
        assert [r["variant_id"] for r in reports] == ["v2"]

    def test_unknown_variant(self, capsys):
        assert main(["analyze", "--sample", "--variant", "v9"]) == 1
        assert "Variant 'v9' not found" in capsys.readouterr().err

    def test_missing_source(self, capsys):
        assert main(["analyze"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["analyze", str(tmp_path / "none.json")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_strict_rejects_bad_script(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([
            {"variant_id": "x", "duration_s": 3, "timeline": [{"sec_start": 2, "sec_end": 1}]}
        ]))

        assert main(["analyze", str(path), "--strict"]) == 1
        assert "validation error" in capsys.readouterr().err

    def test_config_file(self, tmp_path, capsys):
        config_path = tmp_path / "flat.yaml"
        config_path.write_text(yaml.dump({"retention": {"baseline": [0.5], "weights": {}}}))

        assert main(["--config", str(config_path), "analyze", "--sample", "--json"]) == 0

        reports = json.loads(capsys.readouterr().out)
        assert set(reports[0]["retention"]["predicted_P_stay"]) == {0.5}
        assert reports[0]["trigger_impacts"] == []

    def test_malformed_config_file(self, tmp_path, capsys):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("retention: [unclosed\n")

        assert main(["--config", str(config_path), "analyze", "--sample"]) == 1
        assert "Invalid YAML" in capsys.readouterr().err

    def test_mistyped_nested_field(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(
            [{"variant_id": "x", "duration_s": 3, "timeline": [], "sources": ["http://x"]}]
        ))

        assert main(["analyze", str(path)]) == 1
        assert "sources[0] must be an object" in capsys.readouterr().err


class TestImpact:
    def test_json(self, capsys):
        assert main(["impact", "--sample", "--variant", "v1", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        impacts = data["v1"]
        assert impacts
        values = [i["impact"] for i in impacts]
        assert values == sorted(values, reverse=True)

    def test_workers_give_same_result(self, capsys):
        main(["impact", "--sample", "--json"])
        sequential = capsys.readouterr().out
        main(["impact", "--sample", "--json", "--workers", "4"])
        parallel = capsys.readouterr().out

        assert sequential == parallel

    def test_table(self, capsys):
        assert main(["impact", "--sample", "--variant", "v2"]) == 0
        assert "Trigger Impact" in capsys.readouterr().out


class TestCurve:
    def test_json(self, capsys):
        assert main(["curve", "--sample", "--variant", "v1", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["variant_id"] == "v1"
        assert len(data["predicted_P_stay"]) == 20

    def test_table(self, capsys):
        assert main(["curve", "--sample", "--variant", "v2"]) == 0
        assert "Retention Curve" in capsys.readouterr().out

    def test_seconds_are_zero_based(self, tmp_path, capsys):
        config_path = tmp_path / "flat.yaml"
        config_path.write_text(yaml.dump({"retention": {"baseline": [0.25], "weights": {}}}))
        script = tmp_path / "one.json"
        script.write_text(json.dumps([{"variant_id": "x", "duration_s": 1, "timeline": []}]))

        assert main(["--config", str(config_path), "curve", str(script)]) == 0

        out = capsys.readouterr().out
        row = next(line for line in out.splitlines() if "25.0%" in line)
        assert row.split("│")[1].strip() == "0"
        assert "1" not in out


class TestExport:
    def test_writes_markdown(self, tmp_path, capsys):
        out_dir = tmp_path / "md"
        assert main(["export", "--sample", "-o", str(out_dir)]) == 0

        assert (out_dir / "variant-1.md").exists()
        assert "Predicted Finish Rate" in (out_dir / "variant-2.md").read_text()
        assert "Wrote" in capsys.readouterr().out

    def test_no_metrics(self, tmp_path):
        out_dir = tmp_path / "md"
        assert main(["export", "--sample", "-o", str(out_dir), "--no-metrics"]) == 0
        assert "Predicted Finish Rate" not in (out_dir / "variant-1.md").read_text()


class TestApply:
    def test_apply_suggested_trigger(self, samples_file, tmp_path, capsys):
        output = tmp_path / "edited.json"
        code = main([
            "apply", str(samples_file),
            "--variant", "v1", "--event", "2", "--trigger", "jump_cut",
            "-o", str(output),
        ])

        assert code == 0
        edited = json.loads(output.read_text())
        event = edited[0]["timeline"][2]
        assert event["triggers"] == ["jump_cut"]
        assert "jump_cut" not in event["suggested_triggers"]
        # source file untouched
        original = json.loads(samples_file.read_text())
        assert original[0]["timeline"][2]["triggers"] == []
        assert "Finish rate:" in capsys.readouterr().out

    def test_overwrites_source_by_default(self, samples_file):
        assert main([
            "apply", str(samples_file),
            "--variant", "v2", "--event", "0", "--trigger", "shock",
        ]) == 0

        data = json.loads(samples_file.read_text())
        assert data[1]["timeline"][0]["triggers"] == ["hook", "quick_zoom", "shock"]

    def test_unknown_trigger(self, samples_file, capsys):
        code = main([
            "apply", str(samples_file),
            "--variant", "v1", "--event", "0", "--trigger", "sparkles",
        ])
        assert code == 1
        assert "Unknown trigger" in capsys.readouterr().err

    def test_bad_event_index(self, samples_file, capsys):
        code = main([
            "apply", str(samples_file),
            "--variant", "v1", "--event", "99", "--trigger", "hook",
        ])
        assert code == 1
        assert "out of range" in capsys.readouterr().err


class TestValidate:
    def test_clean_file(self, samples_file, capsys):
        assert main(["validate", str(samples_file)]) == 0
        assert "no issues" in capsys.readouterr().out

    def test_errors(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([
            {"variant_id": "x", "duration_s": 3, "timeline": [
                {"sec_start": 2, "sec_end": 2, "triggers": ["zap"]},
            ]}
        ]))

        assert main(["validate", str(path)]) == 1
        out = capsys.readouterr().out
        assert "ERROR: x:" in out
        assert "WARNING: x:" in out

    def test_warnings_only(self, tmp_path):
        path = tmp_path / "warn.json"
        path.write_text(json.dumps([
            {"variant_id": "x", "duration_s": 3, "timeline": [
                {"sec_start": 0, "sec_end": 2, "triggers": ["zap"]},
            ]}
        ]))

        assert main(["validate", str(path)]) == 0

    def test_unparseable(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("[")
        assert main(["validate", str(path)]) == 1
        assert "Invalid JSON" in capsys.readouterr().err
