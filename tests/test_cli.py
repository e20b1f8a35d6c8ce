import json
from pathlib import Path

import pytest
from apps.cli.run import main


def test_cli_run_writes_outputs(tmp_path: Path, capsys):
    bl = tmp_path / "bl"
    out = tmp_path / "out"
    code = main([
        "--strategies", "stupid", "basic", "--baseline", "basic",
        "--sample", "3", "--seed", "11", "--progress", "off",
        "--save", "basic=basic_ref", "--baseline-dir", str(bl),
        "--outdir", str(out), "--histogram",
    ])
    assert code == 0
    printed = capsys.readouterr().out
    assert "| OK" in printed
    assert "Used as baseline and saved as basic_ref" in printed
    assert (bl / "basic_ref.json").is_file()

    csvs = list(out.glob("run_*.csv"))
    manifests = list(out.glob("run_*_manifest.json"))
    assert len(csvs) == 1 and len(manifests) == 1
    manifest = json.loads(manifests[0].read_text())
    assert manifest["wordlists"]["passed"] is True
    assert [s["strategy_name"] for s in manifest["summaries"]] == ["Stupid v0.10", "Basic v0.1.1"]
    # 3 trials per strategy plus header
    assert len(csvs[0].read_text().strip().splitlines()) == 7


def test_cli_missing_saved_baseline(tmp_path: Path, capsys):
    code = main([
        "--strategies", "stupid", "--sample", "2", "--progress", "off",
        "--load-baseline", "ghost", "--baseline-dir", str(tmp_path),
    ])
    assert code == 1
    assert "ghost" in capsys.readouterr().err


def test_cli_unknown_strategy():
    with pytest.raises(SystemExit):
        main(["--strategies", "nope"])


def test_cli_all_with_exclude(tmp_path: Path, capsys):
    code = main([
        "--strategies", "ALL", "--exclude", "basic", "common", "random_consistent",
        "--sample", "2", "--progress", "off", "--debug",
    ])
    assert code == 0
    assert "Stupid v0.10" in capsys.readouterr().out
