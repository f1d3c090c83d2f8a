from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from compression_eval import cli
from compression_eval.benchmark import runner as runner_mod
from compression_eval.benchmark.harness import HarnessSettings

QUICK = HarnessSettings(
    calibration_max_iterations=10,
    calibration_budget_ns=1_000_000,
    target_duration_ns=2_000_000,
    fast_min_iterations=3,
    max_iterations=20,
)


@pytest.fixture
def quick_harness(monkeypatch: pytest.MonkeyPatch) -> None:
    original_init = runner_mod.CorpusRunner.__init__

    def init(self, corpus, **kwargs):
        kwargs.setdefault("settings", QUICK)
        original_init(self, corpus, **kwargs)

    monkeypatch.setattr(runner_mod.CorpusRunner, "__init__", init)


def test_methods_lists_all(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["methods"]) == 0
    out = capsys.readouterr().out
    for name in ("zstd", "Brotli", "LZMA", "LZFSE", "zlib"):
        assert name in out
    assert "-10..22" in out


def test_run_synthetic(quick_harness: None, capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli.main(["run", "--method", "zstd", "--level", "1", "--priority", "utility", "--synthetic"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Brew 1" in out
    assert "Average" in out


def test_run_corpus_dir(quick_harness: None, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "Brew 2.csv").write_bytes(b"1692000000000,0\n100,200\n" * 50)
    rc = cli.main(["run", "--method", "zlib", "--corpus-dir", str(tmp_path)])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Brew 2" in out
    assert "Brew 1" not in out


def test_run_without_samples(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli.main(["run", "--corpus-dir", str(tmp_path / "missing")])
    assert rc == 1
    assert "No samples loaded" in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv",
    [
        ["run", "--method", "zstd", "--level", "40", "--synthetic"],
        ["run", "--method", "zlib", "--level", "3", "--synthetic"],
        ["run", "--method", "lz4", "--synthetic"],
        ["run", "--priority", "realtime", "--synthetic"],
    ],
)
def test_run_rejects_bad_config(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(argv) == 2
    assert "Error:" in capsys.readouterr().out


def test_compare_builtin(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["compare"]) == 0
    out = capsys.readouterr().out
    assert "Reference averages:" in out
    assert "zstd - macOS" in out
    assert "Brotli - iOS" in out
    assert "LZMA - " not in out


def test_compare_custom_table(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    table = tmp_path / "runs.tsv"
    table.write_text(
        "macOS\tzlib\t\t20,000\t20,000\t20,000\n"
        "macOS\tzstd\t1\t10,000\t10,000\t10,000\n"
        "macOS\tzstd\t2\t30,000\t30,000\t30,000\n",
        encoding="utf-8",
    )
    assert cli.main(["compare", "--table", str(table)]) == 0
    out = capsys.readouterr().out
    assert "20.000 ms" in out
    assert "level   1" in out
    assert "level   2" in out


def test_observations_lists_table(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["observations"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 76
    assert lines[0].startswith("Brotli - iOS")


def test_corpus_generate(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["corpus", "generate", str(tmp_path), "--points", "10"]) == 0
    assert sorted(p.name for p in tmp_path.iterdir()) == ["Brew 1.csv", "Brew 2.csv", "Brew 3.csv"]
    assert "Wrote:" in capsys.readouterr().out


def test_run_reports_compressor_failure(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def broken_measure(*_args, **_kwargs):
        raise RuntimeError("frame too large")

    monkeypatch.setattr(runner_mod, "measure", broken_measure)
    rc = cli.main(["run", "--method", "zstd", "--synthetic"])
    assert rc == 1
    assert "Error: frame too large" in capsys.readouterr().out


@pytest.mark.parametrize("command", ["compare", "observations"])
def test_missing_table_is_reported(command: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli.main([command, "--table", str(tmp_path / "nope.tsv")])
    assert rc == 2
    assert "Error:" in capsys.readouterr().out


@pytest.mark.parametrize("command", ["compare", "observations"])
def test_undecodable_table_is_reported(command: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    table = tmp_path / "runs.tsv"
    table.write_bytes(b"macOS\tzlib\t\t\xff\xfe\t1\t2\n")
    rc = cli.main([command, "--table", str(table)])
    assert rc == 2
    assert "Error:" in capsys.readouterr().out


def test_corpus_generate_rejects_zero_points(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli.main(["corpus", "generate", str(tmp_path / "out"), "--points", "0"])
    assert rc == 2
    assert "Error: points must be >= 1" in capsys.readouterr().out


def test_module_entry_point_version() -> None:
    cp = subprocess.run(
        [sys.executable, "-m", "compression_eval", "--version"],
        capture_output=True,
        text=True,
    )
    assert cp.returncode == 0
    assert cp.stdout.startswith("compression-eval")
