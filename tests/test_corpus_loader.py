from __future__ import annotations

import logging
from pathlib import Path

import pytest

from compression_eval.corpus import SAMPLE_NAMES, load_corpus
from compression_eval.errors import CorpusError


def test_load_present_samples_only(tmp_path: Path) -> None:
    (tmp_path / "Brew 1.csv").write_bytes(b"1,2\n3,4")
    (tmp_path / "Brew 3").write_bytes(b"raw")
    (tmp_path / "unrelated.csv").write_bytes(b"x")

    corpus = load_corpus(tmp_path)
    assert dict(corpus) == {"Brew 1": b"1,2\n3,4", "Brew 3": b"raw"}


def test_empty_sample_skipped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "Brew 2.csv").write_bytes(b"")
    with caplog.at_level(logging.WARNING):
        corpus = load_corpus(tmp_path)
    assert "Brew 2" not in corpus
    assert "empty sample" in caplog.text


def test_missing_root_is_empty(tmp_path: Path) -> None:
    assert len(load_corpus(tmp_path / "nope")) == 0


def test_root_is_file_raises(tmp_path: Path) -> None:
    f = tmp_path / "corpus.csv"
    f.write_text("x", encoding="utf-8")
    with pytest.raises(CorpusError):
        load_corpus(f)


def test_env_root_used_by_default(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("COMPRESSION_EVAL_CORPUS_DIR", str(tmp_path))
    for name in SAMPLE_NAMES:
        (tmp_path / f"{name}.csv").write_bytes(name.encode())
    assert sorted(load_corpus()) == list(SAMPLE_NAMES)


def test_custom_names_generator(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_bytes(b"a")
    corpus = load_corpus(tmp_path, names=(n for n in ["a", "b"]))
    assert dict(corpus) == {"a": b"a"}
