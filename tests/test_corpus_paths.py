from __future__ import annotations

from pathlib import Path

import pytest

from compression_eval.corpus.paths import get_corpus_root, sample_path


def test_get_corpus_root_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("COMPRESSION_EVAL_CORPUS_DIR", str(tmp_path))
    assert get_corpus_root() == tmp_path.resolve()


def test_get_corpus_root_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COMPRESSION_EVAL_CORPUS_DIR", raising=False)
    root = get_corpus_root()
    assert root.name == "corpus"
    assert "compression-eval" in str(root)


def test_sample_path_extension_order(tmp_path: Path) -> None:
    (tmp_path / "Brew 1.bin").write_bytes(b"b")
    (tmp_path / "Brew 1.csv").write_bytes(b"c")
    assert sample_path(tmp_path, "Brew 1") == tmp_path / "Brew 1.csv"


def test_sample_path_missing(tmp_path: Path) -> None:
    assert sample_path(tmp_path, "Brew 9") is None


@pytest.mark.parametrize("name", ["", "   "])
def test_sample_path_rejects_empty(tmp_path: Path, name: str) -> None:
    with pytest.raises(ValueError):
        sample_path(tmp_path, name)
