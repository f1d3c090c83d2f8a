from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_data_dir

_ENV_CORPUS_DIR = "COMPRESSION_EVAL_CORPUS_DIR"


def get_corpus_root() -> Path:
    """
    Return the directory holding the sample recordings.

    Override with env var:
      COMPRESSION_EVAL_CORPUS_DIR=/path/to/corpus

    Default:
      platformdirs.user_data_dir("compression-eval") / "corpus"
    """
    override = os.environ.get(_ENV_CORPUS_DIR)
    if override:
        return Path(override).expanduser().resolve()

    return Path(user_data_dir("compression-eval")) / "corpus"


# Tried in this order; "" matches a file named exactly like the sample.
SAMPLE_EXTS: tuple[str, ...] = (".csv", ".txt", ".bin", "")


def sample_path(root: Path, name: str) -> Path | None:
    name = name.strip()
    if not name:
        raise ValueError("sample name must be non-empty")

    for ext in SAMPLE_EXTS:
        p = root / f"{name}{ext}"
        if p.is_file():
            return p
    return None
