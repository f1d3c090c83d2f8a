from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from compression_eval.corpus.paths import get_corpus_root, sample_path
from compression_eval.errors import CorpusError

logger = logging.getLogger(__name__)

SAMPLE_NAMES: tuple[str, ...] = ("Brew 1", "Brew 2", "Brew 3")


def load_corpus(
    root: str | Path | None = None,
    *,
    names: Iterable[str] = SAMPLE_NAMES,
) -> Mapping[str, bytes]:
    """
    Load the named samples from `root` (default: get_corpus_root()).

    Missing or empty samples are left out of the mapping. A missing root
    yields an empty mapping.
    """
    root = Path(root) if root is not None else get_corpus_root()
    wanted = tuple(names)

    if not root.exists():
        logger.warning("Corpus directory not found: %s", root)
        return MappingProxyType({})
    if not root.is_dir():
        raise CorpusError(f"Corpus path is not a directory: {root}")

    out: dict[str, bytes] = {}
    for name in wanted:
        p = sample_path(root, name)
        if p is None:
            logger.debug("Sample not available: %s", name)
            continue

        data = p.read_bytes()
        if not data:
            logger.warning("Skipping empty sample: %s", p)
            continue
        out[name] = data

    logger.info("Loaded %d/%d samples from %s", len(out), len(wanted), root)
    return MappingProxyType(out)
