from .loader import SAMPLE_NAMES, load_corpus
from .paths import get_corpus_root
from .synthetic import synthetic_corpus, write_synthetic_corpus

__all__ = [
    "SAMPLE_NAMES",
    "load_corpus",
    "get_corpus_root",
    "synthetic_corpus",
    "write_synthetic_corpus",
]
