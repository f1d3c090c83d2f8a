from __future__ import annotations

from collections.abc import Callable
from functools import partial

from compression_eval.compressors.base import Compressor
from compression_eval.compressors.leveled import BrotliCompressor, ZstdCompressor
from compression_eval.compressors.native import make_native
from compression_eval.methods import Method, get_method

COMPRESSOR_REGISTRY: dict[Method, Callable[[int | None], Compressor]] = {
    Method.ZSTD: ZstdCompressor.from_level,
    Method.BROTLI: BrotliCompressor.from_level,
    Method.LZMA: partial(make_native, Method.LZMA),
    Method.LZFSE: partial(make_native, Method.LZFSE),
    Method.ZLIB: partial(make_native, Method.ZLIB),
}


def make_compressor(method: Method | str, level: int | None = None) -> Compressor:
    """
    Build the adapter for `method`.

    Raises ConfigurationError for a level the method does not accept and
    CompressorUnavailableError when the backing library is missing.
    """
    m = get_method(method)
    try:
        factory = COMPRESSOR_REGISTRY[m]
    except KeyError as e:
        available = ", ".join(sorted(k.value for k in COMPRESSOR_REGISTRY))
        raise ValueError(f"No compressor registered for '{m}'. Available: {available}") from e
    return factory(level)
