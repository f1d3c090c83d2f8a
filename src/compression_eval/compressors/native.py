from __future__ import annotations

import importlib
import lzma
import zlib
from dataclasses import dataclass, field
from types import ModuleType

from compression_eval.errors import CompressorUnavailableError
from compression_eval.methods import METHOD_SPECS, Method

# Platform encoders expose no level; these are the presets they use.
LZMA_PRESET = 6
ZLIB_LEVEL = 5


@dataclass(frozen=True)
class LzmaCompressor:
    preset: int = LZMA_PRESET
    method: Method = field(default=Method.LZMA, init=False)

    def compress(self, data: bytes) -> bytes:
        return lzma.compress(data, format=lzma.FORMAT_XZ, preset=self.preset)


@dataclass(frozen=True)
class ZlibCompressor:
    """Raw DEFLATE stream (no zlib header or checksum)."""

    level: int = ZLIB_LEVEL
    method: Method = field(default=Method.ZLIB, init=False)

    def compress(self, data: bytes) -> bytes:
        c = zlib.compressobj(self.level, zlib.DEFLATED, -zlib.MAX_WBITS)
        return c.compress(data) + c.flush()


def _load_liblzfse() -> ModuleType:
    try:
        return importlib.import_module("liblzfse")
    except ImportError as e:
        raise CompressorUnavailableError(
            "LZFSE requires the optional 'pyliblzfse' package "
            "(pip install 'compression-eval[lzfse]')"
        ) from e


@dataclass(frozen=True)
class LzfseCompressor:
    method: Method = field(default=Method.LZFSE, init=False)
    _lib: ModuleType = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lib", _load_liblzfse())

    def compress(self, data: bytes) -> bytes:
        return self._lib.compress(data)


def make_native(method: Method, level: int | None) -> LzmaCompressor | ZlibCompressor | LzfseCompressor:
    METHOD_SPECS[method].check_level(level)
    if method is Method.LZMA:
        return LzmaCompressor()
    if method is Method.ZLIB:
        return ZlibCompressor()
    if method is Method.LZFSE:
        return LzfseCompressor()
    raise ValueError(f"Not a platform-native method: {method}")
