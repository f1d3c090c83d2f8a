from __future__ import annotations

from dataclasses import dataclass, field

import brotli
import zstandard

from compression_eval.errors import ConfigurationError
from compression_eval.methods import METHOD_SPECS, Method


def _resolve_level(method: Method, level: int | None) -> int:
    spec = METHOD_SPECS[method]
    spec.check_level(level)
    if level is not None:
        return level
    if spec.default_level is None:
        raise ConfigurationError(f"Method '{method.value}' has no default level")
    return spec.default_level


@dataclass(frozen=True)
class ZstdCompressor:
    level: int
    method: Method = field(default=Method.ZSTD, init=False)
    _cctx: zstandard.ZstdCompressor = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Context is reused across calls; one-shot compress() resets it.
        object.__setattr__(self, "_cctx", zstandard.ZstdCompressor(level=self.level))

    @classmethod
    def from_level(cls, level: int | None) -> ZstdCompressor:
        return cls(level=_resolve_level(Method.ZSTD, level))

    def compress(self, data: bytes) -> bytes:
        return self._cctx.compress(data)


@dataclass(frozen=True)
class BrotliCompressor:
    quality: int
    method: Method = field(default=Method.BROTLI, init=False)

    @classmethod
    def from_level(cls, level: int | None) -> BrotliCompressor:
        return cls(quality=_resolve_level(Method.BROTLI, level))

    def compress(self, data: bytes) -> bytes:
        return brotli.compress(data, quality=self.quality)
