from __future__ import annotations

from typing import Protocol

from compression_eval.methods import Method


class Compressor(Protocol):
    method: Method

    def compress(self, data: bytes) -> bytes: ...
