from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from compression_eval.errors import ConfigurationError, LevelOutOfRangeError


class Method(str, Enum):
    # Values are the names used in the historical timing table.
    ZSTD = "zstd"
    BROTLI = "Brotli"
    LZMA = "LZMA"
    LZFSE = "LZFSE"
    ZLIB = "zlib"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MethodSpec:
    method: Method
    levels: tuple[int, int] | None = None  # inclusive
    default_level: int | None = None
    platform_native: bool = False

    def contains(self, level: int) -> bool:
        if self.levels is None:
            return False
        low, high = self.levels
        return low <= level <= high

    def check_level(self, level: int | None) -> None:
        if level is None:
            return
        if self.levels is None:
            raise ConfigurationError(f"Method '{self.method}' does not accept a level (got {level})")
        if not self.contains(level):
            low, high = self.levels
            raise LevelOutOfRangeError(
                f"Level {level} out of range for '{self.method}' (allowed {low}..{high})"
            )


METHOD_SPECS: dict[Method, MethodSpec] = {
    # zstd accepts very negative levels; the useful fast range stops at -10.
    Method.ZSTD: MethodSpec(Method.ZSTD, levels=(-10, 22), default_level=3),
    Method.BROTLI: MethodSpec(Method.BROTLI, levels=(0, 11), default_level=11),
    Method.LZMA: MethodSpec(Method.LZMA, platform_native=True),
    Method.LZFSE: MethodSpec(Method.LZFSE, platform_native=True),
    Method.ZLIB: MethodSpec(Method.ZLIB, platform_native=True),
}

PLATFORM_NATIVE_METHODS: frozenset[Method] = frozenset(
    spec.method for spec in METHOD_SPECS.values() if spec.platform_native
)


def method_spec(method: Method) -> MethodSpec:
    return METHOD_SPECS[method]


def get_method(name: str | Method) -> Method:
    if isinstance(name, Method):
        return name

    wanted = name.strip().lower()
    for m in Method:
        if m.value.lower() == wanted or m.name.lower() == wanted:
            return m

    available = ", ".join(m.value for m in Method)
    raise ValueError(f"Unknown method '{name}'. Available: {available}")


class Priority(str, Enum):
    """Scheduling class a run is dispatched under."""

    USER_INTERACTIVE = "user-interactive"
    USER_INITIATED = "user-initiated"
    DEFAULT = "default"
    UTILITY = "utility"
    BACKGROUND = "background"

    @property
    def nice_increment(self) -> int:
        return _NICE_INCREMENTS[self]

    def __str__(self) -> str:
        return self.value


_NICE_INCREMENTS: dict[Priority, int] = {
    Priority.USER_INTERACTIVE: 0,
    Priority.USER_INITIATED: 0,
    Priority.DEFAULT: 0,
    Priority.UTILITY: 5,
    Priority.BACKGROUND: 10,
}


def get_priority(name: str | Priority) -> Priority:
    if isinstance(name, Priority):
        return name
    try:
        return Priority(name.strip().lower().replace("_", "-"))
    except ValueError as e:
        available = ", ".join(p.value for p in Priority)
        raise ValueError(f"Unknown priority '{name}'. Available: {available}") from e


@dataclass(frozen=True)
class BenchmarkConfig:
    """
    One benchmark configuration.

    Hashable and compared structurally, so it doubles as a cache key.
    """

    method: Method
    level: int | None = None
    priority: Priority = Priority.DEFAULT

    @property
    def spec(self) -> MethodSpec:
        return METHOD_SPECS[self.method]

    @property
    def effective_level(self) -> int | None:
        return self.level if self.level is not None else self.spec.default_level

    def validate(self) -> None:
        self.spec.check_level(self.level)

    def label(self) -> str:
        if self.level is None:
            return str(self.method)
        return f"{self.method} {self.level}"
