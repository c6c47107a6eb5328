"""Core data types describing program derived addresses and their seeds."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class SeedType(str, Enum):
    """The kind of value a seed holds."""

    STRING = "string"
    PUBKEY = "pubkey"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    BYTES = "bytes"


_INTEGER_BITS = {
    SeedType.U8: 8,
    SeedType.U16: 16,
    SeedType.U32: 32,
    SeedType.U64: 64,
}

SeedPayload = Union[str, int, bytes]


@dataclass(frozen=True)
class SeedValue:
    """A single seed used when deriving an address."""

    kind: SeedType
    value: SeedPayload

    def __post_init__(self) -> None:
        kind = SeedType(self.kind)
        object.__setattr__(self, "kind", kind)
        value = self.value

        if kind in (SeedType.STRING, SeedType.PUBKEY):
            if not isinstance(value, str):
                raise TypeError(f"{kind.value} seed requires a str, got {type(value).__name__}")
        elif kind is SeedType.BYTES:
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise TypeError(f"bytes seed requires bytes, got {type(value).__name__}")
            object.__setattr__(self, "value", bytes(value))
        else:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{kind.value} seed requires an int, got {type(value).__name__}")
            bits = _INTEGER_BITS[kind]
            if not 0 <= value < (1 << bits):
                raise ValueError(f"{value} does not fit in {kind.value}")

    def seed_type(self) -> str:
        """Name of the seed's kind, as used in pattern signatures."""
        return self.kind.value


@dataclass
class SeedTemplate:
    """Description of one seed position in a known pattern."""

    name: str
    seed_type: str
    description: Optional[str] = None
    is_variable: bool = True


@dataclass
class PdaInfo:
    """A program derived address together with the seeds that produce it."""

    address: str
    program_id: str
    seeds: list[SeedValue]
    bump: int
    first_seen_slot: Optional[int] = None
    first_seen_transaction: Optional[str] = None

    def __post_init__(self) -> None:
        if not 0 <= self.bump <= 255:
            raise ValueError(f"bump {self.bump} is outside 0..255")
        self.seeds = list(self.seeds)


@dataclass
class PdaPattern:
    """A named seed layout known to be used by a program."""

    program_id: str
    pattern_name: str
    seeds_template: list[SeedTemplate]
    description: Optional[str] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)