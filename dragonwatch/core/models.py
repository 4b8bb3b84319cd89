from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dragonwatch.core.classify import derive_result_from_hash, parity_of, size_of

BlockType = str  # 'ODD' | 'EVEN'
SizeType = str  # 'BIG' | 'SMALL'

DEFAULT_THRESHOLD = 3
DEFAULT_ROWS = 6
HOT_STREAK = 5


class Axis(str, Enum):
    PARITY = "parity"
    SIZE = "size"

    @property
    def key(self) -> str:
        # attribute of Outcome read for this axis
        return "type" if self is Axis.PARITY else "size_type"


@dataclass(frozen=True)
class Outcome:
    height: int
    hash: str
    result_value: int
    type: BlockType
    size_type: SizeType
    timestamp: str = ""

    def label(self, axis: Axis) -> str:
        return getattr(self, axis.key)

    @classmethod
    def from_hash(cls, height: int, hash: str, timestamp: str = "") -> "Outcome":
        value = derive_result_from_hash(hash)
        return cls(height=height, hash=hash, result_value=value,
                   type=parity_of(value), size_type=size_of(value), timestamp=timestamp)


@dataclass(frozen=True)
class IntervalRule:
    id: str
    label: str
    value: int = 1
    start_block: int = 0  # 0 = align to absolute height
    trend_rows: int = DEFAULT_ROWS
    bead_rows: int = DEFAULT_ROWS
    dragon_threshold: Optional[int] = None

    @property
    def threshold(self) -> int:
        return self.dragon_threshold or DEFAULT_THRESHOLD

    @property
    def rows(self) -> int:
        return self.bead_rows or DEFAULT_ROWS


@dataclass(frozen=True)
class GridCell:
    type: Optional[str] = None
    value: Optional[int] = None

    @classmethod
    def empty(cls) -> "GridCell":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.type is None


Grid = list[list[GridCell]]


@dataclass(frozen=True)
class DragonInfo:
    rule_name: str
    type: str  # 'parity' | 'size'
    value: str
    count: int
    color: str
    threshold: int
    next_height: int
    row_id: Optional[int] = None  # 1-based, row dragons only

    @property
    def is_hot(self) -> bool:
        return self.count >= HOT_STREAK
