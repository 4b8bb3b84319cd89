from sqlmodel import SQLModel, Field
from datetime import datetime, timezone

from dragonwatch.core.models import Outcome, IntervalRule


class Block(SQLModel, table=True):
    height: int = Field(primary_key=True)
    hash: str = Field(index=True)
    result_value: int
    type: str  # 'ODD' | 'EVEN'
    size_type: str  # 'BIG' | 'SMALL'
    timestamp: str = ""
    fetched_ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
    source: str = "tron"

    @classmethod
    def from_outcome(cls, o: Outcome, source: str = "tron") -> "Block":
        return cls(height=o.height, hash=o.hash, result_value=o.result_value,
                   type=o.type, size_type=o.size_type, timestamp=o.timestamp, source=source)

    def to_outcome(self) -> Outcome:
        return Outcome(height=self.height, hash=self.hash, result_value=self.result_value,
                       type=self.type, size_type=self.size_type, timestamp=self.timestamp)


class Rule(SQLModel, table=True):
    id: str = Field(primary_key=True)
    label: str
    value: int = 1
    start_block: int = 0
    trend_rows: int = 6
    bead_rows: int = 6
    dragon_threshold: int | None = None
    position: int = Field(default=0, index=True)

    def to_rule(self) -> IntervalRule:
        return IntervalRule(id=self.id, label=self.label, value=self.value,
                            start_block=self.start_block, trend_rows=self.trend_rows,
                            bead_rows=self.bead_rows, dragon_threshold=self.dragon_threshold)
