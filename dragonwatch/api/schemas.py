from pydantic import BaseModel, Field
from typing import Optional


class BlockIn(BaseModel):
    height: int = Field(ge=0)
    hash: str
    timestamp: str = ""


class BlockOut(BaseModel):
    height: int
    hash: str
    result_value: int
    type: str
    size_type: str
    timestamp: str


class RuleIn(BaseModel):
    label: str
    value: int = Field(default=1, ge=1)
    start_block: int = Field(default=0, ge=0)
    trend_rows: int = Field(default=6, ge=1)
    bead_rows: int = Field(default=6, ge=1)
    dragon_threshold: Optional[int] = Field(default=None, ge=0)


class RuleOut(RuleIn):
    id: str


class DragonOut(BaseModel):
    rule_name: str
    type: str
    value: str
    count: int
    color: str
    threshold: int
    next_height: int
    row_id: int | None = None
    is_hot: bool = False


class DragonsOut(BaseModel):
    trend: list[DragonOut]
    rows: list[DragonOut]


class CellOut(BaseModel):
    type: str | None = None
    value: int | None = None


class RoadsOut(BaseModel):
    rule_id: str
    axis: str
    trend: list[list[CellOut]]
    bead: list[list[CellOut]]


class SyncOut(BaseModel):
    added: int
