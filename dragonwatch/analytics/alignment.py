from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional

from dragonwatch.core.models import IntervalRule, Outcome


@dataclass(frozen=True)
class AlignedSet:
    latest_first: list[Outcome]
    earliest_first: list[Outcome]
    next_height: int


def is_aligned(height: int, rule: IntervalRule) -> bool:
    if rule.value <= 1:
        return True
    if rule.start_block > 0:
        return height >= rule.start_block and (height - rule.start_block) % rule.value == 0
    return height % rule.value == 0


def sample(outcomes: Iterable[Outcome], rule: IntervalRule) -> Optional[AlignedSet]:
    """Outcomes sitting on the rule's sampling grid, or None if there are none."""
    aligned = [o for o in outcomes if is_aligned(o.height, rule)]
    if not aligned:
        return None
    latest_first = sorted(aligned, key=lambda o: o.height, reverse=True)
    return AlignedSet(
        latest_first=latest_first,
        earliest_first=latest_first[::-1],
        next_height=latest_first[0].height + rule.value,
    )
