from __future__ import annotations
from typing import Iterable, Optional, Sequence

from dragonwatch.analytics.alignment import sample
from dragonwatch.analytics.patterns import leading_run, partition_rows
from dragonwatch.core.models import Axis, DragonInfo, IntervalRule, Outcome

# value -> (label, color token)
DISPLAY = {
    Axis.PARITY: {
        'ODD': ('单', 'var(--color-odd)'),
        'EVEN': ('双', 'var(--color-even)'),
    },
    Axis.SIZE: {
        'BIG': ('大', 'var(--color-big)'),
        'SMALL': ('小', 'var(--color-small)'),
    },
}


def _dragon(rule: IntervalRule, axis: Axis, value: str, count: int,
            next_height: int, row_id: Optional[int] = None) -> DragonInfo:
    label, color = DISPLAY[axis][value]
    return DragonInfo(
        rule_name=rule.label,
        type=axis.value,
        value=label,
        count=count,
        color=color,
        threshold=rule.threshold,
        next_height=next_height,
        row_id=row_id,
    )


def _streaks(ordered: Sequence[Outcome], rule: IntervalRule, next_height: int,
             row_id: Optional[int] = None) -> list[DragonInfo]:
    out = []
    for axis in (Axis.PARITY, Axis.SIZE):
        value, count = leading_run(ordered, axis)
        if count >= rule.threshold:
            out.append(_dragon(rule, axis, value, count, next_height, row_id))
    return out


def compute_dragons(outcomes: Sequence[Outcome],
                    rules: Iterable[IntervalRule]) -> tuple[list[DragonInfo], list[DragonInfo]]:
    """Trend dragons and bead-row dragons for every rule, longest first.

    Trend dragons look at the rule's aligned outcomes latest first. Row
    dragons split the aligned outcomes into the rule's bead rows and look
    at each row latest first. Ties keep rule order, parity before size,
    then row order.
    """
    trend: list[DragonInfo] = []
    rows_out: list[DragonInfo] = []
    if not outcomes:
        return trend, rows_out

    for rule in rules:
        aligned = sample(outcomes, rule)
        if aligned is None:
            continue

        trend.extend(_streaks(aligned.latest_first, rule, aligned.next_height))

        rows = rule.rows
        for r, row in enumerate(partition_rows(aligned.earliest_first, rows)):
            if not row:
                continue
            row_latest = row[::-1]
            next_height = row_latest[0].height + rule.value * rows
            rows_out.extend(_streaks(row_latest, rule, next_height, row_id=r + 1))

    trend.sort(key=lambda d: d.count, reverse=True)
    rows_out.sort(key=lambda d: d.count, reverse=True)
    return trend, rows_out
