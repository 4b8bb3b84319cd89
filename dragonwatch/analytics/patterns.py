from typing import Sequence

from dragonwatch.core.models import Axis, Outcome


def leading_run(ordered: Sequence[Outcome], axis: Axis) -> tuple[str, int]:
    # run at the head of the sequence only, not the longest run
    if not ordered:
        raise ValueError("leading_run needs at least one outcome")
    cur = ordered[0].label(axis)
    count = 0
    for o in ordered:
        if o.label(axis) != cur:
            break
        count += 1
    return cur, count


def partition_rows(earliest_first: Sequence[Outcome], rows: int) -> list[list[Outcome]]:
    """Split an ascending sequence round-robin into `rows` rows.

    Row r gets positions r, r+rows, r+2*rows, ... which is exactly what a
    bead road filled column by column shows on its r-th line.
    """
    return [list(earliest_first[r::rows]) for r in range(rows)]
