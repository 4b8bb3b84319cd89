import pytest

from dragonwatch.analytics.patterns import leading_run, partition_rows
from dragonwatch.core.models import Axis


def test_leading_run_counts_only_the_head(outcomes_from):
    # latest first: 7,6 odd, 5,4 even, then odd again
    seq = outcomes_from([1, 1, 1, 2, 2, 3, 3])[::-1]
    assert leading_run(seq, Axis.PARITY) == ('ODD', 2)


def test_leading_run_bounds(outcomes_from):
    seq = outcomes_from([7, 8, 9, 1, 6])
    value, count = leading_run(seq, Axis.SIZE)
    assert value == 'BIG' and 1 <= count <= len(seq)
    assert all(o.size_type == value for o in seq[:count])
    assert seq[count].size_type != value


def test_leading_run_whole_sequence(outcomes_from):
    seq = outcomes_from([0, 2, 4])
    assert leading_run(seq, Axis.PARITY) == ('EVEN', 3)
    assert leading_run(seq, Axis.SIZE) == ('SMALL', 3)


def test_leading_run_empty():
    with pytest.raises(ValueError):
        leading_run([], Axis.PARITY)


def test_partition_rows_round_robin(outcomes_from):
    seq = outcomes_from([0, 1, 2, 3, 4, 5])
    rows = partition_rows(seq, 2)
    assert [[o.height for o in r] for r in rows] == [[1, 3, 5], [2, 4, 6]]


def test_partition_rows_more_rows_than_items(outcomes_from):
    rows = partition_rows(outcomes_from([1, 2]), 4)
    assert [len(r) for r in rows] == [1, 1, 0, 0]
