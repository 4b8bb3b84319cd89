import os

os.environ.setdefault("DB_DSN", "sqlite:///:memory:")
os.environ.setdefault("TRON_BACKOFF", "0")

import pytest

from dragonwatch.core.models import Outcome


def make(height: int, value: int) -> Outcome:
    return Outcome(height=height, hash=f"h{height}", result_value=value,
                   type='EVEN' if value % 2 == 0 else 'ODD',
                   size_type='BIG' if value >= 5 else 'SMALL')


@pytest.fixture
def outcomes_from():
    def build(values, start=1):
        return [make(start + i, v) for i, v in enumerate(values)]
    return build
