import logging
from dataclasses import asdict
from functools import lru_cache

from sqlmodel import Session

from dragonwatch.analytics.alignment import sample
from dragonwatch.analytics.dragons import compute_dragons
from dragonwatch.analytics.roads import build_bead_grid, build_trend_grid
from dragonwatch.config import settings
from dragonwatch.core.models import DEFAULT_ROWS, Axis, Grid, Outcome
from dragonwatch.db.crud import get_rule, known_heights, latest_outcomes, list_rules, upsert_blocks
from dragonwatch.tron.client import TronClient, TronError

logger = logging.getLogger(__name__)

SYNC_BATCH = 50


# one client per process so its block cache and HTTP session are shared
@lru_cache(maxsize=1)
def make_client() -> TronClient:
    return TronClient(
        settings.tron_api_base,
        api_key=settings.tron_api_key,
        retries=settings.tron_retries,
        backoff=settings.tron_backoff,
        timeout=settings.tron_timeout,
    )


def sync_blocks(session: Session, client: TronClient, count: int | None = None) -> int:
    """Pull recent blocks and store them in batches.

    Blocks fetched before an upstream failure are stored before the error
    propagates, so the next sync resumes after them.
    """
    count = count or settings.sync_count
    added = 0
    batch: list[Outcome] = []
    try:
        for o in client.iter_recent_blocks(count, skip=known_heights(session)):
            batch.append(o)
            if len(batch) >= SYNC_BATCH:
                added += upsert_blocks(session, batch)
                batch = []
    except TronError:
        added += upsert_blocks(session, batch)
        logger.warning("sync interrupted after storing %d new blocks", added)
        raise
    added += upsert_blocks(session, batch)
    logger.info("sync stored %d new blocks", added)
    return added


def ingest_outcome(session: Session, height: int, block_hash: str, timestamp: str = "") -> Outcome:
    out = Outcome.from_hash(height, block_hash, timestamp)
    upsert_blocks(session, [out], source="manual")
    return out


def _grid_to_dict(grid: Grid):
    return [[asdict(cell) for cell in column] for column in grid]


def get_dragons(session: Session):
    outcomes = latest_outcomes(session, limit=settings.history_limit)
    trend, rows = compute_dragons(outcomes, list_rules(session))
    def to_dict(d):
        return {**asdict(d), 'is_hot': d.is_hot}
    return {
        'trend': [to_dict(d) for d in trend],
        'rows': [to_dict(d) for d in rows],
    }


def get_roads(session: Session, rule_id: str, axis: Axis = Axis.PARITY):
    rule = get_rule(session, rule_id)
    if rule is None:
        raise LookupError(f"unknown rule {rule_id}")
    outcomes = latest_outcomes(session, limit=settings.history_limit)
    aligned = sample(outcomes, rule)
    chrono = aligned.earliest_first if aligned else []
    return {
        'rule_id': rule.id,
        'axis': axis.value,
        'trend': _grid_to_dict(build_trend_grid(chrono, axis, rule.trend_rows or DEFAULT_ROWS)),
        'bead': _grid_to_dict(build_bead_grid(chrono, axis, rule.bead_rows or DEFAULT_ROWS)),
    }
