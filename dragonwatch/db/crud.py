from typing import Iterable, Optional
from sqlmodel import Session, select
from dragonwatch.db.models import Block, Rule
from dragonwatch.core.models import Outcome, IntervalRule


def upsert_blocks(session: Session, outcomes: Iterable[Outcome], source: str = "tron") -> int:
    added = 0
    # last record wins for a repeated height
    by_height = {o.height: o for o in outcomes}
    for o in by_height.values():
        row = session.get(Block, o.height)
        if row is None:
            session.add(Block.from_outcome(o, source=source))
            added += 1
            continue
        row.hash = o.hash
        row.result_value = o.result_value
        row.type = o.type
        row.size_type = o.size_type
        row.timestamp = o.timestamp
        row.source = source
        session.add(row)
    session.commit()
    return added


def latest_outcomes(session: Session, limit: int = 1000) -> list[Outcome]:
    # newest `limit` blocks, returned oldest first
    rows = session.exec(select(Block).order_by(Block.height.desc()).limit(limit)).all()
    return [row.to_outcome() for row in reversed(rows)]


def known_heights(session: Session) -> set[int]:
    return set(session.exec(select(Block.height)).all())


# Rule helpers


def list_rules(session: Session) -> list[IntervalRule]:
    rows = session.exec(select(Rule).order_by(Rule.position, Rule.id)).all()
    return [row.to_rule() for row in rows]


def get_rule(session: Session, rule_id: str) -> Optional[IntervalRule]:
    row = session.get(Rule, rule_id)
    return row.to_rule() if row else None


def save_rule(session: Session, rule: IntervalRule) -> IntervalRule:
    row = session.get(Rule, rule.id)
    if row is None:
        position = len(session.exec(select(Rule.id)).all())
        row = Rule(id=rule.id, label=rule.label, position=position)
    row.label = rule.label
    row.value = rule.value
    row.start_block = rule.start_block
    row.trend_rows = rule.trend_rows
    row.bead_rows = rule.bead_rows
    row.dragon_threshold = rule.dragon_threshold
    session.add(row)
    session.commit()
    session.refresh(row)
    return row.to_rule()


def delete_rule(session: Session, rule_id: str) -> bool:
    row = session.get(Rule, rule_id)
    if row is None:
        return False
    session.delete(row)
    session.commit()
    return True
