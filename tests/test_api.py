import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from dragonwatch.api.main import app
from dragonwatch.api.routes import get_client
from dragonwatch.config import DEFAULT_RULES
from dragonwatch.core.models import Outcome
from dragonwatch.db.base import get_session, init_db
from dragonwatch.db.crud import known_heights, upsert_blocks
from dragonwatch.db.models import Block
from dragonwatch.services import sync_blocks
from dragonwatch.tron.client import TronError


def block_hash(digit):
    return "a" * 63 + str(digit)


class FakeTron:
    def __init__(self, outcomes=(), fail=False, fail_at=None):
        self.outcomes = list(outcomes)
        self.fail = fail
        self.fail_at = fail_at

    def iter_recent_blocks(self, count, skip=None):
        if self.fail:
            raise TronError("node unreachable")
        for o in self.outcomes[-count:]:
            if o.height == self.fail_at:
                raise TronError("HTTP Error: 500")
            if o.height not in (skip or set()):
                yield o


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(eng)
    return eng


@pytest.fixture
def api(engine):
    def session_override():
        with Session(engine) as session:
            yield session
    app.dependency_overrides[get_session] = session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_default_rules_seeded(api):
    r = api.get("/rules")
    assert r.status_code == 200
    assert [x["id"] for x in r.json()] == [rule.id for rule in DEFAULT_RULES]


def test_ingest_and_dragons(api):
    for h, d in enumerate([1, 3, 5, 7, 9], start=1):
        r = api.post("/blocks", json={"height": h, "hash": block_hash(d)})
        assert r.status_code == 200 and r.json()["type"] == "ODD"
    api.put("/rules/1", json={"label": "every", "value": 1, "dragon_threshold": 5})
    body = api.get("/dragons").json()
    parity = [d for d in body["trend"] if d["rule_name"] == "every" and d["type"] == "parity"]
    assert parity == [{
        "rule_name": "every", "type": "parity", "value": "单", "count": 5,
        "color": "var(--color-odd)", "threshold": 5, "next_height": 6,
        "row_id": None, "is_hot": True,
    }]


def test_bad_hash_rejected(api):
    r = api.post("/blocks", json={"height": 1, "hash": "xyz"})
    assert r.status_code == 400


def test_roads(api):
    api.post("/blocks", json={"height": 20, "hash": block_hash(8)})
    r = api.get("/roads/20", params={"axis": "size"})
    assert r.status_code == 200
    body = r.json()
    assert body["axis"] == "size"
    assert body["trend"][0][0] == {"type": "BIG", "value": 8}
    assert body["bead"][0][0] == {"type": "BIG", "value": 8}
    assert len(body["trend"]) == 24 and len(body["bead"]) == 24


def test_roads_unknown_rule(api):
    assert api.get("/roads/nope").status_code == 404


def test_rule_crud(api):
    r = api.put("/rules/odd5", json={"label": "5 step", "value": 5, "start_block": 3, "bead_rows": 4})
    assert r.status_code == 200 and r.json()["start_block"] == 3
    assert "odd5" in [x["id"] for x in api.get("/rules").json()]
    assert api.delete("/rules/odd5").status_code == 200
    assert api.delete("/rules/odd5").status_code == 404


def test_sync(api):
    fake = FakeTron([Outcome.from_hash(h, block_hash(h % 10)) for h in range(1, 11)])
    app.dependency_overrides[get_client] = lambda: fake
    r = api.post("/sync", params={"count": 4})
    assert r.json() == {"added": 4}
    r = api.post("/sync", params={"count": 4})
    assert r.json() == {"added": 0}


def test_sync_upstream_failure(api):
    app.dependency_overrides[get_client] = lambda: FakeTron(fail=True)
    r = api.post("/sync")
    assert r.status_code == 502


def test_sync_keeps_blocks_fetched_before_failure(engine):
    fake = FakeTron([Outcome.from_hash(h, block_hash(h % 10)) for h in range(1, 11)], fail_at=10)
    with Session(engine) as session:
        with pytest.raises(TronError):
            sync_blocks(session, fake, count=5)
        assert known_heights(session) == {6, 7, 8, 9}
        fake.fail_at = None
        assert sync_blocks(session, fake, count=5) == 1
        assert known_heights(session) == {6, 7, 8, 9, 10}


def test_sync_count_must_be_positive(api):
    app.dependency_overrides[get_client] = lambda: FakeTron()
    assert api.post("/sync", params={"count": -1}).status_code == 422
    assert api.post("/sync", params={"count": 0}).status_code == 422


def test_negative_height_rejected(api):
    r = api.post("/blocks", json={"height": -1, "hash": block_hash(1)})
    assert r.status_code == 422


def test_client_is_shared_between_requests():
    a, b = get_client(), get_client()
    assert a is b and a.cache is b.cache


def test_stored_block_keeps_latest_source(engine):
    o = Outcome.from_hash(5, block_hash(5))
    with Session(engine) as session:
        assert upsert_blocks(session, [o]) == 1
        assert upsert_blocks(session, [o], source="manual") == 0
        row = session.get(Block, 5)
        assert row.source == "manual"
        assert row.fetched_ts is not None
