from sqlmodel import SQLModel, create_engine, Session
from dragonwatch.config import settings, DEFAULT_RULES
import logging
import os

logger = logging.getLogger(__name__)

# SQLite needs its data directory up front
if settings.db_dsn.startswith("sqlite") and ":memory:" not in settings.db_dsn:
    os.makedirs("data", exist_ok=True)

engine = create_engine(settings.db_dsn, echo=False)

def init_db(bind=None):
    # models must be imported so SQLModel registers the tables
    from dragonwatch.db import models  # noqa: F401
    from dragonwatch.db.crud import list_rules, save_rule
    bind = bind or engine
    SQLModel.metadata.create_all(bind)
    with Session(bind) as session:
        if not list_rules(session):
            for rule in DEFAULT_RULES:
                save_rule(session, rule)
            logger.info("seeded %d default interval rules", len(DEFAULT_RULES))

# FastAPI dependency: generator yielding one session per request
def get_session():
    with Session(engine) as session:
        yield session
