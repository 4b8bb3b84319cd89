from pydantic_settings import BaseSettings
import logging
import os

from dragonwatch.core.models import IntervalRule

class Settings(BaseSettings):
    db_dsn: str = os.getenv("DB_DSN", "sqlite:///./data/dragonwatch.db")
    tron_api_base: str = os.getenv("TRON_API_BASE", "https://api.trongrid.io")
    tron_api_key: str | None = os.getenv("TRON_API_KEY")
    tron_retries: int = int(os.getenv("TRON_RETRIES", 3))
    tron_backoff: float = float(os.getenv("TRON_BACKOFF", 0.5))
    tron_timeout: float = float(os.getenv("TRON_TIMEOUT", 10))
    sync_count: int = int(os.getenv("SYNC_COUNT", 200))
    history_limit: int = int(os.getenv("HISTORY_LIMIT", 1000))
    api_key: str | None = os.getenv("API_KEY")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()

# seeded into the rule table on first start
DEFAULT_RULES = [
    IntervalRule(id="1", label="单区块", value=1, trend_rows=6, bead_rows=6, dragon_threshold=5),
    IntervalRule(id="20", label="20区块", value=20, trend_rows=6, bead_rows=6, dragon_threshold=3),
    IntervalRule(id="60", label="60区块", value=60, trend_rows=6, bead_rows=6, dragon_threshold=3),
]

_configured = False

def setup_logging(level: str | None = None):
    global _configured
    if _configured:
        return
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _configured = True
