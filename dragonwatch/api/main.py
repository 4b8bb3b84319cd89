from fastapi import FastAPI
from contextlib import asynccontextmanager
from dragonwatch.config import setup_logging
from dragonwatch.db.base import init_db
from dragonwatch.api.routes import router

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    yield

app = FastAPI(title="DragonWatch", lifespan=lifespan)
app.include_router(router)

@app.get("/")
def home():
    return {"ok": True, "app": "DragonWatch"}
