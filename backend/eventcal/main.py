from contextlib import asynccontextmanager
from pathlib import Path
import logging
import os

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from alembic import command
from alembic.config import Config

# ── local modules ───────────────────────────────────────────────────
from . import api, ui
from .config import API_HOST, API_PORT, AUTO_MIGRATE, SEED_DEMO_DATA, configure_logging, cors_origins
from .db import SessionLocal, create_schema, get_db
from .seed import seed_events
# ────────────────────────────────────────────────────────────────────

logger = logging.getLogger(__name__)


# ───────────────────────── DB migrations (optional) ─────────────────
def run_migrations() -> None:
    app_dir = Path(__file__).resolve().parent
    cfg = Config(str(app_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(app_dir / "migrations"))
    if "DATABASE_URL" in os.environ:
        cfg.set_main_option("sqlalchemy.url", os.environ["DATABASE_URL"])
    # keep the handlers and level set by configure_logging
    cfg.attributes["configure_logger"] = False
    command.upgrade(cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if AUTO_MIGRATE:
        run_migrations()
    else:
        create_schema()
    configure_logging()
    logger.info("Schema ready (%s)", "alembic head" if AUTO_MIGRATE else "create_all")
    if SEED_DEMO_DATA:
        with SessionLocal() as db:
            seed_events(db)
    yield


app = FastAPI(title="Event Calendar", lifespan=lifespan)

# ───────────────────────── CORS ─────────────────────────────────────
allow_origins = cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
    max_age=86400,
)

# ───────────────────────── Routes & error mapping ───────────────────
api.install_error_handlers(app)
app.include_router(api.router)
app.include_router(ui.router)


# ───────────────────────── Lifecycle & health ───────────────────────
@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/dbcheck")
def dbcheck(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"db": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("eventcal.main:app", host=API_HOST, port=API_PORT)
