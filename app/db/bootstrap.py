# app/db/bootstrap.py
import logging
import os
from alembic import command
from alembic.config import Config

from app.core.config import settings
from app.db.session import SessionLocal
from app.db.init_db import seed_demo_data

logger = logging.getLogger(__name__)

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

def run_migrations_and_seed() -> None:
    # Aponta explicitamente para alembic.ini e migrations/
    cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BASE_DIR, "migrations"))

    # Aplica todas as migrações
    command.upgrade(cfg, "head")
    logger.info("Database migrations applied")

    # Seed opcional (base vazia apenas)
    if settings.SEED_DEMO_DATA:
        with SessionLocal() as db:
            seed_demo_data(db)
