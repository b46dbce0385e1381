# app/api/seed.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.deps import optional_authenticate
from app.db.init_db import database_status, seed_demo_data
from app.db.session import get_db
from app.services.auth import AuthContext

logger = logging.getLogger(__name__)

# rota pública de setup inicial: só cria dados com a base vazia
router = APIRouter()

@router.post("/init")
def init_database(
    response: Response,
    db: Session = Depends(get_db),
    ctx: Optional[AuthContext] = Depends(optional_authenticate),
):
    summary = seed_demo_data(db)
    if summary is None:
        response.status_code = 200
        return {"message": "Database already initialized", **database_status(db)}
    logger.info("Database initialized by %s", ctx.user.email if ctx else "system")
    response.status_code = 201
    return {"message": "Database initialized successfully", "summary": summary}

@router.get("/status")
def status(db: Session = Depends(get_db)):
    return database_status(db)
