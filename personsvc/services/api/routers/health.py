# personsvc/services/api/routers/health.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from personsvc.common.logging import get_logger
from personsvc.common.settings import get_settings
from personsvc.services.api.deps import transactional_session

logger = get_logger(__name__)
router = APIRouter()


@router.get("/healthz")
def healthz():
    """Liveness: the process is up. Never touches the database."""
    s = get_settings()
    return {
        "ok": True,
        "app": s.app_name,
        "env": s.app_env,
        "persons": f"{s.api.prefix}/persons",
    }


@router.get("/readyz")
def readyz(db: Session = Depends(transactional_session, scope="function")):
    """Readiness: the persons store answers a trivial query."""
    try:
        db.execute(text("SELECT 1")).scalar_one()
    except SQLAlchemyError as e:
        logger.error("store is not ready: %s", e)
        raise HTTPException(status_code=HTTPStatus.SERVICE_UNAVAILABLE, detail="store unavailable") from e
    return {"ok": True, "db": db.get_bind().dialect.name}
