"""Dashboard counters and the latest uploads."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.archive import ArchiveRead
from app.schemas.auth import CurrentUser
from app.schemas.report import DashboardStats
from app.services.archives import recent_archives
from app.services.reports import dashboard_stats

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def get_stats(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> DashboardStats:
    return dashboard_stats(db, user)


@router.get("/recent-archives", response_model=list[ArchiveRead])
def get_recent_archives(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[ArchiveRead]:
    """The ten most recently uploaded archives."""
    return recent_archives(db)
