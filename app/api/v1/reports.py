"""Admin reports over archives, as JSON or CSV."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.report import ArchiveReport
from app.services.reports import archive_report, report_to_csv

router = APIRouter()

PeriodQuery = Annotated[
    str,
    Query(
        max_length=16,
        description="'month' (current calendar month), 'year' (current year); anything else is unfiltered",
    ),
]


@router.get("/archives", response_model=ArchiveReport)
def get_archive_report(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    period: PeriodQuery = "month",
) -> ArchiveReport:
    """Archives in the period with category and per-uploader counts (admin only)."""
    return archive_report(db, period)


@router.get("/archives/export", response_class=Response)
def export_archive_report(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    period: PeriodQuery = "month",
) -> Response:
    """Download the period's archive list as CSV (admin only)."""
    report = archive_report(db, period)
    today = datetime.now(UTC).date().isoformat()
    return Response(
        content=report_to_csv(report),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="archive_report_{report.period}_{today}.csv"'
        },
    )
