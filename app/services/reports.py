"""Read-only aggregates over archives: period report, CSV export and dashboard counters."""

import csv
import io
from datetime import UTC, datetime

from sqlalchemy import and_, func
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.models import Archive, User
from app.models.archive import CATEGORIES, CATEGORY_LABELS
from app.models.user import STATUS_ACTIVE
from app.schemas.auth import CurrentUser
from app.schemas.report import (
    ArchiveReport,
    CategoryCounts,
    CategoryStat,
    DashboardStats,
    UploaderStat,
)
from app.services.access import is_admin
from app.services.archives import query_with_uploader, to_archive_read
from app.services.storage import format_file_size

CSV_HEADERS = ("Title", "Description", "Category", "Uploader", "Uploaded At", "File Size")
PERIODS = ("month", "year")


def normalize_period(period: str) -> str:
    """'month' or 'year' as given; any other value is reported as 'all'."""
    return period if period in PERIODS else "all"


def period_bounds(
    period: str, now: datetime | None = None
) -> tuple[datetime, datetime] | None:
    """
    Half-open [start, end) window for a report period.

    'month' is the current calendar month, 'year' the current calendar year;
    any other value means no date filter (None).
    """
    now = now or datetime.now(UTC)
    if period == "month":
        start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        if start.month == 12:
            end = start.replace(year=start.year + 1, month=1)
        else:
            end = start.replace(month=start.month + 1)
        return start, end
    if period == "year":
        start = now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
        return start, start.replace(year=start.year + 1)
    return None


def _created_within(bounds: tuple[datetime, datetime] | None) -> list[ColumnElement[bool]]:
    if bounds is None:
        return []
    start, end = bounds
    return [Archive.created_at >= start, Archive.created_at < end]


def archive_report(db: Session, period: str, now: datetime | None = None) -> ArchiveReport:
    """
    Archives created in the period (newest first) with per-category counts and
    per-uploader counts. Every user appears in uploader_stats, including those
    with zero archives, ordered by count descending.
    """
    period = normalize_period(period)
    conditions = _created_within(period_bounds(period, now))

    rows = (
        query_with_uploader(db)
        .filter(*conditions)
        .order_by(Archive.created_at.desc(), Archive.id.desc())
        .all()
    )
    archives = [to_archive_read(archive, name) for archive, name in rows]

    category_rows = (
        db.query(Archive.category, func.count(Archive.id))
        .filter(*conditions)
        .group_by(Archive.category)
        .order_by(Archive.category)
        .all()
    )
    category_stats = [CategoryStat(category=c, count=n) for c, n in category_rows]

    upload_count = func.count(Archive.id).label("upload_count")
    uploader_rows = (
        db.query(User.id, User.name, upload_count)
        .outerjoin(Archive, and_(Archive.uploader_id == User.id, *conditions))
        .group_by(User.id, User.name)
        .order_by(upload_count.desc(), User.name, User.id)
        .all()
    )
    uploader_stats = [
        UploaderStat(uploader_id=uid, uploader_name=name, upload_count=n)
        for uid, name, n in uploader_rows
    ]

    return ArchiveReport(
        period=period,
        archives=archives,
        category_stats=category_stats,
        uploader_stats=uploader_stats,
    )


def report_to_csv(report: ArchiveReport) -> str:
    """Render the report's archive list as CSV (one row per archive, header first)."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for a in report.archives:
        writer.writerow(
            (
                a.title,
                a.description,
                CATEGORY_LABELS.get(a.category, a.category),
                a.uploader_name or "",
                a.created_at.strftime("%Y-%m-%d %H:%M"),
                format_file_size(a.file_size),
            )
        )
    return buf.getvalue()


def dashboard_stats(
    db: Session, identity: CurrentUser, now: datetime | None = None
) -> DashboardStats:
    admin = is_admin(identity)

    total_archives = db.query(func.count(Archive.id)).scalar() or 0
    my_archives = (
        db.query(func.count(Archive.id)).filter(Archive.uploader_id == identity.id).scalar()
        or 0
    )

    counts = dict(
        db.query(Archive.category, func.count(Archive.id)).group_by(Archive.category).all()
    )
    categories = CategoryCounts(**{c: counts.get(c, 0) for c in CATEGORIES})

    total_users = 0
    if admin:
        total_users = (
            db.query(func.count(User.id)).filter(User.status == STATUS_ACTIVE).scalar() or 0
        )

    month_query = db.query(func.count(Archive.id)).filter(
        *_created_within(period_bounds("month", now))
    )
    if not admin:
        month_query = month_query.filter(Archive.uploader_id == identity.id)
    this_month = month_query.scalar() or 0

    return DashboardStats(
        total_archives=total_archives,
        my_archives=my_archives,
        total_users=total_users,
        categories=categories,
        this_month=this_month,
    )
