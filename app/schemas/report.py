"""Schemas for the archive report and dashboard counters."""

from pydantic import BaseModel, Field

from app.schemas.archive import ArchiveRead


class CategoryStat(BaseModel):
    category: str
    count: int = Field(..., ge=0)


class UploaderStat(BaseModel):
    uploader_id: int
    uploader_name: str
    upload_count: int = Field(..., ge=0)


class ArchiveReport(BaseModel):
    """Archives in the selected period plus per-category and per-uploader counts."""

    period: str
    archives: list[ArchiveRead]
    category_stats: list[CategoryStat]
    uploader_stats: list[UploaderStat]


class CategoryCounts(BaseModel):
    kendaraan: int = 0
    staf: int = 0
    inventaris: int = 0


class DashboardStats(BaseModel):
    """
    Counters for the landing page. total_users is only filled for admins;
    this_month counts all archives for admins and the caller's own otherwise.
    """

    total_archives: int
    my_archives: int
    total_users: int
    categories: CategoryCounts
    this_month: int
