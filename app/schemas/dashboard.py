"""
Dashboard schemas
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_serializer

from app.utils.datetime_utils import iso_8601_utc


class CountSummary(BaseModel):
    counts: Dict[str, int]
    total: int


class MonthlyStat(BaseModel):
    """Approved counts for one month, keyed by submission type"""
    month: str

    model_config = ConfigDict(extra="allow")


class CampusStat(CountSummary):
    id: int
    name: str
    total_colleges: int


class CollegeStat(CountSummary):
    id: int
    code: str
    name: str


class AdminDashboard(BaseModel):
    selected_year: int
    campus_id: Optional[int] = None
    overall_stats: CountSummary
    monthly_stats: List[MonthlyStat]
    campus_stats: List[CampusStat]
    available_years: List[int]
    review_stats: CountSummary


class CollegeDashboard(BaseModel):
    campus_id: int
    campus_name: str
    selected_year: int
    college_stats: List[CollegeStat]


class RecentSubmission(BaseModel):
    type: str
    id: int
    title: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    @field_serializer("created_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        return iso_8601_utc(dt) if dt is not None else None


class UserDashboard(BaseModel):
    stats: Dict[str, Dict[str, int]]
    recent: List[RecentSubmission]
