"""Dashboard analytics computed from a single scan of the application records.

Everything is recomputed per call. ``aggregate_stats`` works on any iterable of
objects exposing the ``Application`` attributes, so it can be exercised against
an in-memory fixture as well as ORM rows loaded by ``get_dashboard_stats``.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tracker.errors import StoreUnavailableError
from tracker.models.application import Application
from tracker.schemas.analytics import (
    BreakdownEntry,
    ChartData,
    DashboardCounts,
    DashboardStats,
    TrendEntry,
)
from tracker.utils.timestamps import parse_timestamp, utcnow

logger = logging.getLogger(__name__)

TREND_WEEKS = 8
_WEEK = timedelta(days=7)


def _as_datetime(value) -> datetime:
    if not isinstance(value, datetime):
        return parse_timestamp(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_follow_up_overdue(application, now: datetime) -> bool:
    if not application.follow_up_date or application.follow_up_done:
        return False
    return _as_datetime(application.follow_up_date) < now


def _trend_label(weeks_ago: int) -> str:
    # weeks_ago 0 is the current week ("Week 8"); 7 is the oldest ("Week 1")
    return f"Week {TREND_WEEKS - weeks_ago}"


def aggregate_stats(applications: Iterable, now: datetime | None = None) -> DashboardStats:
    now = _as_datetime(now or utcnow())

    total = 0
    overdue = 0
    by_status: dict[str, int] = {}
    by_sponsorship: dict[str, int] = {}
    # Seeded oldest first so empty weeks survive and insertion order is the output order
    trend: dict[str, int] = {_trend_label(i): 0 for i in range(TREND_WEEKS - 1, -1, -1)}

    for app in applications:
        total += 1
        by_status[app.status] = by_status.get(app.status, 0) + 1
        by_sponsorship[app.sponsorship_status] = by_sponsorship.get(app.sponsorship_status, 0) + 1
        if is_follow_up_overdue(app, now):
            overdue += 1

        age = now - _as_datetime(app.date_applied)
        if age < timedelta(0):
            continue
        weeks_ago = age // _WEEK
        if weeks_ago < TREND_WEEKS:
            trend[_trend_label(weeks_ago)] += 1

    counts = DashboardCounts(
        total_applications=total,
        interviews_count=by_status.get("Interviewing", 0),
        offers_count=by_status.get("Offer", 0),
        rejections_count=by_status.get("Rejected", 0),
        sponsorship_offered_count=by_sponsorship.get("Offered", 0),
        overdue_follow_ups_count=overdue,
    )
    chart_data = ChartData(
        status_breakdown=[BreakdownEntry(name=k, value=v) for k, v in by_status.items()],
        sponsorship_breakdown=[BreakdownEntry(name=k, value=v) for k, v in by_sponsorship.items()],
        applications_trend=[TrendEntry(period_label=k, count=v) for k, v in trend.items()],
    )
    return DashboardStats(counts=counts, chart_data=chart_data)


def get_dashboard_stats(db: Session, now: datetime | None = None) -> DashboardStats:
    try:
        applications = db.query(Application).all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to load applications for dashboard stats")
        raise StoreUnavailableError("Failed to retrieve dashboard stats") from exc
    return aggregate_stats(applications, now)
