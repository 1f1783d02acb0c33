from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

from tracker.database import get_db
from tracker.errors import StoreUnavailableError
from tracker.main import app
from tracker.services.seed_service import seed_demo_applications
from tracker.services.stats_service import aggregate_stats, get_dashboard_stats
from tracker.utils.timestamps import format_timestamp

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _record(days_ago=1, status="Applied", sponsorship_status="Unknown",
            follow_up_date=None, follow_up_done=False):
    return SimpleNamespace(
        date_applied=format_timestamp(NOW - timedelta(days=days_ago)),
        status=status,
        sponsorship_status=sponsorship_status,
        follow_up_date=follow_up_date and format_timestamp(follow_up_date),
        follow_up_done=follow_up_done,
    )


def _trend(stats) -> dict[str, int]:
    return {t.period_label: t.count for t in stats.chart_data.applications_trend}


class TestCounts:
    @pytest.mark.parametrize("n", [0, 1, 7])
    def test_total_matches_record_count(self, n):
        stats = aggregate_stats([_record() for _ in range(n)], NOW)
        assert stats.counts.total_applications == n

    def test_status_and_sponsorship_counts(self):
        records = [
            _record(status="Interviewing", sponsorship_status="Offered"),
            _record(status="Interviewing"),
            _record(status="Offer", sponsorship_status="Offered"),
            _record(status="Rejected", sponsorship_status="Required"),
            _record(status="Applied"),
        ]
        counts = aggregate_stats(records, NOW).counts
        assert counts.interviews_count == 2
        assert counts.offers_count == 1
        assert counts.rejections_count == 1
        assert counts.sponsorship_offered_count == 2

    def test_overdue_follow_ups(self):
        yesterday = NOW - timedelta(days=1)
        tomorrow = NOW + timedelta(days=1)
        records = [
            _record(follow_up_date=yesterday),
            _record(follow_up_date=yesterday, follow_up_done=True),
            _record(follow_up_date=tomorrow),
            _record(),
        ]
        assert aggregate_stats(records, NOW).counts.overdue_follow_ups_count == 1


class TestBreakdowns:
    def test_only_observed_values_in_first_seen_order(self):
        records = [
            _record(status="Rejected", sponsorship_status="Required"),
            _record(status="Applied", sponsorship_status="Required"),
            _record(status="Rejected", sponsorship_status="Offered"),
        ]
        chart = aggregate_stats(records, NOW).chart_data
        assert [(b.name, b.value) for b in chart.status_breakdown] == [("Rejected", 2), ("Applied", 1)]
        assert [(b.name, b.value) for b in chart.sponsorship_breakdown] == [("Required", 2), ("Offered", 1)]

    def test_empty_store_has_empty_breakdowns(self):
        chart = aggregate_stats([], NOW).chart_data
        assert chart.status_breakdown == []
        assert chart.sponsorship_breakdown == []


class TestTrend:
    def test_empty_store_has_eight_zero_buckets(self):
        trend = aggregate_stats([], NOW).chart_data.applications_trend
        assert [t.period_label for t in trend] == [f"Week {i}" for i in range(1, 9)]
        assert all(t.count == 0 for t in trend)

    def test_buckets_measured_back_from_now(self):
        records = [
            _record(days_ago=0),
            _record(days_ago=6.9),
            _record(days_ago=7),
            _record(days_ago=20),
            _record(days_ago=55),
        ]
        trend = _trend(aggregate_stats(records, NOW))
        assert trend["Week 8"] == 2
        assert trend["Week 7"] == 1
        assert trend["Week 6"] == 1
        assert trend["Week 1"] == 1
        assert sum(trend.values()) == 5

    def test_old_and_future_records_excluded_from_trend_only(self):
        records = [_record(days_ago=56), _record(days_ago=120), _record(days_ago=-3), _record(days_ago=3)]
        stats = aggregate_stats(records, NOW)
        assert len(stats.chart_data.applications_trend) == 8
        assert sum(_trend(stats).values()) == 1
        assert stats.counts.total_applications == 4


class TestDashboard:
    def test_demo_scenario(self, client, db):
        seed_demo_applications(db)

        r = client.get("/api/analytics/dashboard")
        assert r.status_code == 200
        data = r.json()
        assert data["counts"] == {
            "totalApplications": 5,
            "interviewsCount": 1,
            "offersCount": 1,
            "rejectionsCount": 1,
            "sponsorshipOfferedCount": 2,
            "overdueFollowUpsCount": 1,
        }
        trend = {t["periodLabel"]: t["count"] for t in data["chartData"]["applicationsTrend"]}
        assert trend == {
            "Week 1": 0, "Week 2": 1, "Week 3": 0, "Week 4": 1,
            "Week 5": 0, "Week 6": 1, "Week 7": 1, "Week 8": 1,
        }
        statuses = {s["name"]: s["value"] for s in data["chartData"]["statusBreakdown"]}
        assert statuses == {"Interviewing": 1, "Applied": 2, "Rejected": 1, "Offer": 1}

    def test_empty_dashboard(self, client):
        data = client.get("/api/analytics/dashboard").json()
        assert data["counts"]["totalApplications"] == 0
        assert len(data["chartData"]["applicationsTrend"]) == 8

    def test_store_unavailable_raises(self):
        class BrokenSession:
            def query(self, *args):
                raise OperationalError("SELECT", {}, Exception("disk I/O error"))

        with pytest.raises(StoreUnavailableError):
            get_dashboard_stats(BrokenSession())

    def test_store_unavailable_returns_generic_error(self, client):
        class BrokenSession:
            def query(self, *args):
                raise OperationalError("SELECT", {}, Exception("database is locked"))

        app.dependency_overrides[get_db] = lambda: BrokenSession()
        r = client.get("/api/analytics/dashboard")
        assert r.status_code == 500
        assert r.json() == {"message": "Failed to retrieve dashboard stats"}
