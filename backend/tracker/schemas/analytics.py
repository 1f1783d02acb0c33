from tracker.schemas.application import CamelModel


class DashboardCounts(CamelModel):
    total_applications: int
    interviews_count: int
    offers_count: int
    rejections_count: int
    sponsorship_offered_count: int
    overdue_follow_ups_count: int


class BreakdownEntry(CamelModel):
    name: str
    value: int


class TrendEntry(CamelModel):
    period_label: str  # "Week 1" (oldest) .. "Week 8" (current)
    count: int


class ChartData(CamelModel):
    status_breakdown: list[BreakdownEntry]
    sponsorship_breakdown: list[BreakdownEntry]
    applications_trend: list[TrendEntry]


class DashboardStats(CamelModel):
    counts: DashboardCounts
    chart_data: ChartData
