"""
Derived views over studio data.
"""

from .availability import available_spots, is_fully_booked, has_few_spots_left, make_spots_lookup
from .dashboard import (
    DashboardItem,
    DashboardState,
    UpcomingGroup,
    WeeklyStats,
    get_dashboard_state,
    item_label,
    item_name,
    date_label,
    group_upcoming,
    weekly_stats,
)
from .catalog import CatalogItem, browse_offerings
from .roster import RosterEntry, students_with_bookings
from .timeline import BookingTimeline, TimelineEntry, split_bookings
from .payments_report import (
    PaymentRow,
    enrich_payments,
    filter_payments_by_status,
    payments_dataframe,
    export_payments_csv,
)

__all__ = [
    "available_spots",
    "is_fully_booked",
    "has_few_spots_left",
    "make_spots_lookup",
    "DashboardItem",
    "DashboardState",
    "UpcomingGroup",
    "WeeklyStats",
    "get_dashboard_state",
    "item_label",
    "item_name",
    "date_label",
    "group_upcoming",
    "weekly_stats",
    "CatalogItem",
    "browse_offerings",
    "RosterEntry",
    "students_with_bookings",
    "BookingTimeline",
    "TimelineEntry",
    "split_bookings",
    "PaymentRow",
    "enrich_payments",
    "filter_payments_by_status",
    "payments_dataframe",
    "export_payments_csv",
]
