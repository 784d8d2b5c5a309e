"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MEMBERS_PAGE_SIZE = 20
GUESTS_PAGE_SIZE = 20
SUBSCRIBERS_DEFAULT_LIMIT = 50
MARKETING_EMAILS_DEFAULT_LIMIT = 20
EMAIL_ANALYTICS_DEFAULT_LIMIT = 10
TOP_PERFORMERS_DEFAULT_LIMIT = 5
CAMPAIGN_OVERVIEW_DAYS = 30
PENDING_DUPR_LIMIT = 100

CHECKIN_POLL_SECONDS = 5
QR_DUPLICATE_WINDOW_SECONDS = 2
UPCOMING_EVENTS_DAYS = 7
DEFAULT_WAITLIST_CAPACITY = 5
OPEN_PLAY_CLONE_DAYS = 90
DEFAULT_OPEN_PLAY_CAPACITY = 20

SESSION_COOKIE_MAX_AGE = 60 * 60
REFRESH_COOKIE_MAX_AGE = 60 * 60 * 24 * 7
SESSION_LIFETIME_DAYS = 7
MIN_PASSWORD_LENGTH = 8

FACILITY_TIMEZONE = "America/Chicago"

EVENT_COLORS = {
    "event_scramble": "#B3FF00",
    "dupr_open_play": "#0EA5E9",
    "dupr_tournament": "#1D4ED8",
    "non_dupr_tournament": "#EF4444",
    "league": "#8B5CF6",
    "clinic": "#10B981",
    "private_lesson": "#64748B",
    "open_play": "#B3FF00",
}
DEFAULT_EVENT_COLOR = "#64748B"

PREVIEW_SAMPLE_DATA = {
    "first_name": "Alex",
    "last_name": "Johnson",
    "full_name": "Alex Johnson",
    "email": "alex@example.com",
}

DEFAULT_EMAIL_PROMPT = "Write a weekly pickleball tips email"
DEFAULT_EMAIL_TONE = "enthusiastic"
DEFAULT_EMAIL_CONTENT_TYPE = "tips"
MARKETING_EMAIL_FUNCTION = "generate-marketing-email"

BENEFIT_TYPES = {
    "court_time_hours": "Court Time",
    "dink_board_sessions": "Dink Board",
    "ball_machine_sessions": "Ball Machine",
    "pro_shop_discount": "Pro Shop Discount",
    "membership_months": "Membership",
    "private_lessons": "Private Lessons",
    "guest_passes": "Guest Passes",
    "priority_booking": "Priority Booking",
    "recognition": "Recognition",
}
BACKERS_PAGE_SIZE = 20
