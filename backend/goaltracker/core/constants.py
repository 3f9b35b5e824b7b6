"""Shared application constants.

Centralizes values used by the stores, the startup jobs and the reminder
builders so we can document and adjust them in one place.
"""

# Preference key holding the Monday of the week the app last started in
LAST_LAUNCH_WEEK_KEY = "last_launch_week_start"

# Group key for archived goals that have no week_start
UNKNOWN_WEEK = "unknown"

# Recap free-text fields, in export order, with their export headings
RECAP_SECTIONS = [
    ("overview", "OVERVIEW"),
    ("wins", "WINS"),
    ("challenges", "CHALLENGES"),
    ("grateful_for", "GRATEFUL FOR"),
    ("song_of_week", "SONG OF THE WEEK"),
    ("lessons", "LESSONS LEARNED"),
    ("next_week_focus", "NEXT WEEK FOCUS"),
]
RECAP_FIELDS = [name for name, _ in RECAP_SECTIONS]

# Repeating reminder slots: (identifier, hour, minute, title, body)
DAILY_REMINDERS = [
    ("morning-briefing", 8, 0, "☀️ Morning Briefing",
     "Tap to see your goals and schedule for today"),
    ("due-today-morning", 9, 0, "⏰ Goals Due Today",
     "Tap to view goals that need attention today"),
    ("midday-checkin", 12, 0, "🔄 Mid-day Check-in",
     "Tap to review your progress and afternoon schedule"),
    ("due-today-afternoon", 14, 0, "⏰ Due Today Check-in",
     "Don't forget about your goals due today"),
    ("end-of-day", 18, 0, "🌙 End of Day Review",
     "Tap to review today's progress and tomorrow's plan"),
]

# Minutes before a calendar event that its reminder fires
EVENT_REMINDER_LEAD_MIN = 15

# How far ahead event reminders are scheduled
EVENT_REMINDER_HORIZON_DAYS = 7

# Suffix given to inbox files that could not be imported
BAD_INBOX_SUFFIX = ".bad.json"
