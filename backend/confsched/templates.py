# Keywords looked up (in order) in schedule notes when an entry has no room
# description to use as its title.
NOTE_TITLE_KEYWORDS = [
  {"keyword": "coffee break", "title": "Coffee Break"},
  {"keyword": "lunch break", "title": "Lunch Break + ISOMA"},
  {"keyword": "opening", "title": "Opening Ceremony"},
  {"keyword": "closing", "title": "Closing Ceremony"},
  {"keyword": "registration", "title": "Registration"},
  {"keyword": "break", "title": "Break"},
]

SCHEDULE_TYPE_TITLES = {
  "BREAK": "Break",
  "ONE_DAY_ACTIVITY": "Activity Session",
  "TALK": "Conference Session",
}

DEFAULT_TITLE = "Schedule Item"
DEFAULT_LOCATION = "All Areas"
