"""
Application constants for Repository Freshness.

Contains the badge contract, upstream endpoints and the relative-time ladder.
"""

# =============================================================================
# Badge Contract (shields.io endpoint schema)
# =============================================================================

BADGE_SCHEMA_VERSION = 1
BADGE_LABEL = "⏱"  # stopwatch
BADGE_LABEL_COLOR = "blue"

# Matches the CDN TTL in front of the badge endpoint
DEFAULT_BADGE_CACHE_SECONDS = 60 * 10

# =============================================================================
# GitHub REST API
# =============================================================================

GITHUB_API_BASE = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_ACCEPT_HEADER = "application/vnd.github+json"
USER_AGENT = "RepositoryFreshness/1.0"

COMMUNITY_PROFILE_PATH = "/repos/{owner}/{name}/community/profile"

# =============================================================================
# Relative Time Ladder
# =============================================================================
# Changing any of these alters badge output for every existing consumer.

# Below this many seconds: "a few seconds"
SECONDS_THRESHOLD = 45
# Below this many minutes: "N minutes"
MINUTES_THRESHOLD = 45
# Below this many hours: "N hours"
HOURS_THRESHOLD = 22
# Below this many days: "N days"
DAYS_THRESHOLD = 26
# Below this many months: "N months"
MONTHS_THRESHOLD = 11

# Gregorian calendar: 400 years hold 146097 days and 4800 months
DAYS_PER_400_YEARS = 146097
MONTHS_PER_400_YEARS = 4800

RELATIVE_TIME_PHRASES = {
    "s": "a few seconds",
    "m": "a minute",
    "mm": "{} minutes",
    "h": "an hour",
    "hh": "{} hours",
    "d": "a day",
    "dd": "{} days",
    "M": "a month",
    "MM": "{} months",
    "y": "a year",
    "yy": "{} years",
}
