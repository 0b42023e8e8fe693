"""Centralized constants for the reprise scheduling engine.

All magic numbers and scheduling defaults live here so every layer
imports from a single source of truth.
"""

from datetime import timedelta

# ---------- Ease factor ----------
MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 3.0
DEFAULT_EASE_FACTOR = 2.5
AGAIN_EASE_PENALTY = 0.2
EASY_EASE_BONUS = 0.15

# ---------- Intervals (days) ----------
FIRST_GOOD_INTERVAL = 1
SECOND_GOOD_INTERVAL = 6
MAX_INTERVAL_DAYS = 36500  # keeps next_review_at within datetime range
FIRST_EASY_INTERVAL = 4
EASY_INTERVAL_MULTIPLIER = 1.3
RELEARN_DELAY = timedelta(minutes=10)

# ---------- Sessions ----------
DEFAULT_MAX_NEW = 5
DEFAULT_MAX_REVIEW = 20

# ---------- Statistics ----------
SECONDS_PER_CARD = 30

# ---------- Mastery thresholds ----------
DEVELOPING_MAX_REVIEWS = 5
DEVELOPING_MIN_EASE = 2.2
PROFICIENT_MAX_REVIEWS = 10
PROFICIENT_MIN_EASE = 2.7
