"""Application-wide constants for the consultation service."""

from __future__ import annotations

WEB_SITE_NAME = "就職先・転職先を見極めるためのサイト"

# Scheduling defaults (overridable through Settings)
DEFAULT_MIN_DURATION_BEFORE_CONSULTATION_ACCEPTANCE_IN_SECONDS = 6 * 60 * 60
DEFAULT_LENGTH_OF_MEETING_IN_MINUTE = 60
DEFAULT_DEADLINE_OF_PAYMENT_IN_DAYS = 3

# Candidate numbers a consultant may pick
FIRST_CANDIDATE = 1
SECOND_CANDIDATE = 2
THIRD_CANDIDATE = 3
VALID_CANDIDATES = (FIRST_CANDIDATE, SECOND_CANDIDATE, THIRD_CANDIDATE)
