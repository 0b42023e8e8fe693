"""Daily study streak tracking."""

from datetime import date, datetime

from reprise.domain.models import StreakState


def record_session_completion(state: StreakState, on: date | datetime) -> StreakState:
    """
    Record a completed study session on the given day.

    Returns:
        The updated streak. Recording twice on the same day keeps the streak;
        a session on the next calendar day extends it; any gap resets it to 1.
        A day earlier than the last recorded one leaves the state untouched.
    """
    today = on.date() if isinstance(on, datetime) else on
    last = state.last_study_date

    if last is not None and today < last:
        return state

    if last == today:
        current = max(1, state.current)
    elif last is not None and (today - last).days == 1:
        current = state.current + 1
    else:
        current = 1

    return StreakState(
        current=current,
        longest=max(state.longest, current),
        last_study_date=today,
    )


def current_streak(state: StreakState, today: date) -> int:
    """Streak as of `today`: zero once a full day has been missed."""
    if state.last_study_date is None:
        return 0
    if (today - state.last_study_date).days > 1:
        return 0
    return state.current
