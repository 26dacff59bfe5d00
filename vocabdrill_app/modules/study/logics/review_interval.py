"""
Review Interval Calculator - pure spaced-repetition arithmetic.

A simplified SM-2 variant over integer ease factors stored x10
(25 means 2.5). No database or Flask access.
"""

import math
from datetime import date, datetime, timedelta
from typing import NamedTuple, Optional

from vocabdrill_app.utils.time_utils import study_day_start, study_today


class ReviewConstants:
    """Constants for the review schedule."""
    DEFAULT_EF = 25
    MIN_EF = 13
    MAX_EF = 25
    EF_SUCCESS_STEP = 1
    EF_FAILURE_STEP = 2
    BOOTSTRAP_INTERVAL_DAYS = 3  # first success of a word
    RETRY_INTERVAL_DAYS = 1  # any failure: retry tomorrow


class ReviewSchedule(NamedTuple):
    ef: int
    interval: int
    next_review: datetime


def next_ef(success: bool, ef: int) -> int:
    if success:
        return min(ReviewConstants.MAX_EF, ef + ReviewConstants.EF_SUCCESS_STEP)
    return max(ReviewConstants.MIN_EF, ef - ReviewConstants.EF_FAILURE_STEP)


def next_interval(success: bool, ef: int, interval: int, is_new: bool = False) -> int:
    """
    New interval in days.

    ``ef`` is the ease factor before this answer is applied.
    """
    if not success:
        return ReviewConstants.RETRY_INTERVAL_DAYS
    if is_new or interval <= 0:
        return ReviewConstants.BOOTSTRAP_INTERVAL_DAYS
    return math.ceil(interval * ef / 10)


def compute_next(
    success: bool,
    ef: Optional[int],
    interval: Optional[int],
    is_new: bool = False,
    today: Optional[date] = None,
    rollover_hour: int = 0,
    tz_name: str = 'UTC'
) -> ReviewSchedule:
    """
    Compute the schedule after one answer.

    Args:
        success: Whether the answer was correct
        ef: Current ease factor x10 (None means a word without progress)
        interval: Current interval in days
        is_new: First-ever attempt of the word
        today: Current study date (defaults to the wall clock)
        rollover_hour: Local hour at which a study day starts
        tz_name: Study timezone

    Returns:
        ReviewSchedule(ef, interval, next_review) where next_review is the
        UTC start of the study day ``today + interval``.
    """
    ef = ReviewConstants.DEFAULT_EF if ef is None else int(ef)
    interval = 0 if interval is None else max(0, int(interval))

    new_interval = next_interval(success, ef, interval, is_new)
    new_ef = next_ef(success, ef)

    if today is None:
        today = study_today(rollover_hour=rollover_hour, tz_name=tz_name)
    due_date = today + timedelta(days=new_interval)

    return ReviewSchedule(
        ef=new_ef,
        interval=new_interval,
        next_review=study_day_start(due_date, rollover_hour, tz_name),
    )
