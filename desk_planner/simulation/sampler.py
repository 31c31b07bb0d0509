"""
Day Sampler

Draws the scheduled in-office days for one employee: k distinct weekdays,
every one of the C(5, k) subsets equally likely.
"""

import random

from .entities import WEEKDAYS, DAYS_PER_WEEK


def sample_days(days_in_office: int, rng: random.Random) -> tuple:
    """
    Pick `days_in_office` distinct weekdays without replacement.

    Runs a partial Fisher-Yates shuffle from the back of the week: each
    step swaps the last open slot with a uniformly chosen slot at or
    before it, then closes that slot. After 5 - k steps the first k
    slots hold a uniformly random subset.
    """
    if days_in_office <= 0:
        return ()
    if days_in_office >= DAYS_PER_WEEK:
        return WEEKDAYS

    days = list(WEEKDAYS)
    for i in range(DAYS_PER_WEEK - 1, days_in_office - 1, -1):
        j = rng.randrange(i + 1)
        days[i], days[j] = days[j], days[i]
    return tuple(days[:days_in_office])
