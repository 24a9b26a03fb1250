# SPDX-License-Identifier: BUSL-1.1
"""Bounded polling of an external condition."""

import enum
import time
from typing import Callable


class PollOutcome(enum.Enum):
    SATISFIED = "satisfied"
    TIMED_OUT = "timed-out"

    @property
    def satisfied(self) -> bool:
        return self is PollOutcome.SATISFIED


def wait_for(
    predicate: Callable[[], bool],
    timeout: float = 10,
    interval: float = 1,
    errors: tuple = (),
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> PollOutcome:
    """Evaluate predicate until it holds or timeout seconds have elapsed.

    The predicate is always evaluated at least once, and never followed by a
    sleep when it succeeds. Exceptions listed in ``errors`` count as a false
    evaluation; anything else propagates. A timeout is returned, not raised.
    """
    start = clock()
    while True:
        try:
            ready = bool(predicate())
        except errors:
            ready = False
        if ready:
            return PollOutcome.SATISFIED
        if clock() - start >= timeout:
            return PollOutcome.TIMED_OUT
        sleep(interval)
