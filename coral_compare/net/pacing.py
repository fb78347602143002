"""
Request Pacing

Consumes a sequence of work items at a configured interval. Crawl loops
iterate `policy.pace(items)` instead of sleeping inline, so the pacing
policy can change without touching extraction logic.
"""

import random
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, TypeVar

T = TypeVar("T")


@dataclass
class PacingPolicy:
    """
    Fixed interval plus random jitter between consecutive items.

    The first item is yielded immediately; every following item waits
    `interval + rng() * jitter` seconds.
    """

    interval: float = 0.0
    jitter: float = 0.0
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)
    rng: Callable[[], float] = field(default=random.random, repr=False)

    def next_delay(self) -> float:
        return max(0.0, self.interval + self.rng() * self.jitter)

    def pace(self, items: Iterable[T]) -> Iterator[T]:
        """Yield items one at a time, sleeping between them."""
        for index, item in enumerate(items):
            if index:
                delay = self.next_delay()
                if delay > 0:
                    self.sleep(delay)
            yield item

    def wait(self) -> None:
        """Sleep one interval (for loops that cannot be expressed as pace())."""
        delay = self.next_delay()
        if delay > 0:
            self.sleep(delay)


def no_pacing() -> PacingPolicy:
    """A policy that never sleeps."""
    return PacingPolicy(0.0, 0.0)
