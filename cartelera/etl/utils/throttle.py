"""Fixed-delay request throttle for scraped sources."""

import logging
import time

logger = logging.getLogger(__name__)


class RequestThrottle:
    """Pauses a fixed delay before every request it guards.

    The pause is a self-imposed courtesy towards sites without an API:
    it does not react to server feedback and never backs off.

    Attributes:
        min_delay: Pause before each request (seconds).
        request_count: Requests let through so far.
    """

    def __init__(self, min_delay: float) -> None:
        """Initialize throttle.

        Args:
            min_delay: Pause before each request (seconds).
        """
        if min_delay < 0:
            raise ValueError("min_delay must be >= 0")
        self.min_delay = min_delay
        self.request_count = 0

    def wait(self) -> None:
        """Block for the configured delay, then count the request."""
        if self.min_delay > 0:
            logger.debug(f"Throttle: waiting {self.min_delay:.2f}s")
            time.sleep(self.min_delay)
        self.request_count += 1
