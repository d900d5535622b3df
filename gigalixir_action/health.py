import time
from typing import Callable

from loguru import logger

from .errors import HealthTimeoutError
from .gigalixir import GigalixirSession

DEFAULT_INTERVAL = 10
DEFAULT_MAX_ATTEMPTS = 60
TIMEOUT_MESSAGE = "Taking too long for new release to deploy"


def is_next_release_healthy(session: GigalixirSession, app: str, release: int) -> bool:
    status = session.pod_status(app)
    healthy = status.healthy_count(release)
    logger.info(
        f"Release {release}: {healthy} healthy pod(s), {status.replicas_desired} desired"
    )
    return healthy >= status.replicas_desired


class ReleaseWatcher:
    """Waits for the release after ``baseline`` to have enough healthy pods.

    The app is scaled to ``replicas`` once, then ``ps`` is polled. After each
    unhealthy poll numbered at most ``max_attempts`` the watcher sleeps
    ``interval`` seconds and polls again, so the worst case is
    ``max_attempts + 1`` polls before :class:`HealthTimeoutError`.
    """

    def __init__(
        self,
        session: GigalixirSession,
        interval: float = DEFAULT_INTERVAL,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        replicas: int = 1,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session
        self.interval = interval
        self.max_attempts = max_attempts
        self.replicas = replicas
        self._sleep = sleep

    def wait_for_new_release(self, app: str, baseline: int) -> int:
        """Return the number of polls it took for ``baseline + 1`` to be healthy."""
        target = baseline + 1
        self.session.scale(app, self.replicas)

        attempt = 1
        while True:
            if is_next_release_healthy(self.session, app, target):
                logger.success(f"Release {target} is healthy after {attempt} attempt(s)")
                return attempt
            if attempt > self.max_attempts:
                raise HealthTimeoutError(TIMEOUT_MESSAGE)

            logger.info(f"Waiting {self.interval} seconds...")
            self._sleep(self.interval)
            attempt += 1
