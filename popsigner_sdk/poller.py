"""
Deployment status polling.

There is no push channel for deployment progress, so watching a deployment
means fetching it at a fixed interval until it reaches ``completed`` or
``failed``. :class:`DeploymentPoller` is an iterator of snapshots that can be
stopped from another thread; stopping also interrupts a pending wait.
"""
import logging
import threading
from typing import Any, Callable, Iterator, Optional

from .models import Deployment

logger = logging.getLogger(__name__)


class DeploymentPoller:
    """
    Iterate over successive snapshots of one deployment.

    Each iteration fetches the deployment and yields it. Iteration ends after
    the first snapshot when ``watch`` is False, after a terminal snapshot, or
    once :meth:`stop` has been called. A failed fetch raises out of the
    iterator and ends it; nothing is retried.

    Example::

        for deployment in client.deployments.watch(deployment_id):
            print(deployment.status, deployment.current_stage)
    """

    def __init__(
        self,
        deployments: Any,
        deployment_id: Any,
        interval: float = 2.0,
        watch: bool = True,
        wait: Optional[Callable[[float], bool]] = None
    ):
        """
        Args:
            deployments: Object with a ``get(deployment_id) -> Deployment`` method
            deployment_id: Deployment to follow
            interval: Seconds to wait between fetches
            watch: When False, fetch once and stop
            wait: ``wait(seconds)`` suspension primitive; returns True if the
                wait was cut short by a stop. Defaults to waiting on the
                poller's stop event.
        """
        if interval < 0:
            raise ValueError(f"interval must not be negative (got: {interval})")

        self._deployments = deployments
        self.deployment_id = deployment_id
        self.interval = interval
        self.watch = watch
        self._stop_event = threading.Event()
        self._wait = wait or self._stop_event.wait
        self._lock = threading.Lock()
        self.fetch_count = 0
        self.last: Optional[Deployment] = None

    def stop(self) -> None:
        """Stop watching. Safe to call from any thread, and more than once."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def _fetch(self) -> Deployment:
        with self._lock:
            self.fetch_count += 1
        deployment = self._deployments.get(self.deployment_id)
        self.last = deployment
        logger.debug(
            f"Deployment {self.deployment_id}: status={deployment.status.value} "
            f"stage={deployment.current_stage or '-'} (fetch #{self.fetch_count})"
        )
        return deployment

    def __iter__(self) -> Iterator[Deployment]:
        while not self.stopped:
            deployment = self._fetch()
            yield deployment

            if deployment.is_terminal:
                logger.info(f"Deployment {self.deployment_id} finished with status {deployment.status.value}")
                return
            if not self.watch or self.stopped:
                return

            if self._wait(self.interval):
                # woken by stop()
                return

    def run(self, callback: Optional[Callable[[Deployment], Any]] = None) -> Optional[Deployment]:
        """
        Drive the poller to completion.

        Args:
            callback: Called with every snapshot

        Returns:
            The last snapshot fetched, or None if stopped before the first fetch
        """
        for deployment in self:
            if callback is not None:
                callback(deployment)
        return self.last
