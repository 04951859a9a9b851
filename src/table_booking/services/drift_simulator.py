"""
Background capacity drift to make availability look live in demos.
"""
import threading
from typing import Optional

from loguru import logger

from .capacity_policy import DriftPolicy, random_drift_policy
from .reservation_store import ReservationStore


class DriftSimulator:
    """
    Periodically applies a drift policy to a reservation store.

    Runs on a daemon thread; ``stop()`` wakes it immediately rather than
    waiting for the current interval to elapse.
    """

    def __init__(
        self,
        store: ReservationStore,
        interval_seconds: float = 30.0,
        policy: Optional[DriftPolicy] = None
    ):
        """
        Initialize the simulator.

        Args:
            store: Store whose capacities drift
            interval_seconds: Seconds between ticks
            policy: Drift policy, defaults to a 10% chance of losing up to 4 seats
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self.store = store
        self.interval_seconds = interval_seconds
        self.policy = policy or random_drift_policy()

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> int:
        """Apply one drift tick now. Returns the number of slots changed."""
        changed = self.store.apply_drift(self.policy)
        self.ticks += 1
        return changed

    def start(self) -> None:
        """Start ticking in the background. No-op if already running."""
        if self.is_running:
            logger.warning("Drift simulator already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="capacity-drift",
            daemon=True
        )
        self._thread.start()
        logger.info(f"Drift simulator started (interval={self.interval_seconds}s)")

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Stop the background thread and wait for it to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.info(f"Drift simulator stopped after {self.ticks} ticks")

    def _run(self) -> None:
        # First tick happens immediately
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except Exception:
                logger.exception("Drift tick failed")
            self._stop_event.wait(self.interval_seconds)

    def __enter__(self) -> "DriftSimulator":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
