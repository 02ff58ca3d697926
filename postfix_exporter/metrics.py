import logging
import threading
from pathlib import Path
from typing import Dict, List, Sequence

from prometheus_client import Gauge
from prometheus_client.metrics_core import Metric

from .spool import count_dir

logger = logging.getLogger(__name__)

QUEUE_NAMES: Sequence[str] = (
    "incoming",
    "active",
    "maildrop",
    "deferred",
    "hold",
    "bounce",
)

QUEUE_HELP: Dict[str, str] = {
    "incoming": "length of incoming mail queue",
    "active": "length of active mail queue",
    "maildrop": "length of maildrop queue",
    "deferred": "length of deferred mail queue",
    "hold": "length of hold mail queue",
    "bounce": "length of bounce mail queue",
}


class QueueCollector:
    """
    Prometheus collector exposing the size of each Postfix queue plus a total.

    Every collect() re-measures the queue directories under a lock, so
    concurrent scrapes never see gauges from two different cycles.
    """

    def __init__(self, queue_root, namespace: str = "postfix"):
        self.queue_root = Path(queue_root)
        self.namespace = namespace
        self._lock = threading.Lock()
        # Not registered on their own; the registry only sees this collector.
        self.total = Gauge(
            "total_queue_length",
            "length of mail queue",
            namespace=namespace,
            registry=None,
        )
        self.gauges: Dict[str, Gauge] = {
            name: Gauge(
                f"{name}_queue_length",
                QUEUE_HELP[name],
                namespace=namespace,
                registry=None,
            )
            for name in QUEUE_NAMES
        }

    def _all_gauges(self) -> List[Gauge]:
        return [self.total, *self.gauges.values()]

    def describe(self) -> List[Metric]:
        return [desc for gauge in self._all_gauges() for desc in gauge.describe()]

    def scrape(self) -> Dict[str, float]:
        """
        Measure every queue and update the gauges. Caller must hold the lock.
        """
        counts: Dict[str, float] = {}
        total_length = 0.0
        for name in QUEUE_NAMES:
            path = self.queue_root / name
            try:
                length = count_dir(path)
            except OSError as exc:
                logger.error("Error scraping %s queue at %s: %s", name, path, exc)
                length = 0.0
            self.gauges[name].set(length)
            counts[name] = length
            total_length += length
        self.total.set(total_length)
        return counts

    def collect(self) -> List[Metric]:
        with self._lock:
            self.scrape()
            return [metric for gauge in self._all_gauges() for metric in gauge.collect()]

    def snapshot(self) -> Dict[str, float]:
        """
        Run one locked cycle and return the counts with the total under "total".
        """
        with self._lock:
            counts = self.scrape()
            counts["total"] = sum(counts.values())
            return counts
