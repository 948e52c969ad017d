"""
Metrics collection for the placement service
Simple in-process counters and gauges
"""

import time
from typing import Dict, Any
from datetime import datetime, timezone

TICKS = "placement.ticks"
TRACKING_LOST = "placement.tracking_lost"
ACCURACY_RESETS = "placement.accuracy_resets"
CONFIRMATIONS = "placement.confirmations"
COMMITS = "placement.commits"
COMMIT_FAILURES = "placement.commit_failures"
CONFIGURATION_ERRORS = "placement.configuration_errors"
MANUAL_PLACEMENTS = "placement.manual_placements"
STABLE_SECONDS = "placement.stable_seconds"


class SimpleMetrics:
    """Simple metrics collector for placement attempts"""

    def __init__(self):
        self.counters: Dict[str, int] = {}
        self.gauges: Dict[str, float] = {}
        self.start_time = time.time()

    def increment_counter(self, name: str, value: int = 1):
        """Increment a counter metric"""
        self.counters[name] = self.counters.get(name, 0) + value

    def set_gauge(self, name: str, value: float):
        """Set a gauge metric value"""
        self.gauges[name] = value

    def counter(self, name: str) -> int:
        return self.counters.get(name, 0)

    def get_metrics(self) -> Dict[str, Any]:
        """Get all metrics"""
        return {
            'counters': dict(self.counters),
            'gauges': dict(self.gauges),
            'uptime_seconds': time.time() - self.start_time,
            'timestamp': datetime.now(timezone.utc).isoformat()
        }


# Global metrics instance
metrics = SimpleMetrics()
