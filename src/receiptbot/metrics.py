"""Per-invocation timing metrics."""

import time


class MetricsCollector:
    """Collects named stage timings for one email."""

    def __init__(self):
        self._start_times: dict[str, float] = {}
        self.timings: dict[str, float] = {}

    def start_timer(self, name: str) -> None:
        """Start a named timer."""
        self._start_times[name] = time.perf_counter()

    def stop_timer(self, name: str) -> float:
        """Stop a named timer, record and return elapsed time."""
        if name not in self._start_times:
            return 0.0
        elapsed = time.perf_counter() - self._start_times.pop(name)
        self.timings[name] = self.timings.get(name, 0.0) + elapsed
        return elapsed

    def create_email_metrics(self, num_images: int = 0, num_items: int = 0) -> dict:
        """Build the ProcessingMetrics fields from recorded timings."""
        parse_time = self.timings.get("parse", 0.0)
        extraction_time = self.timings.get("extraction", 0.0)
        ledger_time = self.timings.get("ledger", 0.0)

        return {
            "total_time_sec": parse_time + extraction_time + ledger_time,
            "parse_time_sec": parse_time,
            "extraction_time_sec": extraction_time,
            "ledger_time_sec": ledger_time,
            "num_images": num_images,
            "num_items": num_items,
        }
