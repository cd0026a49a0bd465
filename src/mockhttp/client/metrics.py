"""Hit/pass-through counters shared by the client wrappers."""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


@dataclass
class MockMetrics:
    """Track mock client metrics."""

    total_requests: int = 0
    mocked_requests: int = 0
    passed_through: int = 0
    errors: int = 0  # Pass-throughs caused by a MockError other than NotFoundError
    start_time: str = field(default_factory=lambda: datetime.now().isoformat())
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_mocked(self):
        with self._lock:
            self.total_requests += 1
            self.mocked_requests += 1

    def record_passed_through(self, error: bool = False):
        with self._lock:
            self.total_requests += 1
            self.passed_through += 1
            if error:
                self.errors += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        with self._lock:
            total = self.total_requests
            mocked = self.mocked_requests
            passed = self.passed_through
            errors = self.errors

        uptime_seconds = (datetime.now() - datetime.fromisoformat(self.start_time)).total_seconds()
        return {
            'total_requests': total,
            'mocked_requests': mocked,
            'passed_through': passed,
            'errors': errors,
            'mock_rate': round((mocked / total * 100) if total > 0 else 0, 2),
            'uptime_seconds': round(uptime_seconds, 2),
            'start_time': self.start_time
        }
